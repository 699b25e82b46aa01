from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SAMPLE_JOBS: list[dict[str, str]] = [
    {
        "title": "Senior Product Designer",
        "company": "Orbit Labs",
        "location": "Remote",
        "category": "Design",
        "description": (
            "Lead end-to-end product design across the QuickHire hiring funnel. You will work with product, "
            "engineering, and growth teams to create clear user journeys, polished UI systems, and measurable "
            "conversion improvements."
        ),
        "employment_type": "Full-time",
        "salary_range": "$95k - $120k",
    },
    {
        "title": "Frontend Engineer",
        "company": "Northstar Commerce",
        "location": "New York, USA",
        "category": "Engineering",
        "description": (
            "Build performant candidate and employer experiences using React and modern frontend tooling. You will "
            "collaborate closely with backend engineers to ship job discovery, application, and employer dashboard "
            "features."
        ),
        "employment_type": "Full-time",
        "salary_range": "$110k - $140k",
    },
    {
        "title": "Growth Marketing Manager",
        "company": "Aster Works",
        "location": "London, UK",
        "category": "Marketing",
        "description": (
            "Own campaign strategy across paid, lifecycle, and content channels. You will analyze funnel performance, "
            "launch experiments, and work with design to sharpen QuickHire's employer acquisition motion."
        ),
        "employment_type": "Contract",
        "salary_range": "$70k - $90k",
    },
    {
        "title": "Customer Success Lead",
        "company": "Brightlane HR",
        "location": "Dhaka, Bangladesh",
        "category": "Operations",
        "description": (
            "Support hiring teams from onboarding through long-term expansion. You will improve help resources, "
            "partner with product on customer issues, and shape operational processes for a growing recruiting "
            "platform."
        ),
        "employment_type": "Full-time",
        "salary_range": "$45k - $60k",
    },
]


def seed_sample_jobs(engine: Engine) -> int:
    """Insert the sample listings into an empty jobs table. Returns rows inserted."""
    with engine.begin() as conn:
        existing = conn.execute(text("SELECT COUNT(*) FROM jobs")).scalar_one()
        if existing:
            return 0
        conn.execute(
            text(
                """
                INSERT INTO jobs (title, company, location, category, description, employment_type, salary_range)
                VALUES (:title, :company, :location, :category, :description, :employment_type, :salary_range)
                """
            ),
            SAMPLE_JOBS,
        )
    logger.info("Seeded %d sample jobs", len(SAMPLE_JOBS))
    return len(SAMPLE_JOBS)
