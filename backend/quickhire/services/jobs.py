from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from quickhire.exceptions import PayloadValidationError
from quickhire.models.job import Job
from quickhire.schemas.job import JobCreate, JobOut
from quickhire.services.job_query import require_job, store_errors, to_job_out
from quickhire.services.validation import JOB_FIELDS, validate_job_payload

logger = logging.getLogger(__name__)


def create_job(db: Session, payload: Any) -> JobOut:
    result = validate_job_payload(payload)
    if not result.is_valid:
        logger.info("Rejected job payload: %s", "; ".join(result.errors))
        raise PayloadValidationError("Invalid job payload.", result.errors, result.field_errors)

    data = JobCreate(**{key: payload[key] for key, _ in JOB_FIELDS})
    job = Job(**data.model_dump())
    with store_errors():
        db.add(job)
        db.commit()
        db.refresh(job)
    logger.info("Created job %s (%s at %s)", job.id, job.title, job.company)
    return to_job_out(job, 0)


def delete_job(db: Session, job_id: int) -> None:
    job = require_job(db, job_id)
    with store_errors():
        db.delete(job)
        db.commit()
    logger.info("Deleted job %s and its applications", job_id)
