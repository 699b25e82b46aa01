from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from quickhire.database import Base


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_jobs_created_at", "created_at"),
        Index("idx_jobs_category", "category"),
        Index("idx_jobs_location", "location"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    category = Column(String(120), nullable=False)
    description = Column(Text, nullable=False)
    employment_type = Column(String(50), nullable=False)
    salary_range = Column(String(120), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
