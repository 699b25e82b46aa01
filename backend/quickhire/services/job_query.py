"""Read side of the job board: filtered listing, facet metadata and lookup.

Every user-supplied value reaches the database as a bound parameter. Filter
criteria are collected by :class:`JobFilterBuilder` as SQLAlchemy predicates in
insertion order and joined with AND; nothing is formatted into SQL text.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Query, Session

from quickhire.exceptions import InvalidJobIdError, JobNotFoundError, StoreUnavailableError
from quickhire.models.application import Application
from quickhire.models.job import Job
from quickhire.schemas.job import JobMetaOut, JobOut

LIKE_ESCAPE = "\\"
_POSITIVE_INT = re.compile(r"[0-9]+")
# Largest id a 64-bit INTEGER primary key can hold.
MAX_JOB_ID = 2**63 - 1


class SortMode(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    APPLICATIONS = "applications"

    @classmethod
    def parse(cls, value: str | None) -> "SortMode":
        token = (value or "").strip().lower()
        try:
            return cls(token)
        except ValueError:
            return cls.NEWEST


def _clean(value: str | None) -> str:
    return (value or "").strip()


@dataclass(frozen=True)
class JobCriteria:
    search: str = ""
    category: str = ""
    location: str = ""
    employment_type: str = ""
    sort: SortMode = SortMode.NEWEST

    @classmethod
    def from_params(
        cls,
        search: str | None = None,
        category: str | None = None,
        location: str | None = None,
        employment_type: str | None = None,
        sort: str | None = None,
    ) -> "JobCriteria":
        return cls(
            search=_clean(search),
            category=_clean(category),
            location=_clean(location),
            employment_type=_clean(employment_type),
            sort=SortMode.parse(sort),
        )


@dataclass
class JobListing:
    jobs: list[JobOut] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.jobs)


def escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class JobFilterBuilder:
    """Ordered list of predicates, AND-ed together when applied."""

    def __init__(self) -> None:
        self._predicates: list[Any] = []

    def __len__(self) -> int:
        return len(self._predicates)

    def contains_text(self, term: str, *columns) -> "JobFilterBuilder":
        if not term:
            return self
        pattern = f"%{escape_like(term)}%"
        self._predicates.append(or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns)))
        return self

    def equals(self, column, value: str) -> "JobFilterBuilder":
        if value:
            self._predicates.append(column == value)
        return self

    def apply(self, query: Query) -> Query:
        if not self._predicates:
            return query
        return query.filter(and_(*self._predicates))

    @classmethod
    def for_criteria(cls, criteria: JobCriteria) -> "JobFilterBuilder":
        return (
            cls()
            .contains_text(criteria.search, Job.title, Job.company, Job.description)
            .equals(Job.category, criteria.category)
            .equals(Job.location, criteria.location)
            .equals(Job.employment_type, criteria.employment_type)
        )


@contextmanager
def store_errors() -> Iterator[None]:
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise StoreUnavailableError() from exc


def _application_count():
    return func.count(Application.id).label("application_count")


def _jobs_with_counts(db: Session, application_count) -> Query:
    return (
        db.query(Job, application_count)
        .outerjoin(Application, Application.job_id == Job.id)
        .group_by(Job.id)
    )


def _order_clauses(sort: SortMode, application_count) -> tuple:
    if sort is SortMode.OLDEST:
        return (Job.created_at.asc(), Job.id.asc())
    if sort is SortMode.APPLICATIONS:
        return (application_count.desc(), Job.created_at.desc(), Job.id.desc())
    return (Job.created_at.desc(), Job.id.desc())


def to_job_out(job: Job, application_count: int | None = 0) -> JobOut:
    return JobOut.model_validate(job).model_copy(update={"application_count": int(application_count or 0)})


def build_job_query(db: Session, criteria: JobCriteria) -> Query:
    application_count = _application_count()
    query = JobFilterBuilder.for_criteria(criteria).apply(_jobs_with_counts(db, application_count))
    return query.order_by(*_order_clauses(criteria.sort, application_count))


def list_jobs(db: Session, criteria: JobCriteria | None = None) -> JobListing:
    criteria = criteria or JobCriteria()
    with store_errors():
        rows = build_job_query(db, criteria).all()
    return JobListing(jobs=[to_job_out(job, count) for job, count in rows])


def _distinct_values(db: Session, column) -> list[str]:
    return [value for (value,) in db.query(column).distinct().order_by(column.asc()).all()]


def list_job_meta(db: Session) -> JobMetaOut:
    with store_errors():
        return JobMetaOut(
            categories=_distinct_values(db, Job.category),
            locations=_distinct_values(db, Job.location),
            employment_types=_distinct_values(db, Job.employment_type),
        )


def digits_to_int(digits: str) -> int:
    """Convert a decimal digit string, mapping anything past the id range to MAX_JOB_ID + 1."""
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(MAX_JOB_ID)):
        return MAX_JOB_ID + 1
    return int(significant)


def parse_job_id(raw: Any) -> int:
    if isinstance(raw, bool):
        raise InvalidJobIdError()
    if isinstance(raw, int):
        job_id = raw
    else:
        token = str(raw).strip() if raw is not None else ""
        if not _POSITIVE_INT.fullmatch(token):
            raise InvalidJobIdError()
        job_id = digits_to_int(token)
    if job_id <= 0:
        raise InvalidJobIdError()
    return job_id


def _storable_id(job_id: int) -> bool:
    return 1 <= job_id <= MAX_JOB_ID


def get_job(db: Session, job_id: int) -> JobOut:
    if not _storable_id(job_id):
        raise JobNotFoundError()
    application_count = _application_count()
    with store_errors():
        row = _jobs_with_counts(db, application_count).filter(Job.id == job_id).first()
    if not row:
        raise JobNotFoundError()
    job, count = row
    return to_job_out(job, count)


def require_job(db: Session, job_id: int) -> Job:
    if not _storable_id(job_id):
        raise JobNotFoundError()
    with store_errors():
        job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise JobNotFoundError()
    return job
