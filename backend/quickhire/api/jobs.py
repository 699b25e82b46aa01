from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from quickhire.auth import require_admin
from quickhire.database import get_db
from quickhire.schemas.job import JobMetaOut, JobOut
from quickhire.services import jobs as job_service
from quickhire.services.job_query import JobCriteria, get_job, list_job_meta, list_jobs, parse_job_id


router = APIRouter()

TOTAL_COUNT_HEADER = "X-Total-Count"


@router.get("", response_model=list[JobOut])
def search_jobs(
    response: Response,
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
    location: str | None = Query(default=None),
    employment_type: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[JobOut]:
    criteria = JobCriteria.from_params(
        search=search,
        category=category,
        location=location,
        employment_type=employment_type,
        sort=sort,
    )
    listing = list_jobs(db, criteria)
    response.headers[TOTAL_COUNT_HEADER] = str(listing.total)
    return listing.jobs


@router.get("/meta", response_model=JobMetaOut)
def job_meta(db: Session = Depends(get_db)) -> JobMetaOut:
    return list_job_meta(db)


@router.get("/{job_id}", response_model=JobOut)
def job_detail(job_id: str, db: Session = Depends(get_db)) -> JobOut:
    return get_job(db, parse_job_id(job_id))


@router.post(
    "",
    response_model=JobOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_job(payload: Any = Body(default=None), db: Session = Depends(get_db)) -> JobOut:
    return job_service.create_job(db, payload)


@router.delete(
    "/{job_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_admin)],
)
def delete_job(job_id: str, db: Session = Depends(get_db)) -> Response:
    job_service.delete_job(db, parse_job_id(job_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
