from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from quickhire.exceptions import InvalidReferenceError, PayloadValidationError
from quickhire.models.application import Application
from quickhire.schemas.application import ApplicationCreate, ApplicationOut
from quickhire.services.job_query import digits_to_int, require_job, store_errors
from quickhire.services.validation import validate_application_payload

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_job_reference(raw: Any) -> int:
    """Read ``job_id`` from an application payload.

    JSON numbers with an integral value and strings of decimal digits are
    accepted; anything else is rejected before the job lookup happens.
    """
    if isinstance(raw, bool):
        raise InvalidReferenceError("Valid job_id is required.")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str) and _INTEGER.fullmatch(raw.strip()):
        token = raw.strip()
        value = digits_to_int(token.lstrip("+-"))
        return -value if token.startswith("-") else value
    raise InvalidReferenceError("Valid job_id is required.")


def submit_application(db: Session, payload: Any) -> ApplicationOut:
    data = payload if isinstance(payload, Mapping) else {}
    job_id = parse_job_reference(data.get("job_id"))
    # Job existence is checked before field validation so a missing job always reports 404.
    require_job(db, job_id)

    result = validate_application_payload(data)
    if not result.is_valid:
        logger.info("Rejected application for job %s: %s", job_id, "; ".join(result.errors))
        raise PayloadValidationError("Invalid application payload.", result.errors, result.field_errors)

    record = ApplicationCreate(
        job_id=job_id,
        name=data["name"],
        email=data["email"],
        resume_link=data["resume_link"],
        cover_note=data["cover_note"],
    )
    application = Application(**record.model_dump())
    with store_errors():
        db.add(application)
        db.commit()
        db.refresh(application)
    logger.info("Application %s submitted for job %s", application.id, job_id)
    return ApplicationOut.model_validate(application)
