from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from quickhire.database import get_db
from quickhire.schemas.application import ApplicationOut
from quickhire.services.applications import submit_application


router = APIRouter()


@router.post("", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def create_application(payload: Any = Body(default=None), db: Session = Depends(get_db)) -> ApplicationOut:
    return submit_application(db, payload)
