from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from quickhire.api import applications, jobs
from quickhire.bootstrap import seed_sample_jobs
from quickhire.config import settings
from quickhire.database import Base, engine, get_db
from quickhire.exceptions import PayloadValidationError, QuickHireError, StoreUnavailableError
from quickhire.logging_config import setup_logging
from quickhire.models import application, job  # noqa: F401
from quickhire.services.job_query import store_errors

REQUEST_ID_HEADER = "X-Request-ID"
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    settings.ensure_directories()
    Base.metadata.create_all(bind=engine)
    if settings.seed_sample_data:
        seed_sample_jobs(engine)
    logger.info("%s API ready (%s)", settings.app_name, settings.environment)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[jobs.TOTAL_COUNT_HEADER, REQUEST_ID_HEADER],
)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request.state.request_id
    return response


def _error_response(request: Request, status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers={REQUEST_ID_HEADER: _request_id(request)})


@app.exception_handler(PayloadValidationError)
async def payload_validation_handler(request: Request, exc: PayloadValidationError) -> JSONResponse:
    return _error_response(
        request,
        exc.status_code,
        {"message": exc.message, "errors": exc.errors, "fields": exc.fields},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(
        "Store unavailable while handling %s %s",
        request.method,
        request.url.path,
        exc_info=exc.__cause__ or exc,
        extra={"request_id": _request_id(request)},
    )
    return _error_response(request, exc.status_code, {"message": exc.message})


@app.exception_handler(QuickHireError)
async def domain_error_handler(request: Request, exc: QuickHireError) -> JSONResponse:
    return _error_response(request, exc.status_code, {"message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error while handling %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
        extra={"request_id": _request_id(request)},
    )
    return _error_response(request, 500, {"message": "Internal server error."})


@app.get("/api/health")
def health(db: Session = Depends(get_db)) -> dict[str, bool]:
    with store_errors():
        db.execute(text("SELECT 1"))
    return {"ok": True}


app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
