from quickhire.schemas.application import ApplicationCreate, ApplicationOut
from quickhire.schemas.job import JobCreate, JobMetaOut, JobOut

__all__ = [
    "JobCreate",
    "JobOut",
    "JobMetaOut",
    "ApplicationCreate",
    "ApplicationOut",
]
