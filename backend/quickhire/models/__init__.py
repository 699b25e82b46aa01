from quickhire.models.application import Application
from quickhire.models.job import Job

__all__ = ["Job", "Application"]
