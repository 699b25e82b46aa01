from __future__ import annotations

import hmac

from fastapi import Header

from quickhire.config import settings
from quickhire.exceptions import AdminAccessRequired

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def check_admin_token(provided: str | None, expected: str | None = None) -> bool:
    expected = settings.admin_token if expected is None else expected
    if not expected:
        return True
    if not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_admin(x_admin_token: str | None = Header(default=None, alias=ADMIN_TOKEN_HEADER)) -> None:
    if not check_admin_token(x_admin_token):
        raise AdminAccessRequired()
