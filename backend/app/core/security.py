"""Admin gate: a single shared secret, no user accounts.

The secret is compared in exactly one place, ``verify_admin_secret``. A
successful comparison yields an ``AdminSession`` which the booking and menu
services require for every admin-only operation.
"""

from __future__ import annotations

import logging
import secrets
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from app.core.config import Settings, SettingsDep

logger = logging.getLogger("auth")


class AdminAuthError(Exception):
    """Missing or incorrect admin credential."""


class AdminSession:
    """Proof that the caller presented the admin secret.

    Only ``authenticate_admin`` creates these; services accept one as an
    argument instead of re-checking credentials themselves.
    """

    __slots__ = ("client_ip",)

    def __init__(self, client_ip: str = "unknown"):
        self.client_ip = client_ip

    def __repr__(self) -> str:
        return f"<AdminSession from {self.client_ip}>"


def verify_admin_secret(candidate: Optional[str], secret: Optional[str]) -> bool:
    """Constant-time exact comparison. An unset secret never matches."""
    if not secret or candidate is None:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def authenticate_admin(
    candidate: Optional[str], settings: Settings, client_ip: str = "unknown"
) -> AdminSession:
    """Exchange the shared secret for an AdminSession."""
    if not verify_admin_secret(candidate, settings.admin_password):
        raise AdminAuthError("Unauthorized")
    return AdminSession(client_ip=client_ip)


def bearer_token(request: Request) -> Optional[str]:
    """Extract the value after ``Bearer `` without trimming it."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[len("Bearer "):]


async def get_admin_session(request: Request, settings: SettingsDep) -> AdminSession:
    """Dependency: require the admin secret as a Bearer credential."""
    client_ip = request.client.host if request.client else "unknown"
    try:
        return authenticate_admin(bearer_token(request), settings, client_ip)
    except AdminAuthError:
        logger.warning(f"Rejected admin request: {request.method} {request.url.path} - Client: {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


RequireAdmin = Annotated[AdminSession, Depends(get_admin_session)]
