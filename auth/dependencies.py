# auth/dependencies.py

from typing import Collection, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from auth.jwt_handler import verify_token
from config import Settings, get_app_settings
from models.user import Identity, Role

STAFF_ROLES = frozenset(Role)
ADMIN_ONLY = frozenset({Role.ADMIN})

bearer_scheme = HTTPBearer(auto_error=False)


class AuthenticationError(Exception):
    """Missing, malformed, expired or badly signed credential."""


def authenticate(credential: Optional[str], settings: Settings) -> Identity:
    if not credential:
        raise AuthenticationError("missing credential")
    payload = verify_token(credential, settings)
    if not payload:
        raise AuthenticationError("invalid credential")
    try:
        return Identity(id=payload.get("sub"), username=payload.get("username"), role=payload.get("role"))
    except ValidationError as exc:
        raise AuthenticationError("credential is missing identity claims") from exc


def authorize(identity: Identity, allowed_roles: Collection[Role]) -> bool:
    return identity.role in allowed_roles


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Identity:
    token = credentials.credentials if credentials else None
    try:
        return authenticate(token, settings)
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_roles(allowed_roles: frozenset):
    """Build a dependency that only lets identities with one of `allowed_roles` through."""

    async def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not authorize(identity, allowed_roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: insufficient rights")
        return identity

    return dependency
