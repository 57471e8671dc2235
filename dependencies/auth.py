from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import requests

from core.errors import handle_backend_error
from models.user import ConsoleUser
from services.backend_client import fetch_session_user


bearer_scheme = HTTPBearer()


# ============================================================
# AUTH DECODING (token → backend session endpoint)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> ConsoleUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user = fetch_session_user(credentials.credentials)
    except (requests.RequestException, ValueError) as e:
        raise handle_backend_error(e, "Failed to load session")

    if user is None:
        raise unauthorized

    return user


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(resource: str, action: str):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real permission logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(resource, action)


# ============================================================
# OPTIONAL AUTHENTICATION (for hybrid endpoints)
# ============================================================
def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(HTTPBearer(auto_error=False)),
) -> Optional[ConsoleUser]:
    """
    Returns ConsoleUser if a valid token was provided, None otherwise.
    Does not raise when the token is missing or rejected.
    """
    if not credentials:
        return None

    try:
        return get_current_user(credentials)
    except HTTPException as e:
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            return None
        raise
