# services/backend_client.py

"""
Calls to the school e-voting REST backend.

Transport failures raise `requests.RequestException` and unusable payloads
raise `ValueError`; routers turn both into HTTP errors with
core.errors.handle_backend_error.
"""

import time
from typing import Optional

import requests

from core.cache import cached
from core.config import settings
from core.logging_config import logger
from models.election import ElectionRecord
from models.user import ConsoleUser


def backend_url(path: str) -> str:
    """Join the configured backend base URL and an API path."""
    base = (settings.BACKEND_API_URL or "").rstrip("/")
    normalized_path = path if path.startswith("/") else f"/{path}"
    return f"{base}{normalized_path}"


# -----------------------------------------------------
# Session
# -----------------------------------------------------
def fetch_session_user(token: str) -> Optional[ConsoleUser]:
    """
    Resolve a bearer token to the signed-in console user.
    Returns None when the backend answers without a user payload.
    """
    response = requests.get(
        backend_url(settings.BACKEND_SESSION_PATH),
        headers={"Authorization": f"Bearer {token}"},
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
    )
    response.raise_for_status()

    payload = response.json()
    # Some deployments wrap the account as {"user": {...}}
    if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
        payload = payload["user"]

    if not isinstance(payload, dict):
        logger.warning("Session endpoint returned no user payload")
        return None

    if "permissions" not in payload:
        logger.warning("Backend sent no permissions; using an empty set")

    return ConsoleUser.model_validate(payload)


# -----------------------------------------------------
# Election status
# -----------------------------------------------------
def load_current_election() -> ElectionRecord:
    """Current election record, always read from the backend."""
    response = requests.get(
        backend_url(settings.BACKEND_ELECTION_STATUS_PATH),
        # Cache-busting: the backend sits behind proxies that cache GETs
        params={"timestamp": int(time.time() * 1000)},
        headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    return ElectionRecord.model_validate(response.json())


@cached(ttl_seconds=settings.ELECTION_REFRESH_SECONDS, key_prefix="election")
def fetch_election_record() -> ElectionRecord:
    """Current election record, cached for one refresh interval."""
    return load_current_election()


# -----------------------------------------------------
# Health
# -----------------------------------------------------
def ping_backend() -> dict:
    """Connectivity check against the election status endpoint."""
    url = backend_url(settings.BACKEND_ELECTION_STATUS_PATH)
    try:
        response = requests.get(url, timeout=settings.BACKEND_TIMEOUT_SECONDS)
        return {
            "service": "E-Voting Backend",
            "status": "ok" if response.ok else "error",
            "http_status": response.status_code,
        }
    except requests.RequestException as e:
        logger.error(f"Backend ping error: {e}")
        return {"service": "E-Voting Backend", "status": "error", "detail": str(e)}
