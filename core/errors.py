# core/errors.py

import requests
from fastapi import HTTPException


class ElectionRecordError(ValueError):
    """
    Raised when an election record carries a date or time that cannot be
    turned into an instant (non-numeric parts, impossible calendar values).
    """


def extract_backend_error(error: Exception) -> str:
    """
    Safely extract readable details from backend call failures.
    Handles:
      • HTTP error responses with a JSON "message" / "detail" body
      • Connection / timeout errors
      • Generic Python exceptions
    """

    # Case 1 — HTTP error with a response body
    response = getattr(error, "response", None)
    if response is not None:
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("message") or body.get("detail")
                if message:
                    return f"{response.status_code} {message}"
        except ValueError:
            pass
        return f"{response.status_code} {response.reason or ''}".strip()

    # Case 2 — errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 3 — Plain string fallback
    return str(error) or "Unknown backend error"


def handle_backend_error(error: Exception, operation: str = "Backend request", status_code: int = 502) -> HTTPException:
    """
    Handle backend errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what failed (e.g., "Failed to fetch election status")
        status_code: HTTP status code used when nothing more specific applies

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    error_detail = extract_backend_error(error)
    logger.error(f"{operation}: {error_detail}")

    if isinstance(error, requests.Timeout):
        return HTTPException(status_code=504, detail=f"{operation}: Backend timed out")

    if isinstance(error, requests.ConnectionError):
        return HTTPException(status_code=503, detail=f"{operation}: Backend unavailable")

    response = getattr(error, "response", None)
    if response is not None:
        if response.status_code in (401, 403):
            return HTTPException(status_code=401, detail="Invalid or expired authentication token")
        if response.status_code == 404:
            return HTTPException(status_code=404, detail=f"{operation}: Resource not found")

    return HTTPException(status_code=status_code, detail=f"{operation} failed")
