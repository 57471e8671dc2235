# routers/election.py

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Request
import requests

from dependencies.auth import requires_permission
from core.election_clock import (
    compute_status,
    fallback_election_record,
    format_date_for_display,
    format_time_for_display,
    target_instant,
)
from core.errors import ElectionRecordError, extract_backend_error
from core.logging_config import logger
from models.election import (
    ElectionEvaluateRequest,
    ElectionRecord,
    ElectionStatusResponse,
    MonitorSnapshot,
)
from services.backend_client import fetch_election_record

router = APIRouter(
    prefix="/election",
    tags=["Election"],
)


def load_election_record() -> ElectionRecord:
    """
    Current record from the backend, or today's default window when the
    backend cannot be reached, so the countdown keeps rendering.
    """
    try:
        return fetch_election_record()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Failed to fetch election status, using default window: {extract_backend_error(e)}")
        return fallback_election_record(datetime.now(timezone.utc).date())


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid 'now' timestamp: {value}")


# -----------------------------------------------------
# GET /election/status
# Backend record evaluated against the server clock
# -----------------------------------------------------
@router.get("/status", summary="Current election lifecycle status", response_model=ElectionStatusResponse)
def election_status():
    record = load_election_record()
    now = datetime.now(timezone.utc)

    try:
        clock = compute_status(record, now)
    except ElectionRecordError as e:
        logger.error(f"Backend election record is malformed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return ElectionStatusResponse(election=record, clock=clock, evaluated_at=now.isoformat())


# -----------------------------------------------------
# POST /election/status/evaluate
# Evaluate an arbitrary record (settings preview)
# -----------------------------------------------------
@router.post("/status/evaluate", summary="Evaluate an election record", response_model=ElectionStatusResponse)
def evaluate_election_status(payload: ElectionEvaluateRequest):
    """
    Runs the clock on a posted record. `now` defaults to the server clock.
    Malformed dates or times are rejected with 422.
    """
    now = _parse_now(payload.now) if payload.now else datetime.now(timezone.utc)

    try:
        clock = compute_status(payload.election, now)
    except ElectionRecordError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ElectionStatusResponse(election=payload.election, clock=clock, evaluated_at=now.isoformat())


# -----------------------------------------------------
# GET /election/countdown
# Latest snapshot from the background monitor
# -----------------------------------------------------
@router.get("/countdown", summary="Live countdown snapshot", response_model=MonitorSnapshot)
def election_countdown(request: Request):
    monitor = getattr(request.app.state, "election_monitor", None)
    if monitor is None:
        raise HTTPException(status_code=503, detail="Election monitor is not running")
    return monitor.snapshot


# -----------------------------------------------------
# GET /election/settings
# Configured window formatted for the settings screen
# -----------------------------------------------------
@router.get(
    "/settings",
    summary="Election window for the settings screen",
    dependencies=[Depends(requires_permission("settings", "view"))],
)
def election_settings():
    record = load_election_record()

    try:
        start = target_instant(record.model_copy(update={"is_active": False}))
        end = target_instant(record.model_copy(update={"is_active": True}))
    except ElectionRecordError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "election": record,
        "starts": {"date": format_date_for_display(start), "time": format_time_for_display(start)},
        "ends": {"date": format_date_for_display(end), "time": format_time_for_display(end)},
    }
