"""Profile, food log and weight endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Query, Request, status

from calorie_tracker.api.schemas import (
    ManualEntryRequest,
    ProfileUpdate,
    WeightRequest,
    entry_payload,
    log_payload,
    period_payload,
    profile_payload,
    weight_payload,
)
from calorie_tracker.domain.capture import CaptureRequest, ManualFood
from calorie_tracker.services.progress import SUPPORTED_WINDOWS

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["tracking"])

MAX_WINDOW_DAYS = 365


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/profile")
def get_profile(request: Request) -> dict[str, object]:
    """Return the stored profile."""
    return profile_payload(_container(request).profile_service.profile)


@router.patch("/profile")
def update_profile(update: ProfileUpdate, request: Request) -> dict[str, object]:
    """Apply a partial profile edit without recomputing targets."""
    changes = update.model_dump(exclude_none=True)
    profile = _container(request).profile_service.update(**changes)
    return profile_payload(profile)


@router.post("/profile/targets")
def apply_targets(request: Request) -> dict[str, object]:
    """Recompute calorie and macro targets from the current profile."""
    profile = _container(request).profile_service.apply_calculated_targets()
    return profile_payload(profile)


@router.post("/profile/reset")
def reset_profile(request: Request) -> dict[str, object]:
    """Replace the profile with defaults."""
    return profile_payload(_container(request).profile_service.reset())


@router.get("/logs/today")
def today_log(request: Request) -> dict[str, object]:
    """Return today's log, creating it when missing."""
    return log_payload(_container(request).daily_log_service.today_log())


@router.get("/logs/{day}")
def log_for_day(day: date, request: Request) -> dict[str, object]:
    """Return the log for a calendar day."""
    log = _container(request).daily_log_service.log_for_date(day)
    if log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return log_payload(log)


@router.get("/logs")
def recent_logs(
    request: Request,
    days: int = Query(default=SUPPORTED_WINDOWS[0], ge=1, le=MAX_WINDOW_DAYS),
) -> dict[str, object]:
    """Return logs and averages for a rolling window."""
    return period_payload(_container(request).progress_service.period(days))


@router.get("/streak")
def streak(request: Request) -> dict[str, int]:
    """Return the number of consecutive logged days ending today."""
    return {"streak": _container(request).daily_log_service.current_streak()}


@router.get("/progress/today")
def progress_today(request: Request) -> dict[str, object]:
    """Return today's intake against the profile targets."""
    return asdict(_container(request).progress_service.today())


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def add_manual_entry(
    body: ManualEntryRequest, request: Request
) -> dict[str, object]:
    """Log a manually entered food for today."""
    manual = ManualFood(**body.model_dump())
    try:
        entry = await _container(request).capture_service.capture(
            CaptureRequest.from_manual(manual)
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return entry_payload(entry)


@router.delete("/entries/{entry_id}")
def remove_entry(
    entry_id: UUID, request: Request, day: date | None = None
) -> dict[str, object]:
    """Remove an entry from a day's log (today by default).

    ``removed`` is true only when the log held the entry.
    """
    container = _container(request)
    service = container.daily_log_service
    before = service.log_for_date(day if day is not None else container.clock.now())
    had_entry = before is not None and any(
        entry.id == entry_id for entry in before.entries
    )
    log = service.remove_entry(entry_id, day)
    if log is None:
        return {"removed": False}
    return {"removed": had_entry, "log": log_payload(log)}


@router.post("/weights", status_code=status.HTTP_201_CREATED)
def log_weight(body: WeightRequest, request: Request) -> dict[str, object]:
    """Record today's weight, replacing any earlier reading today."""
    entry = _container(request).weight_log_service.log_weight(body.weight_kg)
    return weight_payload(entry)


@router.get("/weights")
def recent_weights(
    request: Request,
    days: int = Query(default=SUPPORTED_WINDOWS[-1], ge=1, le=MAX_WINDOW_DAYS),
) -> dict[str, object]:
    """Return weight entries and progress toward the desired weight."""
    container = _container(request)
    service = container.weight_log_service
    entries = service.entries_for_last_days(days)
    progress = container.progress_service.weight(days)
    today_entry = service.entry_for_today()
    return {
        "entries": [weight_payload(entry) for entry in entries],
        "today": weight_payload(today_entry) if today_entry is not None else None,
        "progress": asdict(progress),
    }
