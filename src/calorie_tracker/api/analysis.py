"""Food and menu photo analysis endpoints.

Images are sent as the raw request body. Each session may run one food and
one menu analysis at a time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, HTTPException, Query, Request, status

from calorie_tracker.api.schemas import entry_payload
from calorie_tracker.domain.analysis import RecommendationType
from calorie_tracker.domain.capture import CaptureRequest, ImageSource

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["analysis"])

DEFAULT_SESSION = "default"
SCREENS = ("food", "menu")


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _flight_key(session_id: str | None, screen: str) -> str:
    return f"{session_id or DEFAULT_SESSION}:{screen}"


@router.get("/analysis/status")
async def analysis_status(
    request: Request,
    x_session_id: str | None = Header(default=None),
) -> dict[str, bool]:
    """Report which screens of the session have an analysis running."""
    guard = _container(request).single_flight
    return {
        screen: guard.is_running(_flight_key(x_session_id, screen))
        for screen in SCREENS
    }


@router.post("/food/analyze")
async def analyze_food(
    request: Request,
    source: ImageSource = Query(default=ImageSource.CAMERA),
    log: bool = Query(default=False),
    x_session_id: str | None = Header(default=None),
) -> dict[str, object]:
    """Estimate nutrition for a food photo and optionally log it."""
    if source is ImageSource.MANUAL:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Manual foods are logged through /entries",
        )
    container = _container(request)
    image_bytes = await request.body()
    if source is ImageSource.LIBRARY:
        capture = CaptureRequest.from_library(image_bytes)
    else:
        capture = CaptureRequest.from_camera(image_bytes)
    async with container.single_flight.acquire(_flight_key(x_session_id, "food")):
        entry = await container.capture_service.capture(capture, log=log)
    return {"entry": entry_payload(entry), "logged": log}


@router.post("/menu/analyze")
async def analyze_menu(
    request: Request,
    x_session_id: str | None = Header(default=None),
) -> dict[str, object]:
    """Return structured recommendations for a menu photo."""
    container = _container(request)
    image_bytes = await request.body()
    async with container.single_flight.acquire(_flight_key(x_session_id, "menu")):
        recommendations = await container.menu_analysis_service.analyze_menu(
            image_bytes
        )
    return recommendations.model_dump(mode="json", by_alias=True)


@router.post("/menu/recommend")
async def recommend_from_menu(
    request: Request,
    recommendation_type: RecommendationType = Query(alias="type"),
    x_session_id: str | None = Header(default=None),
) -> dict[str, str]:
    """Return free-text advice for one recommendation focus."""
    container = _container(request)
    service = container.menu_analysis_service
    image_bytes = await request.body()
    async with container.single_flight.acquire(_flight_key(x_session_id, "menu")):
        advice = await service.analyze_menu_with_recommendation(
            image_bytes, recommendation_type
        )
    return {"type": recommendation_type.value, "recommendation": advice}
