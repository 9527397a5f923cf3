"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.capture import CaptureService
from calorie_tracker.services.clock import Clock
from calorie_tracker.services.completions import ChatCompletionsClient
from calorie_tracker.services.daily_logs import DailyLogService
from calorie_tracker.services.food_analysis import FoodAnalysisService
from calorie_tracker.services.menu_analysis import MenuAnalysisService, TextRecognizer
from calorie_tracker.services.profiles import ProfileService
from calorie_tracker.services.progress import ProgressService
from calorie_tracker.services.single_flight import SingleFlightGuard
from calorie_tracker.services.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    StorageError,
)
from calorie_tracker.services.weights import WeightLogService

TOKYO = ZoneInfo("Asia/Tokyo")

FOOD_PAYLOAD = {
    "name": "Pad Thai",
    "nameThai": "ผัดไทย",
    "nameJapanese": "パッタイ",
    "calories": 520,
    "protein": 18.5,
    "carbs": 64.0,
    "fat": 20.0,
    "servingSize": "1 plate",
}

MENU_PAYLOAD = {
    "healthiest": [
        {
            "name": "Grilled Chicken Salad",
            "description": "Greens with grilled chicken",
            "estimatedCalories": "350-400",
            "healthScore": 9,
            "tasteScore": 7,
            "reasoning": "Lean protein and vegetables",
            "nutrients": {"protein": "35g", "carbs": "12g", "fat": "14g"},
        }
    ],
    "tastiest": [
        {
            "name": "Tonkotsu Ramen",
            "description": "Pork broth ramen",
            "estimatedCalories": "800-900",
            "healthScore": 4,
            "tasteScore": 10,
            "reasoning": "Rich and satisfying",
        }
    ],
    "balancedChoice": {
        "name": "Salmon Teishoku",
        "description": "Grilled salmon set",
        "estimatedCalories": "550-650",
        "healthScore": 8,
        "tasteScore": 8,
        "reasoning": "Protein, rice and vegetables",
    },
    "analysis": "Mostly grilled and noodle dishes.",
    "tips": ["Ask for sauce on the side", "Share fried sides", "Drink water"],
}


def chat_body(content: str | None) -> dict[str, object]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@dataclass
class FixedClock(Clock):
    """Clock that only moves when told to."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 5, 10, 12, 0, tzinfo=TOKYO)
    )
    tz: ZoneInfo = TOKYO

    def now(self) -> datetime:
        return self.current

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.current += timedelta(days=days, hours=hours)


@dataclass
class FakeChatClient(ChatCompletionsClient):
    """Chat client returning queued bodies and recording payloads."""

    responses: list[dict[str, object]] = field(default_factory=list)
    payloads: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    def queue_content(self, content: str | None) -> None:
        self.responses.append(chat_body(content))

    def queue_json(self, payload: dict[str, object], fenced: bool = False) -> None:
        text = json.dumps(payload, ensure_ascii=False)
        if fenced:
            text = f"```json\n{text}\n```"
        self.queue_content(text)

    async def complete(self, payload: dict[str, object]) -> dict[str, object]:
        self.payloads.append(payload)
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeTextRecognizer(TextRecognizer):
    """OCR stand-in returning fixed text."""

    text: str = "Grilled Chicken Salad 180\nTonkotsu Ramen 220\nSalmon Teishoku 260"
    calls: int = 0

    async def recognize_text(self, image_bytes: bytes) -> str:
        self.calls += 1
        return self.text


class FailingKeyValueStore(KeyValueStore):
    """Store whose writes always fail."""

    def __init__(self, values: dict[str, bytes] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        raise StorageError(f"disk full while writing {key}")


@dataclass
class UnreadableKeyValueStore(KeyValueStore):
    """Store whose reads fail and whose writes are recorded."""

    written: dict[str, bytes] = field(default_factory=dict)

    def get(self, key: str) -> bytes | None:
        raise StorageError(f"connection reset while reading {key}")

    def set(self, key: str, value: bytes) -> None:
        self.written[key] = value


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", storage_backend="memory")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def text_recognizer() -> FakeTextRecognizer:
    return FakeTextRecognizer()


@pytest.fixture
def profile_service(store: InMemoryKeyValueStore) -> ProfileService:
    return ProfileService(store)


@pytest.fixture
def daily_log_service(
    store: InMemoryKeyValueStore, clock: FixedClock
) -> DailyLogService:
    return DailyLogService(store, clock)


@pytest.fixture
def weight_log_service(
    store: InMemoryKeyValueStore, clock: FixedClock
) -> WeightLogService:
    return WeightLogService(store, clock)


@pytest.fixture
def food_analysis_service(
    chat_client: FakeChatClient, clock: FixedClock
) -> FoodAnalysisService:
    return FoodAnalysisService(client=chat_client, clock=clock, model="gpt-5-nano")


@pytest.fixture
def menu_analysis_service(
    chat_client: FakeChatClient, text_recognizer: FakeTextRecognizer
) -> MenuAnalysisService:
    return MenuAnalysisService(
        text_recognizer=text_recognizer, client=chat_client, model="gpt-5-nano"
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    store: InMemoryKeyValueStore,
    chat_client: FakeChatClient,
    profile_service: ProfileService,
    daily_log_service: DailyLogService,
    weight_log_service: WeightLogService,
    food_analysis_service: FoodAnalysisService,
    menu_analysis_service: MenuAnalysisService,
) -> AppContainer:
    progress_service = ProgressService(
        daily_logs=daily_log_service,
        profiles=profile_service,
        weights=weight_log_service,
    )
    capture_service = CaptureService(
        food_analysis=food_analysis_service,
        daily_logs=daily_log_service,
        clock=clock,
    )

    return AppContainer(
        settings=settings,
        clock=clock,
        store=store,
        profile_service=profile_service,
        daily_log_service=daily_log_service,
        weight_log_service=weight_log_service,
        progress_service=progress_service,
        food_analysis_service=food_analysis_service,
        menu_analysis_service=menu_analysis_service,
        capture_service=capture_service,
        single_flight=SingleFlightGuard(),
        close_resources=chat_client.close,
    )
