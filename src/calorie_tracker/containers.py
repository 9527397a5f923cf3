"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.openai_chat_client import HttpxChatCompletionsClient
from calorie_tracker.adapters.supabase_kv_store import SupabaseKeyValueStore
from calorie_tracker.adapters.tesseract_text_recognizer import TesseractTextRecognizer
from calorie_tracker.config import Settings, parse_storage_backend
from calorie_tracker.services.capture import CaptureService
from calorie_tracker.services.clock import Clock, SystemClock
from calorie_tracker.services.daily_logs import DailyLogService
from calorie_tracker.services.food_analysis import FoodAnalysisService
from calorie_tracker.services.menu_analysis import MenuAnalysisService
from calorie_tracker.services.profiles import ProfileService
from calorie_tracker.services.progress import ProgressService
from calorie_tracker.services.single_flight import SingleFlightGuard
from calorie_tracker.services.storage import InMemoryKeyValueStore, KeyValueStore
from calorie_tracker.services.weights import WeightLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    store: KeyValueStore
    profile_service: ProfileService
    daily_log_service: DailyLogService
    weight_log_service: WeightLogService
    progress_service: ProgressService
    food_analysis_service: FoodAnalysisService
    menu_analysis_service: MenuAnalysisService
    capture_service: CaptureService
    single_flight: SingleFlightGuard
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client)
    return InMemoryKeyValueStore()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    clock = SystemClock.create(resolved_settings.timezone)
    store = build_store(resolved_settings)
    chat_client = HttpxChatCompletionsClient.create(
        api_key=resolved_settings.openai_api_key,
        base_url=resolved_settings.openai_base_url,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    text_recognizer = TesseractTextRecognizer.create(
        lang=resolved_settings.tesseract_lang,
        tesseract_cmd=resolved_settings.tesseract_cmd,
    )
    profile_service = ProfileService(store)
    daily_log_service = DailyLogService(store, clock)
    weight_log_service = WeightLogService(store, clock)
    progress_service = ProgressService(
        daily_logs=daily_log_service,
        profiles=profile_service,
        weights=weight_log_service,
    )
    food_analysis_service = FoodAnalysisService(
        client=chat_client,
        clock=clock,
        model=resolved_settings.openai_model,
        max_tokens=resolved_settings.food_max_tokens,
        image_detail=resolved_settings.food_image_detail,
    )
    menu_analysis_service = MenuAnalysisService(
        text_recognizer=text_recognizer,
        client=chat_client,
        model=resolved_settings.openai_model,
        max_completion_tokens=resolved_settings.menu_max_completion_tokens,
    )
    capture_service = CaptureService(
        food_analysis=food_analysis_service,
        daily_logs=daily_log_service,
        clock=clock,
    )

    async def close_resources() -> None:
        await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
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
        close_resources=close_resources,
    )
