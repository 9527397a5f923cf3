"""Tests for menu photo analysis."""

import asyncio

import pytest

from calorie_tracker.domain.analysis import RecommendationType
from calorie_tracker.domain.errors import (
    InvalidImageError,
    InvalidJSONError,
    InvalidResponseError,
    NoContentError,
    TextExtractionFailedError,
)
from calorie_tracker.services.menu_analysis import (
    RECOMMENDATION_FOCUS,
    SYSTEM_PROMPT,
    MenuAnalysisService,
)
from tests.conftest import MENU_PAYLOAD, FakeChatClient, FakeTextRecognizer

MENU_IMAGE = b"\x89PNG\r\n\x1a\nmenu"


def test_analyze_menu_returns_recommendations(
    menu_analysis_service: MenuAnalysisService, chat_client: FakeChatClient
) -> None:
    chat_client.queue_json(MENU_PAYLOAD, fenced=True)

    result = asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))

    assert result.healthiest[0].name == "Grilled Chicken Salad"
    assert result.healthiest[0].health_score == 9
    assert result.healthiest[0].nutrients is not None
    assert result.healthiest[0].nutrients.protein == "35g"
    assert result.tastiest[0].nutrients is None
    assert result.balanced_choice is not None
    assert result.balanced_choice.estimated_calories == "550-650"
    assert len(result.tips) == 3


def test_analyze_menu_prompt_contains_menu_text(
    menu_analysis_service: MenuAnalysisService,
    chat_client: FakeChatClient,
    text_recognizer: FakeTextRecognizer,
) -> None:
    chat_client.queue_json(MENU_PAYLOAD)

    asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))

    payload = chat_client.payloads[0]
    messages = payload["messages"]
    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert text_recognizer.text in messages[1]["content"]
    assert payload["max_completion_tokens"] == 2000


def test_analyze_menu_without_balanced_choice(
    menu_analysis_service: MenuAnalysisService, chat_client: FakeChatClient
) -> None:
    payload = {key: value for key, value in MENU_PAYLOAD.items()}
    payload.pop("balancedChoice")
    chat_client.queue_json(payload)

    result = asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))

    assert result.balanced_choice is None


def test_menu_items_get_fresh_ids(
    menu_analysis_service: MenuAnalysisService, chat_client: FakeChatClient
) -> None:
    chat_client.queue_json(MENU_PAYLOAD)
    chat_client.queue_json(MENU_PAYLOAD)

    first = asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))
    second = asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))

    assert first.healthiest[0].id != second.healthiest[0].id


def test_missing_image_fails_before_ocr(
    menu_analysis_service: MenuAnalysisService,
    chat_client: FakeChatClient,
    text_recognizer: FakeTextRecognizer,
) -> None:
    with pytest.raises(InvalidImageError):
        asyncio.run(menu_analysis_service.analyze_menu(b""))

    assert text_recognizer.calls == 0
    assert chat_client.payloads == []


def test_blank_ocr_text_fails_before_network(
    menu_analysis_service: MenuAnalysisService,
    chat_client: FakeChatClient,
    text_recognizer: FakeTextRecognizer,
) -> None:
    text_recognizer.text = "  \n "

    with pytest.raises(TextExtractionFailedError):
        asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))

    assert chat_client.payloads == []


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_completion_is_no_content(
    menu_analysis_service: MenuAnalysisService,
    chat_client: FakeChatClient,
    content: str | None,
) -> None:
    chat_client.queue_content(content)

    with pytest.raises(NoContentError) as exc_info:
        asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))

    assert isinstance(exc_info.value, InvalidResponseError)


def test_malformed_recommendations(
    menu_analysis_service: MenuAnalysisService, chat_client: FakeChatClient
) -> None:
    chat_client.queue_content('{"healthiest": "grilled things"}')

    with pytest.raises(InvalidJSONError):
        asyncio.run(menu_analysis_service.analyze_menu(MENU_IMAGE))


@pytest.mark.parametrize("kind", list(RecommendationType))
def test_recommendation_prompt_uses_focus(
    menu_analysis_service: MenuAnalysisService,
    chat_client: FakeChatClient,
    kind: RecommendationType,
) -> None:
    chat_client.queue_content("  1. Salmon Teishoku (550-650 kcal)\n")

    advice = asyncio.run(
        menu_analysis_service.analyze_menu_with_recommendation(MENU_IMAGE, kind)
    )

    prompt = chat_client.payloads[0]["messages"][1]["content"]
    assert RECOMMENDATION_FOCUS[kind] in prompt
    assert advice == "1. Salmon Teishoku (550-650 kcal)"


def test_recommendation_accepts_raw_type(
    menu_analysis_service: MenuAnalysisService, chat_client: FakeChatClient
) -> None:
    chat_client.queue_content("Try the grilled fish.")

    advice = asyncio.run(
        menu_analysis_service.analyze_menu_with_recommendation(MENU_IMAGE, "protein")
    )

    assert advice == "Try the grilled fish."


def test_recommendation_unknown_type(
    menu_analysis_service: MenuAnalysisService,
) -> None:
    with pytest.raises(ValueError):
        asyncio.run(
            menu_analysis_service.analyze_menu_with_recommendation(MENU_IMAGE, "vegan")
        )
