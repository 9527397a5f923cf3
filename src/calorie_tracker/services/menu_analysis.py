"""Menu photo analysis: OCR followed by an LLM recommendation pass."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from calorie_tracker.domain.analysis import MenuRecommendations, RecommendationType
from calorie_tracker.domain.errors import (
    InvalidImageError,
    InvalidJSONError,
    NoContentError,
    TextExtractionFailedError,
)
from calorie_tracker.services.completions import (
    ChatCompletionsClient,
    first_choice_content,
    strip_code_fences,
)

SYSTEM_PROMPT = "You are a helpful nutritionist and food expert."

MENU_PROMPT = """\
You are a nutritionist and food expert analyzing a menu. Based on the following \
menu text, provide recommendations in JSON format.

Menu Text:
{menu_text}

Please analyze and return a JSON response with:
1. "healthiest": Array of top 3 healthiest options with details
2. "tastiest": Array of top 3 tastiest/most satisfying options with details
3. "balancedChoice": Single best option balancing health and taste
4. "analysis": Brief overview of the menu's health profile
5. "tips": Array of 3 tips for ordering from this menu

For each menu item include:
- name: Item name
- description: Brief description
- estimatedCalories: Estimated calorie range (e.g., "400-500")
- healthScore: 1-10 rating
- tasteScore: 1-10 rating
- reasoning: Why this choice
- nutrients: Object with protein, carbs, fat, fiber estimates

Respond ONLY with valid JSON, no additional text."""

RECOMMENDATION_FOCUS = {
    RecommendationType.HEALTHIEST: (
        "the healthiest dishes: lower calories, lean proteins, vegetables and "
        "light cooking methods"
    ),
    RecommendationType.TASTIEST: (
        "the tastiest and most satisfying dishes, with a note on how heavy each is"
    ),
    RecommendationType.PROTEIN: (
        "the dishes highest in protein, with estimated grams of protein per serving"
    ),
    RecommendationType.FIBER: (
        "the dishes richest in fiber and easiest on digestion, such as vegetables, "
        "legumes and whole grains"
    ),
}

RECOMMENDATION_PROMPT = """\
You are a friendly nutritionist helping someone order from a restaurant. Based on \
the following menu text, recommend {focus}.

Menu Text:
{menu_text}

Suggest up to 3 dishes that appear on the menu. For each, give the dish name, an \
estimated calorie range and one sentence on why it fits. Finish with one short \
ordering tip. Answer in plain text without Markdown tables."""

_logger = logging.getLogger(__name__)


class TextRecognizer(Protocol):
    """Interface for extracting text from an image."""

    async def recognize_text(self, image_bytes: bytes) -> str:
        """Return the text found in the image."""


@dataclass
class MenuAnalysisService:
    """Reads a menu photo and asks the model what to order."""

    text_recognizer: TextRecognizer
    client: ChatCompletionsClient
    model: str
    max_completion_tokens: int = 2000

    async def analyze_menu(self, image_bytes: bytes | None) -> MenuRecommendations:
        """Return structured recommendations for the photographed menu."""
        menu_text = await self.extract_text(image_bytes)
        content = await self._complete(MENU_PROMPT.format(menu_text=menu_text))
        try:
            return MenuRecommendations.model_validate_json(strip_code_fences(content))
        except ValidationError as exc:
            _logger.warning(
                "Menu recommendations could not be parsed: errors=%s",
                exc.error_count(),
            )
            raise InvalidJSONError() from exc

    async def analyze_menu_with_recommendation(
        self,
        image_bytes: bytes | None,
        recommendation_type: RecommendationType | str,
    ) -> str:
        """Return free-text advice focused on one kind of recommendation."""
        kind = RecommendationType(recommendation_type)
        menu_text = await self.extract_text(image_bytes)
        prompt = RECOMMENDATION_PROMPT.format(
            focus=RECOMMENDATION_FOCUS[kind], menu_text=menu_text
        )
        content = await self._complete(prompt)
        return content.strip()

    async def extract_text(self, image_bytes: bytes | None) -> str:
        """Run OCR on the menu; fails before any network call."""
        if not image_bytes:
            raise InvalidImageError()
        text = (await self.text_recognizer.recognize_text(image_bytes)).strip()
        if not text:
            raise TextExtractionFailedError()
        _logger.info("Menu text extracted: lines=%s", text.count("\n") + 1)
        return text

    async def _complete(self, prompt: str) -> str:
        body = await self.client.complete(
            {
                "model": self.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "max_completion_tokens": self.max_completion_tokens,
            }
        )
        content = first_choice_content(body)
        if not content or not content.strip():
            raise NoContentError()
        return content
