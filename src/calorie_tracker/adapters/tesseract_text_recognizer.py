"""Tesseract OCR adapter for menu photos."""

import asyncio
import io
from dataclasses import dataclass

import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from calorie_tracker.domain.errors import (
    InvalidImageError,
    TextExtractionFailedError,
)
from calorie_tracker.services.menu_analysis import TextRecognizer

# LSTM engine with automatic page segmentation.
_ACCURATE_CONFIG = "--oem 1 --psm 3"


@dataclass
class TesseractTextRecognizer(TextRecognizer):
    """Text recognizer backed by the Tesseract CLI."""

    lang: str = "eng"
    config: str = _ACCURATE_CONFIG

    @classmethod
    def create(
        cls, lang: str, tesseract_cmd: str | None = None
    ) -> "TesseractTextRecognizer":
        """Create a recognizer, optionally pointing at a specific binary."""
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        return cls(lang=lang)

    async def recognize_text(self, image_bytes: bytes) -> str:
        """Return recognized lines joined by newlines."""
        return await asyncio.to_thread(self._recognize, image_bytes)

    def _recognize(self, image_bytes: bytes) -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                image.load()
                prepared = ImageOps.exif_transpose(image).convert("RGB")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise InvalidImageError() from exc
        try:
            raw = pytesseract.image_to_string(
                prepared, lang=self.lang, config=self.config
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise TextExtractionFailedError() from exc
        lines = [line.strip() for line in raw.splitlines()]
        return "\n".join(line for line in lines if line)
