"""Tests for the Tesseract OCR adapter."""

import asyncio
import io

import pytesseract
import pytest
from PIL import Image

from calorie_tracker.adapters.tesseract_text_recognizer import TesseractTextRecognizer
from calorie_tracker.domain.errors import InvalidImageError, TextExtractionFailedError


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("L", (32, 16), color=255).save(buffer, format="PNG")
    return buffer.getvalue()


def test_recognized_lines_are_trimmed(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_image_to_string(image: Image.Image, lang: str, config: str) -> str:
        seen["mode"] = image.mode
        seen["lang"] = lang
        return "  Green Curry  120\n\n   \nTom Yum 150  \n"

    monkeypatch.setattr(pytesseract, "image_to_string", fake_image_to_string)
    recognizer = TesseractTextRecognizer(lang="eng+tha")

    text = asyncio.run(recognizer.recognize_text(_png_bytes()))

    assert text == "Green Curry  120\nTom Yum 150"
    assert seen == {"mode": "RGB", "lang": "eng+tha"}


def test_undecodable_image() -> None:
    recognizer = TesseractTextRecognizer()

    with pytest.raises(InvalidImageError):
        asyncio.run(recognizer.recognize_text(b"definitely not an image"))


def test_oversized_image_is_invalid(monkeypatch: pytest.MonkeyPatch) -> None:
    # 32x16 is more than twice the limit, which Pillow treats as a bomb
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(InvalidImageError):
        asyncio.run(TesseractTextRecognizer().recognize_text(_png_bytes()))


def test_missing_binary_is_extraction_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(*_args, **_kwargs) -> str:  # type: ignore[no-untyped-def]
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "image_to_string", missing)

    with pytest.raises(TextExtractionFailedError):
        asyncio.run(TesseractTextRecognizer().recognize_text(_png_bytes()))


def test_create_sets_binary_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")

    recognizer = TesseractTextRecognizer.create("jpn", "/opt/bin/tesseract")

    assert recognizer.lang == "jpn"
    assert pytesseract.pytesseract.tesseract_cmd == "/opt/bin/tesseract"
