"""Domain models for food capture requests."""

from dataclasses import dataclass
from enum import StrEnum


class ImageSource(StrEnum):
    CAMERA = "camera"
    LIBRARY = "library"
    MANUAL = "manual"


@dataclass(frozen=True)
class ManualFood:
    """Food details typed in by the user."""

    name: str
    calories: int
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    serving_size: str = ""


@dataclass(frozen=True)
class CaptureRequest:
    """A food capture from one of the supported sources.

    Camera and library captures carry ``image_bytes``; manual captures carry
    ``manual``.
    """

    source: ImageSource
    image_bytes: bytes | None = None
    manual: ManualFood | None = None

    @classmethod
    def from_camera(cls, image_bytes: bytes | None) -> "CaptureRequest":
        return cls(source=ImageSource.CAMERA, image_bytes=image_bytes)

    @classmethod
    def from_library(cls, image_bytes: bytes | None) -> "CaptureRequest":
        return cls(source=ImageSource.LIBRARY, image_bytes=image_bytes)

    @classmethod
    def from_manual(cls, manual: ManualFood) -> "CaptureRequest":
        return cls(source=ImageSource.MANUAL, manual=manual)
