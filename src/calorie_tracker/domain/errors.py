"""Errors raised by the food and menu analysis gateways.

Every error is terminal for the call that raised it. ``str(error)`` is the
message shown to the user.
"""


class AnalysisError(Exception):
    """Base class for analysis failures."""

    default_message = "Analysis failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NoImageDataError(AnalysisError):
    default_message = "No image data provided"


class ApiError(AnalysisError):
    """The LLM endpoint rejected the request or could not be reached."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"API Error: {message}")


class InvalidResponseError(AnalysisError):
    default_message = "Invalid response from API"


class NoContentError(InvalidResponseError):
    default_message = "No recommendations received"


class ParsingError(AnalysisError):
    default_message = "Could not parse food information"


class InvalidJSONError(ParsingError):
    default_message = "Could not parse recommendations"


class InvalidImageError(AnalysisError):
    default_message = "Could not process the image"


class TextExtractionFailedError(AnalysisError):
    default_message = "Could not extract text from the menu"


class InvalidURLError(AnalysisError):
    default_message = "Invalid API endpoint"


class AnalysisInProgressError(AnalysisError):
    default_message = "An analysis is already running"
