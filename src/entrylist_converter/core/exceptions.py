"""Custom exceptions for entrylist-converter."""

from enum import Enum
from typing import Any


class EntryListConverterError(Exception):
    """Base exception for all entrylist-converter errors."""

    pass


class ExtractionErrorKind(str, Enum):
    """Distinguishable reasons an extraction can fail."""

    INVALID_INPUT_KIND = "invalid_input_kind"
    SERVICE_FAILURE = "service_failure"
    MALFORMED_RESPONSE = "malformed_response"


class ExtractionError(EntryListConverterError):
    """Raised when extraction fails."""

    kind: ExtractionErrorKind | None = None

    def __init__(
        self,
        message: str,
        raw_response: str | None = None,
        last_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.raw_response = raw_response
        self.last_error = last_error


class InvalidInputKindError(ExtractionError):
    """Raised when the document's declared media type is not PDF."""

    kind = ExtractionErrorKind.INVALID_INPUT_KIND

    def __init__(self, message: str, media_type: str | None = None) -> None:
        super().__init__(message)
        self.media_type = media_type


class ServiceFailureError(ExtractionError):
    """Raised when the inference service call fails, times out or is unreachable."""

    kind = ExtractionErrorKind.SERVICE_FAILURE


class MalformedResponseError(ExtractionError):
    """Raised when the service response cannot be parsed into entries."""

    kind = ExtractionErrorKind.MALFORMED_RESPONSE

    def __init__(
        self,
        message: str,
        validation_errors: Any = None,
        raw_response: str | None = None,
    ) -> None:
        super().__init__(message, raw_response=raw_response)
        self.validation_errors = validation_errors


class ConfigurationError(EntryListConverterError):
    """Raised when converter configuration is invalid."""

    pass


class SessionStateError(EntryListConverterError):
    """Raised when a session operation is not allowed in the current state."""

    def __init__(self, message: str, status: str) -> None:
        super().__init__(message)
        self.status = status
