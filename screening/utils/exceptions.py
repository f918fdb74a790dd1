"""
screening.utils.exceptions - Custom exception types

Every error raised by the engine, the exporters and the AI client
derives from ScreeningError so the GUI can report them uniformly.
"""

from typing import Optional, Any


class ScreeningError(Exception):
    """
    Base exception for all screening errors.

    All custom exceptions inherit from this.
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(ScreeningError):
    """
    Configuration-related errors.

    Examples:
        - Unreadable config.json
        - Invalid SCREENING_* value
    """
    pass


class ValidationError(ScreeningError):
    """
    Data validation errors.

    Examples:
        - Non-positive frame rate
        - Negative frame index on capture
        - Unknown sort mode
        - Start timecode out of range
    """
    pass


class ClockStateError(ScreeningError):
    """
    Operation not allowed in the clock's current state.

    Examples:
        - Changing fps while playing when the session forbids it
    """

    def __init__(
        self,
        message: str,
        state: str = "",
        details: Optional[Any] = None
    ):
        super().__init__(message, details)
        self.state = state

    def __str__(self) -> str:
        parts = [self.message]
        if self.state:
            parts.insert(0, f"[{self.state}]")
        if self.details:
            parts.append(f"| Details: {self.details}")
        return " ".join(parts)


class ExportError(ScreeningError):
    """
    Export I/O errors.

    Examples:
        - Export directory not writable
        - Clipboard not available
        - Document renderer failure
    """

    def __init__(
        self,
        message: str,
        file_path: str = "",
        operation: str = "",
        details: Optional[Any] = None
    ):
        super().__init__(message, details)
        self.file_path = file_path
        self.operation = operation

    def __str__(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.insert(0, f"[{self.operation}]")
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.details:
            parts.append(f"| Details: {self.details}")
        return " ".join(parts)


class APIError(ScreeningError):
    """
    External API errors.

    Examples:
        - Gemini API failure
        - Rate limit
        - Network timeout
    """

    def __init__(
        self,
        message: str,
        api_name: str = "",
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message, details)
        self.api_name = api_name
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [self.message]
        if self.api_name:
            parts.insert(0, f"[{self.api_name}]")
        if self.status_code:
            parts.append(f"(Status: {self.status_code})")
        if self.details:
            parts.append(f"| Details: {self.details}")
        return " ".join(parts)


class GeminiError(APIError):
    """
    Gemini AI API specific errors (the service answered with an error).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message, "Gemini", status_code, details)


class GeminiNetworkError(GeminiError):
    """
    The Gemini service could not be reached.
    """
    pass
