"""Domain error codes for registration and reporting."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_FIELDS = "MISSING_FIELDS"
    NO_EVENTS_SELECTED = "NO_EVENTS_SELECTED"
    UNKNOWN_EVENT = "UNKNOWN_EVENT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class MissingFieldsError(DomainError):
    """Raised when required participant fields are blank."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELDS,
            message="Please fill in all required fields",
        )
        self.fields = tuple(fields)


class NoEventsSelectedError(DomainError):
    """Raised when a registration picks no events."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_EVENTS_SELECTED,
            message="Please select at least one event to participate in.",
        )


class UnknownEventError(DomainError):
    """Raised when a selected event id is not in the catalog."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_EVENT,
            message="Selected event is not available",
        )
        self.event_id = event_id


class StoreError(DomainError):
    """Raised when the registration store cannot complete a call."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=f"Registration store failed during {operation}",
        )
        self.operation = operation
