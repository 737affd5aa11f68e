"""Domain exceptions for flowsense.

Raised by the domain and application layers when a flow rule, TAT
calculation or configuration breaks a business rule. They carry no HTTP
knowledge; app.core.exception_handlers maps error_code to a status code.
"""

from typing import Any


class FlowSenseException(Exception):
    """Base class of every flowsense error.

    Attributes:
        message: Text safe to show to the end user (cycle messages are shown
            verbatim in the flow builder).
        error_code: Stable machine-readable code, e.g. CYCLE_DETECTED.
        details: Extra context such as the offending field or cycle path.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        # Subclasses pass a fixed code; ad-hoc errors fall back to the class name.
        self.error_code = error_code or type(self).__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return the API error body: error, message, details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FlowSenseException):
    """Bad input to a flow operation (negative TAT, empty bulk list, ...)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else {})


class InvalidTATConfigException(FlowSenseException):
    """Raised when a TAT configuration cannot produce meaningful due dates.

    Examples: office start at or after office end, hours outside 0-23,
    unknown timezone, or every weekday marked as weekend.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "INVALID_TAT_CONFIG", details)


class CycleDetectedException(FlowSenseException):
    """Raised when a flow rule would close a loop in the workflow graph.

    The message is meant to be shown to the end user verbatim; the cycle
    path is kept in details for clients that render it.
    """

    def __init__(self, message: str, cycle: list[str]) -> None:
        """Initialize with the user-facing message and the offending path.

        Args:
            message: Ready-to-show explanation of the loop.
            cycle: Task names forming the loop, first and last equal.
        """
        super().__init__(message, "CYCLE_DETECTED", {"cycle": list(cycle)})

    @property
    def cycle(self) -> list[str]:
        """Task names forming the loop."""
        return self.details["cycle"]


class ResourceNotFoundException(FlowSenseException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'flow_rule').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(FlowSenseException):
    """Raised when an operation requires Postgres but the database is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
