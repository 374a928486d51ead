"""
Domain Exceptions

Typed domain errors with an error-type discriminator. Not-found and degenerate
geometry conditions are normally reported through result values; these
exceptions cover boundary rejections and programming errors.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    GEOMETRY = "geometry"
    SOURCE = "source"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when domain validation rules are violated."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
                "error_code": self.error_code,
            }
        )

        super().__init__(full_message, ErrorType.VALIDATION, details)

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "field": self.field_name,
            "value": str(self.value) if self.value is not None else None,
            "message": self.message,
            "error_code": self.error_code,
        }


class OrderValidationError(ValidationError):
    """Raised when an order record is malformed (e.g. end before start)."""

    def __init__(self, order_number: str | None, message: str) -> None:
        super().__init__(
            "order",
            order_number,
            message,
            error_code="MALFORMED_ORDER",
            details={"order_number": order_number},
        )
        self.order_number = order_number


class EntityNotFoundError(DomainError):
    """Raised when an entity lookup fails."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        details = {"entity_type": entity_type, "entity_id": entity_id}
        super().__init__(
            f"{entity_type.capitalize()} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            details,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class OrderNotFoundError(EntityNotFoundError):
    """Raised when an order is not found."""

    def __init__(self, order_number: str) -> None:
        super().__init__("order", order_number)
        self.order_number = order_number


class DuplicateOrderError(DomainError):
    """Raised when adding an order whose identifier is already stored."""

    def __init__(self, order_number: str) -> None:
        super().__init__(
            f"Order already exists: {order_number}",
            ErrorType.CONFLICT,
            {"order_number": order_number},
        )
        self.order_number = order_number


class InvalidGeometryError(DomainError):
    """Raised when an interval cannot be projected (end before start)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.GEOMETRY)


class OrderSourceError(DomainError):
    """Raised when an order source cannot provide its records."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message, ErrorType.SOURCE, {"source": source})
        self.source = source
