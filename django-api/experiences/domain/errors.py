"""Domain error codes for the experiences module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_EXPERIENCE_ID = "INVALID_EXPERIENCE_ID"
    INVALID_SLOT_ID = "INVALID_SLOT_ID"
    INVALID_BOOKING_REF = "INVALID_BOOKING_REF"
    INVALID_PROMO_CODE = "INVALID_PROMO_CODE"
    SLOT_UNAVAILABLE = "SLOT_UNAVAILABLE"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    STORE_ERROR = "STORE_ERROR"
    BOOKING_REF_CONFLICT = "BOOKING_REF_CONFLICT"
    REFERENCE_ALLOCATION_EXHAUSTED = "REFERENCE_ALLOCATION_EXHAUSTED"
    RESERVATION_TIMEOUT = "RESERVATION_TIMEOUT"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Missing or malformed input. Never retried."""


class BusinessRuleViolation(DomainError):
    """Well-formed input rejected by a business rule."""


class NotFoundError(DomainError):
    """A looked-up record does not exist."""


class StoreError(DomainError):
    """Underlying persistence failure."""

    retryable = False

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORE_ERROR) -> None:
        super().__init__(code=code, message=message)


class MissingFieldsError(ValidationError):
    """Raised when required request fields are absent or blank."""

    def __init__(self, fields: list[str], message: str = "Missing required fields") -> None:
        super().__init__(code=ErrorCode.MISSING_FIELDS, message=message)
        self.fields = fields


class InvalidQuantityError(ValidationError):
    """Raised when a booking quantity is not a positive integer."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message="Quantity must be a positive integer",
        )


class InvalidAmountError(ValidationError):
    """Raised when a money field is negative or not an integer."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_AMOUNT,
            message=f"{field} must be a non-negative integer",
        )
        self.field = field


class InvalidExperienceIdError(ValidationError):
    """Raised when an experience ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EXPERIENCE_ID,
            message="Invalid experience ID format",
        )


class InvalidSlotIdError(ValidationError):
    """Raised when a slot ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SLOT_ID,
            message="Invalid slot ID format",
        )


class InvalidBookingRefError(ValidationError):
    """Raised when a booking reference is not 8 characters of A-Z0-9."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_REF,
            message="Invalid booking reference format",
        )


class InvalidPromoCodeError(BusinessRuleViolation):
    """Raised when no active promo matches the submitted code."""

    def __init__(self, code: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PROMO_CODE,
            message="Invalid promo code",
        )
        self.promo_code = code


class SlotUnavailableError(BusinessRuleViolation):
    """Raised when a slot is missing or cannot hold the requested quantity."""

    def __init__(self, slot_id: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_UNAVAILABLE,
            message="Slot unavailable or not enough capacity",
        )
        self.slot_id = slot_id


class ExperienceNotFoundError(NotFoundError):
    """Raised when an experience is not found."""

    def __init__(self, experience_id: str) -> None:
        super().__init__(
            code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message="Experience not found",
        )
        self.experience_id = experience_id


class BookingNotFoundError(NotFoundError):
    """Raised when no booking carries the given reference."""

    def __init__(self, booking_ref: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_ref = booking_ref


class BookingRefConflictError(StoreError):
    """Raised by a store when an insert loses the race for a reference."""

    def __init__(self, booking_ref: str) -> None:
        super().__init__(
            f"Booking reference {booking_ref} already exists",
            code=ErrorCode.BOOKING_REF_CONFLICT,
        )
        self.booking_ref = booking_ref


class ReferenceAllocationExhaustedError(StoreError):
    """Raised when no free booking reference was found within the attempt cap."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Could not allocate a unique booking reference after {attempts} attempts",
            code=ErrorCode.REFERENCE_ALLOCATION_EXHAUSTED,
        )
        self.attempts = attempts


class ReservationTimeoutError(StoreError):
    """Raised when a reservation does not complete before its deadline."""

    retryable = True

    def __init__(self, timeout: float) -> None:
        super().__init__(
            f"Reservation did not complete within {timeout:g} seconds",
            code=ErrorCode.RESERVATION_TIMEOUT,
        )
        self.timeout = timeout
