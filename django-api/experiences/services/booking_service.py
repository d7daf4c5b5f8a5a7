"""Booking service - the reservation engine.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Financial fields (subtotal, taxes, total, discount) are persisted as the
client submitted them; they are not recomputed from slot price or promo.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

from experiences.domain import (
    Booking,
    BookingDraft,
    BookingRef,
    ExperienceId,
    Money,
    Quantity,
    SlotId,
)
from experiences.domain.errors import (
    BookingNotFoundError,
    BookingRefConflictError,
    InvalidAmountError,
    InvalidBookingRefError,
    InvalidExperienceIdError,
    InvalidQuantityError,
    InvalidSlotIdError,
    MissingFieldsError,
    ReferenceAllocationExhaustedError,
    ReservationTimeoutError,
    SlotUnavailableError,
)
from experiences.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "experience_id",
    "slot_id",
    "full_name",
    "email",
    "quantity",
    "subtotal",
)

DEFAULT_MAX_REF_ATTEMPTS = 10
DEFAULT_RESERVATION_TIMEOUT = 5.0


@dataclass
class BookingRequest:
    experience_id: str | None = None
    slot_id: str | None = None
    full_name: str | None = None
    email: str | None = None
    quantity: int | None = None
    subtotal: int | None = None
    taxes: int | None = None
    total: int | None = None
    promo_code: str | None = None
    discount: int | None = None


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _money(value: int | None, field: str) -> Money:
    try:
        return Money(value or 0)
    except ValueError:
        raise InvalidAmountError(field) from None


class BookingService:
    """Service for creating and looking up bookings."""

    def __init__(
        self,
        store: BookingStore,
        *,
        max_ref_attempts: int = DEFAULT_MAX_REF_ATTEMPTS,
        timeout: float = DEFAULT_RESERVATION_TIMEOUT,
        generate_ref: Callable[[], BookingRef] = BookingRef.generate,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._max_ref_attempts = max_ref_attempts
        self._timeout = timeout
        self._generate_ref = generate_ref
        self._clock = clock

    def create_booking(self, request: BookingRequest) -> Booking:
        """Reserve slot capacity and persist a booking.

        Raises:
            MissingFieldsError: If a required field is absent. Nothing is
                read or written.
            InvalidQuantityError, InvalidAmountError, InvalidExperienceIdError,
            InvalidSlotIdError: If a field is malformed.
            SlotUnavailableError: If the slot does not exist, belongs to a
                different experience, or lacks capacity.
            ReferenceAllocationExhaustedError: If no free reference was found.
            ReservationTimeoutError: If the reservation ran past its deadline.
            StoreError: On persistence failure.
        """
        draft = self._build_draft(request)
        deadline = self._clock() + self._timeout

        slot = self._store.get_slot(draft.slot_id)
        if (
            slot is None
            or slot.experience_id != draft.experience_id
            or not slot.can_accommodate(draft.quantity)
        ):
            logger.info(
                "Slot %s cannot take %d more", draft.slot_id.value, draft.quantity.value
            )
            raise SlotUnavailableError(str(draft.slot_id.value))

        for attempt in range(1, self._max_ref_attempts + 1):
            booking_ref = self._draw_reference(attempt, deadline)
            if booking_ref is None:
                continue
            self._check_deadline(deadline)
            try:
                booking = self._store.reserve(booking_ref, draft)
            except BookingRefConflictError:
                logger.warning(
                    "Booking reference %s taken concurrently (attempt %d)",
                    booking_ref,
                    attempt,
                )
                continue
            except SlotUnavailableError:
                logger.info(
                    "Slot %s filled up before reservation of %d",
                    draft.slot_id.value,
                    draft.quantity.value,
                )
                raise
            logger.info(
                "Booking %s created for slot %s (quantity %d)",
                booking.booking_ref,
                booking.slot_id.value,
                booking.quantity.value,
            )
            return booking

        logger.error("Gave up allocating a booking reference")
        raise ReferenceAllocationExhaustedError(self._max_ref_attempts)

    def allocate_reference(self, deadline: float | None = None) -> BookingRef:
        """Generate a booking reference no existing booking uses.

        Raises:
            ReferenceAllocationExhaustedError: After max_ref_attempts collisions.
            ReservationTimeoutError: If the deadline passes first.
        """
        for attempt in range(1, self._max_ref_attempts + 1):
            booking_ref = self._draw_reference(attempt, deadline)
            if booking_ref is not None:
                return booking_ref
        logger.error("Gave up allocating a booking reference")
        raise ReferenceAllocationExhaustedError(self._max_ref_attempts)

    def _draw_reference(self, attempt: int, deadline: float | None) -> BookingRef | None:
        """Draw one reference, or None if an existing booking already has it."""
        self._check_deadline(deadline)
        booking_ref = self._generate_ref()
        if self._store.booking_ref_exists(booking_ref):
            logger.warning(
                "Booking reference %s already exists (attempt %d)", booking_ref, attempt
            )
            return None
        return booking_ref

    def _check_deadline(self, deadline: float | None) -> None:
        if deadline is not None and self._clock() > deadline:
            logger.error("Reservation timed out before a booking was stored")
            raise ReservationTimeoutError(self._timeout)

    def get_booking(self, booking_ref: str) -> Booking:
        """Return a booking by its reference.

        Raises:
            InvalidBookingRefError: If the reference is malformed.
            BookingNotFoundError: If no booking carries the reference.
        """
        try:
            ref = BookingRef.from_string(booking_ref)
        except ValueError:
            raise InvalidBookingRefError() from None

        booking = self._store.get_booking(ref)
        if booking is None:
            raise BookingNotFoundError(ref.value)
        return booking

    def _build_draft(self, request: BookingRequest) -> BookingDraft:
        missing = [name for name in REQUIRED_FIELDS if _is_missing(getattr(request, name))]
        if missing:
            raise MissingFieldsError(missing)

        try:
            experience_id = ExperienceId.from_string(str(request.experience_id))
        except ValueError:
            raise InvalidExperienceIdError() from None
        try:
            slot_id = SlotId.from_string(str(request.slot_id))
        except ValueError:
            raise InvalidSlotIdError() from None
        try:
            quantity = Quantity(request.quantity)
        except ValueError:
            raise InvalidQuantityError() from None

        promo_code = request.promo_code.strip().upper() if request.promo_code else None

        return BookingDraft(
            experience_id=experience_id,
            slot_id=slot_id,
            full_name=request.full_name.strip(),
            email=request.email.strip(),
            quantity=quantity,
            subtotal=_money(request.subtotal, "subtotal"),
            taxes=_money(request.taxes, "taxes"),
            total=_money(request.total, "total"),
            promo_code=promo_code or None,
            discount=_money(request.discount, "discount"),
        )
