"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import date

from experiences.domain import (
    Booking,
    BookingDraft,
    BookingRef,
    Experience,
    ExperienceId,
    PromoCode,
    Slot,
    SlotId,
)


class ExperienceStore(ABC):
    """Interface for experience catalog reads."""

    @abstractmethod
    def list_experiences(self) -> list[Experience]:
        """Return all experiences ordered by created_at descending."""
        ...

    @abstractmethod
    def get_experience(self, experience_id: ExperienceId) -> Experience | None:
        """Return an experience by ID, or None if not found."""
        ...

    @abstractmethod
    def get_upcoming_slots(self, experience_id: ExperienceId, since: date) -> list[Slot]:
        """Return slots dated on or after ``since``, ordered by (date, time)."""
        ...


class PromoStore(ABC):
    """Interface for promo code lookups."""

    @abstractmethod
    def get_active_promo(self, code: str) -> PromoCode | None:
        """Return the active promo with exactly this (uppercase) code."""
        ...


class BookingStore(ABC):
    """Interface for slot capacity and booking persistence."""

    @abstractmethod
    def get_slot(self, slot_id: SlotId) -> Slot | None:
        """Return the current state of a slot, or None if not found."""
        ...

    @abstractmethod
    def booking_ref_exists(self, booking_ref: BookingRef) -> bool:
        """Check if a booking already uses this reference."""
        ...

    @abstractmethod
    def reserve(self, booking_ref: BookingRef, draft: BookingDraft) -> Booking:
        """Claim slot capacity and insert the booking as one atomic unit.

        Raises:
            SlotUnavailableError: If the slot is gone or cannot hold the
                draft's quantity. Nothing is written.
            BookingRefConflictError: If another booking took the reference
                first. Nothing is written.
            StoreError: On any other persistence failure.
        """
        ...

    @abstractmethod
    def get_booking(self, booking_ref: BookingRef) -> Booking | None:
        """Return a booking by reference, or None if not found."""
        ...
