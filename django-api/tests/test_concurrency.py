"""Overbooking tests: concurrent reservations against one slot.

Run with: pytest tests/test_concurrency.py -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from experiences import models
from experiences.domain import (
    BookingDraft,
    BookingRef,
    ExperienceId,
    Money,
    Quantity,
    SlotId,
)
from experiences.domain.errors import SlotUnavailableError
from experiences.services import BookingRequest, BookingService
from experiences.stores.django_store import DjangoBookingStore

ATTEMPTS = 12


def request_for(experience_id, slot_id, quantity: int = 1) -> BookingRequest:
    return BookingRequest(
        experience_id=str(experience_id),
        slot_id=str(slot_id),
        full_name="Concurrent Guest",
        email="guest@example.com",
        quantity=quantity,
        subtotal=100 * quantity,
    )


class TestConcurrentReservations:
    def test_only_capacity_worth_of_bookings_succeed(self, memory_store):
        experience = memory_store.add_experience()
        slot = memory_store.add_slot(experience, capacity=5, booked=0)
        service = BookingService(memory_store)
        barrier = threading.Barrier(ATTEMPTS)

        def attempt(_):
            barrier.wait()
            try:
                service.create_booking(request_for(experience.id.value, slot.id.value))
            except SlotUnavailableError:
                return "rejected"
            return "booked"

        with ThreadPoolExecutor(max_workers=ATTEMPTS) as pool:
            outcomes = list(pool.map(attempt, range(ATTEMPTS)))

        assert outcomes.count("booked") == 5
        assert outcomes.count("rejected") == ATTEMPTS - 5
        assert memory_store.slots[slot.id].booked.value == 5
        assert sum(b.quantity.value for b in memory_store.bookings.values()) == 5


@pytest.mark.django_db
class TestConditionalSlotUpdate:
    """The database store re-checks capacity at write time."""

    def test_stale_read_cannot_overbook(self, slot, monkeypatch):
        store = DjangoBookingStore()
        stale = store.get_slot(SlotId(slot.id))
        models.Slot.objects.filter(pk=slot.pk).update(booked=5)
        monkeypatch.setattr(store, "get_slot", lambda slot_id: stale)
        service = BookingService(store)

        with pytest.raises(SlotUnavailableError):
            service.create_booking(request_for(slot.experience_id, slot.id, quantity=2))

        slot.refresh_from_db()
        assert slot.booked == 5
        assert not models.Booking.objects.exists()

    def test_reserve_rejects_quantity_beyond_remaining(self, slot):
        store = DjangoBookingStore()
        draft = BookingDraft(
            experience_id=ExperienceId(slot.experience_id),
            slot_id=SlotId(slot.id),
            full_name="Direct Caller",
            email="direct@example.com",
            quantity=Quantity(3),
            subtotal=Money(300),
            taxes=Money(0),
            total=Money(300),
            promo_code=None,
            discount=Money(0),
        )

        with pytest.raises(SlotUnavailableError):
            store.reserve(BookingRef("ABCD1234"), draft)

        slot.refresh_from_db()
        assert slot.booked == 3
        assert not store.booking_ref_exists(BookingRef("ABCD1234"))
