"""Pytest configuration and shared fixtures."""

import threading
from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from experiences import models
from experiences.domain import (
    Booking,
    BookingDraft,
    BookingRef,
    BookingStatus,
    Capacity,
    DiscountType,
    Experience,
    ExperienceId,
    Money,
    PromoCode,
    Slot,
    SlotId,
)
from experiences.domain.errors import BookingRefConflictError, SlotUnavailableError
from experiences.services import BookingService, ExperienceService, PromoService
from experiences.stores import BookingStore, ExperienceStore, PromoStore


class InMemoryStore(ExperienceStore, PromoStore, BookingStore):
    """Dict-backed store. ``reserve`` is atomic under a lock; reads are not."""

    def __init__(self) -> None:
        self.experiences: dict[ExperienceId, Experience] = {}
        self.slots: dict[SlotId, Slot] = {}
        self.promos: dict[str, PromoCode] = {}
        self.bookings: dict[str, Booking] = {}
        self._lock = threading.Lock()

    def add_experience(
        self, name: str = "Kayaking", created_at: datetime | None = None
    ) -> Experience:
        experience = Experience(
            id=ExperienceId(uuid4()),
            name=name,
            description="Paddle the bay",
            about="Gear included",
            location="Goa",
            price=Money(999),
            image_url=None,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self.experiences[experience.id] = experience
        return experience

    def add_slot(
        self,
        experience: Experience,
        capacity: int = 5,
        booked: int = 0,
        on: date | None = None,
        at: time = time(9, 0),
    ) -> Slot:
        slot = Slot(
            id=SlotId(uuid4()),
            experience_id=experience.id,
            date=on or date(2030, 1, 1),
            time=at,
            capacity=Capacity(capacity),
            booked=Capacity(booked),
        )
        self.slots[slot.id] = slot
        return slot

    def add_promo(
        self,
        code: str,
        discount_type: DiscountType,
        discount_value: int,
        active: bool = True,
    ) -> PromoCode:
        promo = PromoCode(
            code=code,
            discount_type=discount_type,
            discount_value=discount_value,
            active=active,
        )
        self.promos[code] = promo
        return promo

    def list_experiences(self) -> list[Experience]:
        return sorted(self.experiences.values(), key=lambda e: e.created_at, reverse=True)

    def get_experience(self, experience_id: ExperienceId) -> Experience | None:
        return self.experiences.get(experience_id)

    def get_upcoming_slots(self, experience_id: ExperienceId, since: date) -> list[Slot]:
        slots = [
            slot
            for slot in self.slots.values()
            if slot.experience_id == experience_id and slot.date >= since
        ]
        return sorted(slots, key=lambda s: (s.date, s.time))

    def get_active_promo(self, code: str) -> PromoCode | None:
        promo = self.promos.get(code)
        return promo if promo is not None and promo.active else None

    def get_slot(self, slot_id: SlotId) -> Slot | None:
        return self.slots.get(slot_id)

    def booking_ref_exists(self, booking_ref: BookingRef) -> bool:
        return booking_ref.value in self.bookings

    def reserve(self, booking_ref: BookingRef, draft: BookingDraft) -> Booking:
        with self._lock:
            slot = self.slots.get(draft.slot_id)
            if (
                slot is None
                or slot.experience_id != draft.experience_id
                or not slot.can_accommodate(draft.quantity)
            ):
                raise SlotUnavailableError(str(draft.slot_id.value))
            if booking_ref.value in self.bookings:
                raise BookingRefConflictError(booking_ref.value)
            self.slots[slot.id] = replace(
                slot, booked=Capacity(slot.booked.value + draft.quantity.value)
            )
            booking = Booking(
                booking_ref=booking_ref,
                experience_id=draft.experience_id,
                slot_id=draft.slot_id,
                full_name=draft.full_name,
                email=draft.email,
                quantity=draft.quantity,
                subtotal=draft.subtotal,
                taxes=draft.taxes,
                total=draft.total,
                promo_code=draft.promo_code,
                discount=draft.discount,
                status=BookingStatus.CONFIRMED,
                created_at=datetime.now(timezone.utc),
            )
            self.bookings[booking_ref.value] = booking
            return booking

    def get_booking(self, booking_ref: BookingRef) -> Booking | None:
        return self.bookings.get(booking_ref.value)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def experience_service(memory_store: InMemoryStore) -> ExperienceService:
    return ExperienceService(memory_store, today=lambda: date(2030, 1, 1))


@pytest.fixture
def promo_service(memory_store: InMemoryStore) -> PromoService:
    return PromoService(memory_store)


@pytest.fixture
def booking_service(memory_store: InMemoryStore) -> BookingService:
    return BookingService(memory_store)


@pytest.fixture
def experience(db) -> models.Experience:
    return models.Experience.objects.create(
        name="Sunrise Trek",
        description="A guided hike to the ridge",
        about="Bring water",
        location="Manali",
        price=1500,
    )


@pytest.fixture
def slot(experience: models.Experience) -> models.Slot:
    return models.Slot.objects.create(
        experience=experience,
        date=date.today() + timedelta(days=7),
        time=time(6, 30),
        capacity=5,
        booked=3,
    )


@pytest.fixture
def promo_codes(db) -> None:
    models.PromoCode.objects.create(
        code="SAVE10", discount_type="percentage", discount_value=10
    )
    models.PromoCode.objects.create(
        code="FLAT150", discount_type="fixed", discount_value=150
    )
    models.PromoCode.objects.create(
        code="EXPIRED", discount_type="fixed", discount_value=50, active=False
    )
