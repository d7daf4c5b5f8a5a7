"""Django ORM implementations of the experience, promo and booking stores."""

import logging
from contextlib import contextmanager
from datetime import date

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F

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
    Quantity,
    Slot,
    SlotId,
)
from experiences.domain.errors import (
    BookingRefConflictError,
    SlotUnavailableError,
    StoreError,
)
from experiences.signals import slot_reserved
from experiences.stores.interfaces import BookingStore, ExperienceStore, PromoStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors():
    """Surface database failures as StoreError with the underlying message."""
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Store operation failed")
        raise StoreError(str(exc)) from exc


def _to_experience(row: models.Experience) -> Experience:
    return Experience(
        id=ExperienceId(row.id),
        name=row.name,
        description=row.description,
        about=row.about,
        location=row.location,
        price=Money(row.price),
        image_url=row.image_url,
        created_at=row.created_at,
    )


def _to_slot(row: models.Slot) -> Slot:
    return Slot(
        id=SlotId(row.id),
        experience_id=ExperienceId(row.experience_id),
        date=row.date,
        time=row.time,
        capacity=Capacity(row.capacity),
        booked=Capacity(row.booked),
    )


def _to_promo(row: models.PromoCode) -> PromoCode:
    return PromoCode(
        code=row.code,
        discount_type=DiscountType(row.discount_type),
        discount_value=row.discount_value,
        active=row.active,
    )


def _to_booking(row: models.Booking) -> Booking:
    return Booking(
        booking_ref=BookingRef(row.booking_ref),
        experience_id=ExperienceId(row.experience_id),
        slot_id=SlotId(row.slot_id),
        full_name=row.full_name,
        email=row.email,
        quantity=Quantity(row.quantity),
        subtotal=Money(row.subtotal),
        taxes=Money(row.taxes),
        total=Money(row.total),
        promo_code=row.promo_code,
        discount=Money(row.discount),
        status=BookingStatus(row.status),
        created_at=row.created_at,
    )


class DjangoExperienceStore(ExperienceStore):
    """Experience catalog reads using Django ORM."""

    def list_experiences(self) -> list[Experience]:
        with _store_errors():
            rows = models.Experience.objects.order_by("-created_at")
            return [_to_experience(row) for row in rows]

    def get_experience(self, experience_id: ExperienceId) -> Experience | None:
        with _store_errors():
            row = models.Experience.objects.filter(pk=experience_id.value).first()
        return _to_experience(row) if row is not None else None

    def get_upcoming_slots(self, experience_id: ExperienceId, since: date) -> list[Slot]:
        with _store_errors():
            rows = models.Slot.objects.filter(
                experience_id=experience_id.value, date__gte=since
            ).order_by("date", "time")
            return [_to_slot(row) for row in rows]


class DjangoPromoStore(PromoStore):
    """Promo code lookups using Django ORM."""

    def get_active_promo(self, code: str) -> PromoCode | None:
        with _store_errors():
            row = models.PromoCode.objects.filter(code=code, active=True).first()
        return _to_promo(row) if row is not None else None


class DjangoBookingStore(BookingStore):
    """Slot reservation and booking persistence using Django ORM.

    Capacity is claimed with a single conditional UPDATE, so two concurrent
    reservations can never both observe the same free places.
    """

    def get_slot(self, slot_id: SlotId) -> Slot | None:
        with _store_errors():
            row = models.Slot.objects.filter(pk=slot_id.value).first()
        return _to_slot(row) if row is not None else None

    def booking_ref_exists(self, booking_ref: BookingRef) -> bool:
        with _store_errors():
            return models.Booking.objects.filter(booking_ref=booking_ref.value).exists()

    def reserve(self, booking_ref: BookingRef, draft: BookingDraft) -> Booking:
        quantity = draft.quantity.value
        with _store_errors():
            try:
                with transaction.atomic():
                    claimed = models.Slot.objects.filter(
                        pk=draft.slot_id.value,
                        experience_id=draft.experience_id.value,
                        booked__lte=F("capacity") - quantity,
                    ).update(booked=F("booked") + quantity)
                    if not claimed:
                        raise SlotUnavailableError(str(draft.slot_id.value))
                    row = models.Booking.objects.create(
                        booking_ref=booking_ref.value,
                        experience_id=draft.experience_id.value,
                        slot_id=draft.slot_id.value,
                        full_name=draft.full_name,
                        email=draft.email,
                        quantity=quantity,
                        subtotal=draft.subtotal.amount,
                        taxes=draft.taxes.amount,
                        total=draft.total.amount,
                        promo_code=draft.promo_code,
                        discount=draft.discount.amount,
                        status=BookingStatus.CONFIRMED.value,
                    )
            except IntegrityError as exc:
                if models.Booking.objects.filter(booking_ref=booking_ref.value).exists():
                    raise BookingRefConflictError(booking_ref.value) from exc
                raise
        transaction.on_commit(
            lambda: slot_reserved.send(
                sender=models.Slot,
                slot_id=draft.slot_id,
                experience_id=draft.experience_id,
            )
        )
        return _to_booking(row)

    def get_booking(self, booking_ref: BookingRef) -> Booking | None:
        with _store_errors():
            row = models.Booking.objects.filter(booking_ref=booking_ref.value).first()
        return _to_booking(row) if row is not None else None
