"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in experiences/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from experiences.domain.value_objects import (
    BookingRef,
    Capacity,
    ExperienceId,
    Money,
    Quantity,
    SlotId,
)


@dataclass(frozen=True)
class Experience:
    """Domain representation of an Experience."""

    id: ExperienceId
    name: str
    description: str
    about: str
    location: str
    price: Money
    image_url: str | None
    created_at: datetime


@dataclass(frozen=True)
class Slot:
    """A dated, timed, capacity-limited occurrence of an experience."""

    id: SlotId
    experience_id: ExperienceId
    date: date
    time: time
    capacity: Capacity
    booked: Capacity

    def __post_init__(self) -> None:
        if self.booked.value > self.capacity.value:
            raise ValueError("Slot cannot be booked beyond its capacity")

    @property
    def remaining(self) -> int:
        return self.capacity.value - self.booked.value

    @property
    def is_sold_out(self) -> bool:
        return self.remaining == 0

    def can_accommodate(self, quantity: Quantity) -> bool:
        return quantity.value <= self.remaining


@dataclass(frozen=True)
class ExperienceDetail:
    """An experience together with its upcoming slots."""

    experience: Experience
    slots: tuple[Slot, ...] = ()


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class PromoCode:
    """Domain representation of a PromoCode."""

    code: str
    discount_type: DiscountType
    discount_value: int
    active: bool

    def __post_init__(self) -> None:
        if self.discount_value < 0:
            raise ValueError("Discount value cannot be negative")

    def discount_for(self, subtotal: Money) -> Money:
        """Return the discount for a subtotal, never exceeding the subtotal.

        Percentage discounts round half up to the nearest whole unit.
        """
        if self.discount_type is DiscountType.PERCENTAGE:
            # Exact integer half-up: floor(x / 100 + 1/2).
            amount = (subtotal.amount * self.discount_value * 2 + 100) // 200
        else:
            amount = self.discount_value
        return Money(min(amount, subtotal.amount))


@dataclass(frozen=True)
class Discount:
    """Result of a successful promo validation."""

    code: str
    amount: Money


class BookingStatus(Enum):
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class BookingDraft:
    """A validated booking request that has not been persisted yet."""

    experience_id: ExperienceId
    slot_id: SlotId
    full_name: str
    email: str
    quantity: Quantity
    subtotal: Money
    taxes: Money
    total: Money
    promo_code: str | None
    discount: Money


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    booking_ref: BookingRef
    experience_id: ExperienceId
    slot_id: SlotId
    full_name: str
    email: str
    quantity: Quantity
    subtotal: Money
    taxes: Money
    total: Money
    promo_code: str | None
    discount: Money
    status: BookingStatus
    created_at: datetime
