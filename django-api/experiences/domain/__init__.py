from experiences.domain.models import (
    Booking,
    BookingDraft,
    BookingStatus,
    Discount,
    DiscountType,
    Experience,
    ExperienceDetail,
    PromoCode,
    Slot,
)
from experiences.domain.value_objects import (
    BookingRef,
    Capacity,
    ExperienceId,
    Money,
    Quantity,
    SlotId,
)

__all__ = [
    "Experience",
    "ExperienceDetail",
    "Slot",
    "PromoCode",
    "DiscountType",
    "Discount",
    "Booking",
    "BookingDraft",
    "BookingStatus",
    "ExperienceId",
    "SlotId",
    "BookingRef",
    "Money",
    "Capacity",
    "Quantity",
]
