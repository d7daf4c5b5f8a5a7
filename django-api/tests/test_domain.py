"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import re
from datetime import date, time
from uuid import UUID, uuid4

import pytest

from experiences.domain import (
    BookingRef,
    Capacity,
    DiscountType,
    ExperienceId,
    Money,
    PromoCode,
    Quantity,
    Slot,
    SlotId,
)

REF_PATTERN = re.compile(r"^[A-Z0-9]{8}$")


def make_slot(capacity: int, booked: int) -> Slot:
    return Slot(
        id=SlotId(uuid4()),
        experience_id=ExperienceId(uuid4()),
        date=date(2030, 1, 1),
        time=time(9, 0),
        capacity=Capacity(capacity),
        booked=Capacity(booked),
    )


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        assert Money(1500).amount == 1500

    def test_money_accepts_zero(self):
        assert Money(0).amount == 0

    def test_money_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Money(-1)

    def test_money_str_format(self):
        assert str(Money(250)) == "250"


class TestCapacity:
    """Tests for Capacity and Quantity value objects."""

    def test_capacity_accepts_zero(self):
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Capacity(-1)

    def test_quantity_must_be_positive(self):
        assert Quantity(1).value == 1
        with pytest.raises(ValueError):
            Quantity(0)


class TestExperienceId:
    """Tests for ExperienceId value object."""

    def test_from_string_valid_uuid(self):
        raw = "4b7c2a4e-2f0b-4c1d-9b57-3f7f1d3a8e21"
        assert ExperienceId.from_string(raw).value == UUID(raw)

    def test_from_string_invalid_uuid(self):
        with pytest.raises(ValueError):
            ExperienceId.from_string("not-a-uuid")


class TestBookingRef:
    """Tests for BookingRef value object."""

    def test_generate_produces_eight_uppercase_alphanumerics(self):
        assert REF_PATTERN.match(BookingRef.generate().value)

    def test_generated_refs_are_distinct(self):
        refs = {BookingRef.generate().value for _ in range(10_000)}
        assert len(refs) == 10_000
        assert all(REF_PATTERN.match(ref) for ref in refs)

    def test_from_string_normalizes_case(self):
        assert BookingRef.from_string(" ab12cd34 ").value == "AB12CD34"

    @pytest.mark.parametrize("value", ["ABC", "ABCDEFGHI", "ABCD-123", "abcd1234"])
    def test_rejects_malformed_values(self, value):
        with pytest.raises(ValueError):
            BookingRef(value)


class TestSlot:
    def test_remaining_and_sold_out(self):
        slot = make_slot(capacity=5, booked=3)
        assert slot.remaining == 2
        assert not slot.is_sold_out
        assert make_slot(capacity=5, booked=5).is_sold_out

    def test_can_accommodate_up_to_remaining(self):
        slot = make_slot(capacity=5, booked=3)
        assert slot.can_accommodate(Quantity(2))
        assert not slot.can_accommodate(Quantity(3))

    def test_booked_cannot_exceed_capacity(self):
        with pytest.raises(ValueError):
            make_slot(capacity=5, booked=6)


class TestPromoDiscount:
    def test_percentage_discount(self):
        promo = PromoCode("SAVE10", DiscountType.PERCENTAGE, 10, True)
        assert promo.discount_for(Money(1000)) == Money(100)

    def test_percentage_rounds_half_up(self):
        promo = PromoCode("SAVE15", DiscountType.PERCENTAGE, 15, True)
        assert promo.discount_for(Money(10)) == Money(2)
        assert promo.discount_for(Money(3)) == Money(0)

    def test_percentage_of_huge_subtotal_is_exact(self):
        promo = PromoCode("SAVE15", DiscountType.PERCENTAGE, 15, True)
        assert promo.discount_for(Money(10**30 + 10)) == Money(15 * 10**28 + 2)

    def test_fixed_discount_is_capped_at_subtotal(self):
        promo = PromoCode("FLAT150", DiscountType.FIXED, 150, True)
        assert promo.discount_for(Money(100)) == Money(100)
        assert promo.discount_for(Money(1000)) == Money(150)

    def test_zero_subtotal_gives_zero_discount(self):
        for promo in (
            PromoCode("SAVE10", DiscountType.PERCENTAGE, 10, True),
            PromoCode("FLAT150", DiscountType.FIXED, 150, True),
        ):
            assert promo.discount_for(Money(0)) == Money(0)

    @pytest.mark.parametrize("discount_type", list(DiscountType))
    @pytest.mark.parametrize("discount_value", [0, 1, 50, 100, 250])
    def test_discount_stays_within_subtotal(self, discount_type, discount_value):
        promo = PromoCode("ANY", discount_type, discount_value, True)
        for subtotal in (0, 1, 7, 99, 1000, 10**30):
            discount = promo.discount_for(Money(subtotal)).amount
            assert 0 <= discount <= subtotal

    def test_rejects_negative_discount_value(self):
        with pytest.raises(ValueError):
            PromoCode("BAD", DiscountType.FIXED, -5, True)
