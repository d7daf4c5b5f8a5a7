"""Promo service - validates promo codes and computes discounts."""

import logging

from experiences.domain import Discount, Money
from experiences.domain.errors import (
    InvalidAmountError,
    InvalidPromoCodeError,
    MissingFieldsError,
)
from experiences.stores.interfaces import PromoStore

logger = logging.getLogger(__name__)


class PromoService:
    """Service for promo code validation. Read-only."""

    def __init__(self, store: PromoStore) -> None:
        self._store = store

    def validate(self, code: str | None, subtotal: int | None) -> Discount:
        """Return the discount a code grants on a subtotal.

        Codes match case-insensitively. The discount never exceeds the
        subtotal.

        Raises:
            MissingFieldsError: If code or subtotal is absent.
            InvalidAmountError: If subtotal is negative.
            InvalidPromoCodeError: If no active promo matches the code.
        """
        missing = []
        if code is None or not code.strip():
            missing.append("code")
        if subtotal is None:
            missing.append("subtotal")
        if missing:
            raise MissingFieldsError(missing, message="Missing code or subtotal")

        try:
            amount = Money(subtotal)
        except ValueError:
            raise InvalidAmountError("subtotal") from None

        normalized = code.strip().upper()
        promo = self._store.get_active_promo(normalized)
        if promo is None:
            logger.info("Rejected promo code %s", normalized)
            raise InvalidPromoCodeError(normalized)

        return Discount(code=promo.code, amount=promo.discount_for(amount))
