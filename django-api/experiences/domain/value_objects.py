"""Domain primitives that enforce validity at creation time."""

import re
import secrets
import string
from dataclasses import dataclass
from typing import Self
from uuid import UUID

BOOKING_REF_ALPHABET = string.ascii_uppercase + string.digits
BOOKING_REF_LENGTH = 8

_BOOKING_REF_PATTERN = re.compile(rf"^[A-Z0-9]{{{BOOKING_REF_LENGTH}}}$")


@dataclass(frozen=True)
class ExperienceId:
    """Unique identifier for an Experience."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class SlotId:
    """Unique identifier for a Slot."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))


@dataclass(frozen=True)
class BookingRef:
    """Opaque 8-character reference users quote back for support."""

    value: str

    def __post_init__(self) -> None:
        if not _BOOKING_REF_PATTERN.match(self.value):
            raise ValueError("Booking reference must be 8 characters of A-Z0-9")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().upper())

    @classmethod
    def generate(cls) -> Self:
        """Draw a reference uniformly from the 36-symbol alphabet."""
        return cls(
            value="".join(
                secrets.choice(BOOKING_REF_ALPHABET) for _ in range(BOOKING_REF_LENGTH)
            )
        )


@dataclass(frozen=True)
class Money:
    """Integer currency amount, in whatever unit the caller submits."""

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class Quantity:
    """Number of places requested in a single booking."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Quantity must be a positive integer")
