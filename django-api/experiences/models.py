"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Experience(models.Model):
    """Persistence model for experiences."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField()
    about = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255)
    price = models.PositiveIntegerField()
    image_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="experience_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Slot(models.Model):
    """Persistence model for bookable slots."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    experience = models.ForeignKey(
        Experience, on_delete=models.CASCADE, related_name="slots"
    )
    date = models.DateField()
    time = models.TimeField()
    capacity = models.PositiveIntegerField()
    booked = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date", "time"]
        indexes = [
            models.Index(
                fields=["experience", "date", "time"], name="slot_experience_date_idx"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(booked__lte=models.F("capacity")),
                name="slot_booked_lte_capacity",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.experience.name} - {self.date} {self.time}"


class PromoCode(models.Model):
    """Persistence model for promo codes."""

    class DiscountType(models.TextChoices):
        PERCENTAGE = "percentage", "Percentage"
        FIXED = "fixed", "Fixed amount"

    code = models.CharField(max_length=50, unique=True)
    discount_type = models.CharField(max_length=20, choices=DiscountType.choices)
    discount_value = models.PositiveIntegerField()
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def save(self, *args, **kwargs):
        self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.code


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_ref = models.CharField(max_length=8, unique=True)
    experience = models.ForeignKey(
        Experience, on_delete=models.PROTECT, related_name="bookings"
    )
    slot = models.ForeignKey(Slot, on_delete=models.PROTECT, related_name="bookings")
    full_name = models.CharField(max_length=255)
    email = models.EmailField()
    quantity = models.PositiveIntegerField()
    subtotal = models.PositiveIntegerField()
    taxes = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(default=0)
    promo_code = models.CharField(max_length=50, blank=True, null=True)
    discount = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, default="confirmed")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["slot"], name="booking_slot_idx"),
        ]

    def __str__(self) -> str:
        return self.booking_ref
