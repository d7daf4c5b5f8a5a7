"""Serializers for request parsing and for rendering domain models."""

from rest_framework import serializers

# Upper bound of a PositiveIntegerField column on every supported database.
MAX_STORED_INTEGER = 2_147_483_647


class ExperienceSerializer(serializers.Serializer):
    """Serializer for Experience domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    description = serializers.CharField()
    about = serializers.CharField()
    location = serializers.CharField()
    price = serializers.IntegerField(source="price.amount")
    image_url = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()


class SlotSerializer(serializers.Serializer):
    """Serializer for Slot domain model."""

    id = serializers.UUIDField(source="id.value")
    experience_id = serializers.UUIDField(source="experience_id.value")
    date = serializers.DateField()
    time = serializers.TimeField(format="%H:%M")
    capacity = serializers.IntegerField(source="capacity.value")
    booked = serializers.IntegerField(source="booked.value")
    remaining = serializers.IntegerField()
    is_sold_out = serializers.BooleanField()


class ExperienceDetailSerializer(serializers.Serializer):
    """Flattens an ExperienceDetail into the experience fields plus slots."""

    def to_representation(self, instance):
        data = ExperienceSerializer(instance.experience).data
        data["slots"] = SlotSerializer(instance.slots, many=True).data
        return data


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    booking_ref = serializers.CharField(source="booking_ref.value")
    experience_id = serializers.UUIDField(source="experience_id.value")
    slot_id = serializers.UUIDField(source="slot_id.value")
    full_name = serializers.CharField()
    email = serializers.EmailField()
    quantity = serializers.IntegerField(source="quantity.value")
    subtotal = serializers.IntegerField(source="subtotal.amount")
    taxes = serializers.IntegerField(source="taxes.amount")
    total = serializers.IntegerField(source="total.amount")
    promo_code = serializers.CharField(allow_null=True)
    discount = serializers.IntegerField(source="discount.amount")
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class PromoValidationSerializer(serializers.Serializer):
    """Input format for POST /api/promo/validate.

    Presence is checked by the service so that missing fields get the
    same error whatever the transport.
    """

    code = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    subtotal = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=MAX_STORED_INTEGER
    )


class BookingRequestSerializer(serializers.Serializer):
    """Input format for POST /api/bookings."""

    experience_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    slot_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    full_name = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=255
    )
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    quantity = serializers.IntegerField(
        required=False, allow_null=True, min_value=1, max_value=MAX_STORED_INTEGER
    )
    subtotal = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=MAX_STORED_INTEGER
    )
    taxes = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=MAX_STORED_INTEGER
    )
    total = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=MAX_STORED_INTEGER
    )
    promo_code = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )
    discount = serializers.IntegerField(
        required=False, allow_null=True, min_value=0, max_value=MAX_STORED_INTEGER
    )
