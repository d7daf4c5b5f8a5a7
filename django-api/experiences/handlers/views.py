"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
"""

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from experiences.cache import EXPERIENCE_LIST_KEY, experience_detail_key
from experiences.domain import ExperienceId
from experiences.domain.errors import DomainError, InvalidExperienceIdError
from experiences.handlers.errors import error_response
from experiences.handlers.serializers import (
    BookingRequestSerializer,
    BookingSerializer,
    ExperienceDetailSerializer,
    ExperienceSerializer,
    PromoValidationSerializer,
)
from experiences.services.booking_service import BookingRequest, BookingService
from experiences.services.experience_service import ExperienceService
from experiences.services.promo_service import PromoService
from experiences.stores.django_store import (
    DjangoBookingStore,
    DjangoExperienceStore,
    DjangoPromoStore,
)


def experience_service() -> ExperienceService:
    return ExperienceService(DjangoExperienceStore())


def promo_service() -> PromoService:
    return PromoService(DjangoPromoStore())


def booking_service() -> BookingService:
    return BookingService(
        DjangoBookingStore(),
        max_ref_attempts=settings.BOOKING_REF_MAX_ATTEMPTS,
        timeout=settings.BOOKING_RESERVATION_TIMEOUT,
    )


class ExperienceListView(APIView):
    """Handler for GET /api/experiences"""

    def get(self, request: Request) -> Response:
        data = cache.get(EXPERIENCE_LIST_KEY)
        if data is None:
            try:
                experiences = experience_service().list_experiences()
            except DomainError as exc:
                return error_response(exc)
            data = ExperienceSerializer(experiences, many=True).data
            cache.set(EXPERIENCE_LIST_KEY, data, settings.CATALOG_CACHE_TTL)
        return Response(data)


class ExperienceDetailView(APIView):
    """Handler for GET /api/experiences/{experience_id}"""

    def get(self, request: Request, experience_id: str) -> Response:
        try:
            cache_key = experience_detail_key(ExperienceId.from_string(experience_id))
        except ValueError:
            return error_response(InvalidExperienceIdError())

        data = cache.get(cache_key)
        if data is None:
            try:
                detail = experience_service().get_experience(experience_id)
            except DomainError as exc:
                return error_response(exc)
            data = ExperienceDetailSerializer(detail).data
            cache.set(cache_key, data, settings.CATALOG_CACHE_TTL)
        return Response(data)


class PromoValidateView(APIView):
    """Handler for POST /api/promo/validate"""

    def post(self, request: Request) -> Response:
        serializer = PromoValidationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"valid": False, "error": "Invalid code or subtotal"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            discount = promo_service().validate(
                code=serializer.validated_data.get("code"),
                subtotal=serializer.validated_data.get("subtotal"),
            )
        except DomainError as exc:
            return error_response(exc, valid=False)
        return Response({"valid": True, "discount": discount.amount.amount})


class BookingCreateView(APIView):
    """Handler for POST /api/bookings"""

    def post(self, request: Request) -> Response:
        serializer = BookingRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid booking request", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            booking = booking_service().create_booking(
                BookingRequest(**serializer.validated_data)
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(
            {
                "success": True,
                "booking_ref": booking.booking_ref.value,
                "booking": BookingSerializer(booking).data,
            }
        )


class BookingDetailView(APIView):
    """Handler for GET /api/bookings/{booking_ref}"""

    def get(self, request: Request, booking_ref: str) -> Response:
        try:
            booking = booking_service().get_booking(booking_ref)
        except DomainError as exc:
            return error_response(exc)
        return Response(BookingSerializer(booking).data)
