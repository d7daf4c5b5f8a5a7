from django.urls import path

from experiences.handlers import (
    BookingCreateView,
    BookingDetailView,
    ExperienceDetailView,
    ExperienceListView,
    PromoValidateView,
)

urlpatterns = [
    path("experiences", ExperienceListView.as_view(), name="experience-list"),
    path(
        "experiences/<str:experience_id>",
        ExperienceDetailView.as_view(),
        name="experience-detail",
    ),
    path("promo/validate", PromoValidateView.as_view(), name="promo-validate"),
    path("bookings", BookingCreateView.as_view(), name="booking-create"),
    path(
        "bookings/<str:booking_ref>",
        BookingDetailView.as_view(),
        name="booking-detail",
    ),
]
