from experiences.handlers.views import (
    BookingCreateView,
    BookingDetailView,
    ExperienceDetailView,
    ExperienceListView,
    PromoValidateView,
)

__all__ = [
    "ExperienceListView",
    "ExperienceDetailView",
    "PromoValidateView",
    "BookingCreateView",
    "BookingDetailView",
]
