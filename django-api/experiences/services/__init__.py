from experiences.services.booking_service import BookingRequest, BookingService
from experiences.services.experience_service import ExperienceService
from experiences.services.promo_service import PromoService

__all__ = ["BookingRequest", "BookingService", "ExperienceService", "PromoService"]
