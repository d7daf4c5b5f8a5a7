from experiences.stores.interfaces import BookingStore, ExperienceStore, PromoStore

__all__ = ["ExperienceStore", "PromoStore", "BookingStore"]
