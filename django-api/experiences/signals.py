"""Django signals for cache invalidation.

Slot capacity changes made by a reservation go through a conditional
queryset update, which does not emit post_save; the booking store sends
``slot_reserved`` after commit instead.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from experiences.cache import invalidate_experience_detail, invalidate_experience_list
from experiences.domain import ExperienceId
from experiences.models import Experience, Slot

slot_reserved = Signal()


@receiver([post_save, post_delete], sender=Experience)
def invalidate_experience_cache(sender, instance, **kwargs):
    """Invalidate caches when an experience is saved or deleted."""
    invalidate_experience_list()
    invalidate_experience_detail(ExperienceId(instance.pk))


@receiver([post_save, post_delete], sender=Slot)
def invalidate_slot_cache(sender, instance, **kwargs):
    """Invalidate the owning experience when a slot is saved or deleted."""
    invalidate_experience_detail(ExperienceId(instance.experience_id))


@receiver(slot_reserved)
def invalidate_reserved_slot_cache(sender, experience_id: ExperienceId, **kwargs):
    invalidate_experience_detail(experience_id)
