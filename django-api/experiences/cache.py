"""Cache keys for the experience catalog read paths."""

from django.core.cache import cache

from experiences.domain import ExperienceId

EXPERIENCE_LIST_KEY = "experiences:list"


def experience_detail_key(experience_id: ExperienceId) -> str:
    return f"experiences:{experience_id.value}"


def invalidate_experience_list() -> None:
    cache.delete(EXPERIENCE_LIST_KEY)


def invalidate_experience_detail(experience_id: ExperienceId) -> None:
    cache.delete(experience_detail_key(experience_id))
