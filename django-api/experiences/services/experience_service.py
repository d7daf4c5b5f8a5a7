"""Experience service - read-only catalog of experiences and their slots."""

from datetime import date, datetime, timezone
from typing import Callable

from experiences.domain import Experience, ExperienceDetail, ExperienceId
from experiences.domain.errors import ExperienceNotFoundError, InvalidExperienceIdError
from experiences.stores.interfaces import ExperienceStore


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ExperienceService:
    """Service for experience catalog operations."""

    def __init__(
        self, store: ExperienceStore, *, today: Callable[[], date] = _utc_today
    ) -> None:
        self._store = store
        self._today = today

    def list_experiences(self) -> list[Experience]:
        """Return all experiences, newest first."""
        return self._store.list_experiences()

    def get_experience(self, experience_id: str) -> ExperienceDetail:
        """Return an experience with its slots from today onwards.

        Raises:
            InvalidExperienceIdError: If the experience_id is not a valid UUID.
            ExperienceNotFoundError: If the experience does not exist.
        """
        try:
            parsed_id = ExperienceId.from_string(experience_id)
        except ValueError:
            raise InvalidExperienceIdError() from None

        experience = self._store.get_experience(parsed_id)
        if experience is None:
            raise ExperienceNotFoundError(experience_id)

        slots = self._store.get_upcoming_slots(parsed_id, self._today())
        return ExperienceDetail(experience=experience, slots=tuple(slots))
