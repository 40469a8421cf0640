from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from cookmate.core.models import UserProfile
from cookmate.services.exceptions import RepoError
from .base import ProfileRepo
from .json_repo import JSONDocumentFile

log = logging.getLogger(__name__)


class JSONUserProfileRepo(ProfileRepo):
    """Profiles for every user in a single JSON file, keyed by user id."""

    def __init__(self, settings):
        self._doc = JSONDocumentFile(settings.profiles_file)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Stored profile for ``user_id``, or None if the user never saved one."""
        data = self._doc.read().get(user_id)
        if data is None:
            return None
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            raise RepoError(f"Corrupt profile for {user_id} in {self._doc.path}: {e}") from e

    def save_profile(self, user_id: str, profile: UserProfile) -> None:
        with self._doc.transaction() as profiles:
            profiles[user_id] = profile.model_dump(mode="json", by_alias=True)


def find_profile(repo: ProfileRepo, user_id: str) -> Optional[UserProfile]:
    """Profile for personalisation; a failing store means no personalisation, not an error."""
    try:
        return repo.get_profile(user_id)
    except Exception as e:
        log.warning("Profile lookup failed for %s, continuing without it: %s", user_id, e)
        return None
