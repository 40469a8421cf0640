from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
from cookmate.core.models import RecipeRecord, UserProfile

class ProfileRepo(ABC):
    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[UserProfile]: ...
    @abstractmethod
    def save_profile(self, user_id: str, profile: UserProfile) -> None: ...

class RecipeRepo(ABC):
    @abstractmethod
    def upsert_detected_recipe(self, name: str, user_id: str, servings: Optional[str] = None,
                               difficulty: Optional[str] = None) -> str: ...
    @abstractmethod
    def get_recipe_by_name(self, name: str) -> Optional[RecipeRecord]: ...
    @abstractmethod
    def save_recipe(self, record: RecipeRecord, user_id: str) -> str: ...
