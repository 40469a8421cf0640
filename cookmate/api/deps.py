from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from cookmate.config import Settings
from cookmate.services.cache import RecipeCache
from cookmate.services.llm import ChatCompleter
from cookmate.services.metrics import MetricsLogger
from cookmate.services.repo.profile_repo import JSONUserProfileRepo
from cookmate.services.repo.recipe_repo import JSONRecipeRepo

ANONYMOUS = "anonymous"

# ---- Dependencies shared by the v1 routers ----------------------------------

def get_settings() -> Settings:
    return Settings()

def get_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    user_id = (x_user_id or "").strip()
    return user_id or ANONYMOUS

def get_completer(request: Request) -> Optional[ChatCompleter]:
    # built once in create_app(); None when no credential was configured
    llm = getattr(request.app.state, "llm", None)
    return llm.completer if llm is not None else None

def get_recipe_cache(request: Request) -> RecipeCache:
    return request.app.state.recipe_cache

def get_profile_repo(settings: Settings = Depends(get_settings)) -> JSONUserProfileRepo:
    return JSONUserProfileRepo(settings)

def get_recipe_repo(settings: Settings = Depends(get_settings)) -> JSONRecipeRepo:
    return JSONRecipeRepo(settings)

def get_metrics(settings: Settings = Depends(get_settings)) -> MetricsLogger:
    return MetricsLogger(settings)
