from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cookmate.api.v1.chat import router as chat_router
from cookmate.api.v1.profile import router as profile_router
from cookmate.api.v1.recipes import router as recipes_router
from cookmate.api.v1.suggest import router as suggest_router
from cookmate.config import Settings
from cookmate.services.cache import RecipeCache
from cookmate.services.llm import init_completer

log = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Ensure data dir exists so repos can write
    os.makedirs(app.state.settings.data_dir, exist_ok=True)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="CookMate API", version="1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.recipe_cache = RecipeCache()
    app.state.llm = init_completer(settings)
    if app.state.llm.ok:
        log.info("LLM ready: %s at %s", settings.openai_model_chat, settings.openai_base_url)

    # CORS (narrow it down in .env via CORS_ALLOW_ORIGINS if you want)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(chat_router)
    app.include_router(recipes_router)
    app.include_router(suggest_router)
    app.include_router(profile_router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz():
        llm = app.state.llm
        return {"status": "ready", "llm": "configured" if llm.ok else "missing_credential"}

    return app

app = create_app()
