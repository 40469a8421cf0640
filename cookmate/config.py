from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from typing import Optional, List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    # LLM (any OpenAI-compatible endpoint; Groq by default)
    openai_api_key: Optional[str] = Field(None, validation_alias=AliasChoices("OPENAI_API_KEY", "GROQ_API_KEY"))
    openai_base_url: str = Field("https://api.groq.com/openai/v1", validation_alias="OPENAI_BASE_URL")
    openai_model_chat: str = Field("llama-3.1-8b-instant", validation_alias="OPENAI_MODEL_CHAT")
    llm_temperature: float = Field(0.7, validation_alias="LLM_TEMPERATURE")
    llm_top_p: float = Field(0.9, validation_alias="LLM_TOP_P")
    llm_max_tokens: int = Field(4096, validation_alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(30.0, validation_alias="LLM_TIMEOUT_SECONDS")

    # Conversation
    history_limit: int = Field(10, ge=0, validation_alias="HISTORY_LIMIT")

    # Storage
    data_dir: str = Field("data", validation_alias="DATA_DIR")
    profiles_file: str = Field("data/profiles.json", validation_alias="PROFILES_FILE")
    recipes_file: str = Field("data/recipes.json", validation_alias="RECIPES_FILE")

    # Ops
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    metrics_enabled: bool = Field(True, validation_alias="METRICS_ENABLED")
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    def has_llm_credential(self) -> bool:
        key = (self.openai_api_key or "").strip()
        # the .env.example placeholder counts as missing
        return bool(key) and key not in {"your_groq_api_key_here", "your_openai_api_key_here"}
