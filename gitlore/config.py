from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    EXTENSION_SECRET: str = Field(
        "", validation_alias=AliasChoices("EXTENSION_SECRET", "GITLORE_EXTENSION_SECRET")
    )

    LLM_PROVIDER: Literal["gemini", "openai", "anthropic"] = "gemini"
    MODEL_NAME: str = "gemini-2.5-flash"
    DEFAULT_MAX_TOKENS: int = 2048
    GEMINI_API_KEY: str = ""
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""

    GITHUB_TOKEN: str = ""

    RATE_LIMIT: str = "60/minute"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
