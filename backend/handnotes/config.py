from pathlib import Path
from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_ALLOW_HEADERS = [
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    secret_key: str

    database_url: str = f"sqlite:///{BASE_DIR / 'data' / 'handnotes.sqlite3'}"

    # OpenAI-compatible chat completion gateway
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: str = ""
    ai_model: str = "google/gemini-3-flash-preview"

    access_token_expire_minutes: int = 60
    confirmation_token_expire_minutes: int = 60 * 24
    auto_confirm_signups: bool = False
    public_url: str = "http://localhost:8000"

    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    cors_allow_headers: Annotated[List[str], NoDecode] = DEFAULT_ALLOW_HEADERS

    log_level: str = "INFO"

    @field_validator("cors_origins", "cors_allow_headers", mode="before")
    @classmethod
    def split_csv(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache
def get_settings() -> "Settings":
    return Settings()

settings = get_settings()
