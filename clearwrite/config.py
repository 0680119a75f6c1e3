import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel

API_KEY_ENV = "GEMINI_API_KEY"
API_URL_ENV = "GEMINI_API_URL"


class Settings(BaseModel):
    api_key: Optional[str] = None
    api_url: Optional[str] = None
    request_timeout: float = 60.0
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv(API_KEY_ENV) or None,
            api_url=os.getenv(API_URL_ENV) or None,
            request_timeout=float(os.getenv("CLEARWRITE_TIMEOUT", "60")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes"),
        )

    def missing_credentials(self) -> list[str]:
        missing = []
        if not self.api_key:
            missing.append(API_KEY_ENV)
        if not self.api_url:
            missing.append(API_URL_ENV)
        return missing


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


__all__ = ["API_KEY_ENV", "API_URL_ENV", "Settings", "get_settings"]
