"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_SDSC2_BASE_URL = "http://apis.data.go.kr/B553077/api/open/sdsc2/storeListInRadius"
DEFAULT_USER_AGENT = "onyak-ai-rail/1.0"


class ConfigurationError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    ta_service_key: str = ""
    geocoder_user_agent: str = DEFAULT_USER_AGENT
    nominatim_base_url: str = DEFAULT_NOMINATIM_BASE_URL
    sdsc2_base_url: str = DEFAULT_SDSC2_BASE_URL
    http_timeout: float = 10.0
    port: int = 8080

    @property
    def has_service_key(self) -> bool:
        return bool(self.ta_service_key)

    def require_service_key(self) -> str:
        if not self.ta_service_key:
            raise ConfigurationError("env_TA_SERVICE_KEY_missing")
        return self.ta_service_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    ta_service_key = os.getenv("TA_SERVICE_KEY", "").strip()
    geocoder_user_agent = os.getenv("GEOCODER_USER_AGENT") or DEFAULT_USER_AGENT
    nominatim_base_url = os.getenv("NOMINATIM_BASE_URL") or DEFAULT_NOMINATIM_BASE_URL
    sdsc2_base_url = os.getenv("SDSC2_BASE_URL") or DEFAULT_SDSC2_BASE_URL
    http_timeout = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))
    port = int(os.getenv("PORT") or 8080)

    if not ta_service_key:
        logger.warning("TA_SERVICE_KEY is not configured; /api/poi will serve demo data.")

    return Settings(
        ta_service_key=ta_service_key,
        geocoder_user_agent=geocoder_user_agent,
        nominatim_base_url=nominatim_base_url,
        sdsc2_base_url=sdsc2_base_url,
        http_timeout=http_timeout,
        port=port,
    )
