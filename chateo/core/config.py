# chateo/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import Optional, List
from functools import lru_cache


class ConfigurationError(RuntimeError):
    """Required configuration is missing; raised at startup, never per request."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "Chateo API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 8000))

    # Database Settings
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "sqlite:///./chateo.db")

    # Session Settings
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "chateo-session"
    SESSION_MAX_AGE_DAYS: int = 30

    # Twilio Settings
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_VERIFY_SERVICE_SID: str = ""
    TWILIO_TIMEOUT_SECONDS: int = 15
    TWILIO_MAX_RETRIES: int = 3
    VERIFY_CHANNEL: str = "sms"

    # Verification limits
    RATE_LIMIT_WINDOW_MINUTES: int = 10
    MAX_CODES_PER_WINDOW: int = 5
    CODE_EXPIRY_MINUTES: int = 10

    # CORS Settings (comma-separated to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = "*"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


REQUIRED_SETTINGS = (
    "JWT_SECRET",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_VERIFY_SERVICE_SID",
)


def validate_required_settings(s: Settings) -> None:
    """Abort initialization when a secret or provider credential is absent."""
    missing = [name for name in REQUIRED_SETTINGS if not getattr(s, name)]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
    if s.VERIFY_CHANNEL not in ("sms", "call"):
        raise ConfigurationError(f"Unsupported VERIFY_CHANNEL: {s.VERIFY_CHANNEL}")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings: Settings = get_settings()
