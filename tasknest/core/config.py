"""
Configuration settings for TaskNest.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings, read once at startup."""

    def __init__(self, **overrides):
        # Service information
        self.service_name: str = os.getenv("SERVICE_NAME", "tasknest")
        self.service_version: str = os.getenv("SERVICE_VERSION", "1.0.0")
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_file: str | None = os.getenv("LOG_FILE") or None

        # Database configuration
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./tasknest.db")

        # Security
        self.secret_key: str = os.getenv(
            "SECRET_KEY",
            "tasknest-secret-key-change-in-production"
        )
        self.algorithm: str = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
        self.bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

        # Weather provider
        self.weather_api_key: str = os.getenv("WEATHER_API_KEY", "")
        self.weather_api_url: str = os.getenv(
            "WEATHER_API_URL",
            "https://api.weatherapi.com/v1/current.json"
        )
        self.weather_timeout: float = float(os.getenv("WEATHER_TIMEOUT", "10"))

        # CORS configuration
        self.allowed_origins: List[str] = os.getenv("ALLOWED_ORIGINS", "*").split(",")

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown setting: {name}")
            setattr(self, name, value)

    def __repr__(self):
        return f"Settings(service_name={self.service_name!r}, database_url='***HIDDEN***')"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
