import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    APP_ENV: str = os.getenv("APP_ENV", "development")
    APP_URL: str = os.getenv("APP_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Pricing engine
    AVERAGE_SPEED_KMH: float = float(os.getenv("AVERAGE_SPEED_KMH", "40"))

    # HTTP surface
    QUOTE_RATE_LIMIT: str = os.getenv("QUOTE_RATE_LIMIT", "60/minute")
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "").split(",")
        if origin.strip()
    ]


def validate_settings(config: Settings) -> None:
    """Reject pricing inputs that would break every quote, in any environment."""
    if not config.AVERAGE_SPEED_KMH > 0:
        raise RuntimeError(
            f"AVERAGE_SPEED_KMH must be positive, got {config.AVERAGE_SPEED_KMH}"
        )


settings = Settings()
validate_settings(settings)
