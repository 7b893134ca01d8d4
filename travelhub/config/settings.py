"""
Application settings and configuration
"""
import logging
import os
from dotenv import load_dotenv

load_dotenv()


def _env_int(env_var: str, default: str) -> int:
    """Parse an integer env var, failing fast on bad values"""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid integer for {env_var}: {raw!r}") from None


def _env_list(env_var: str, default: str) -> list:
    raw = os.getenv(env_var, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    # Application
    APP_NAME = "TravelHub Bookings"
    VERSION = "1.0.0"
    DEBUG = os.getenv("DEBUG", "False") == "True"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Security (tokens are issued by the identity provider, we only verify them)
    SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key-change-in-production")
    ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))

    # CORS
    ALLOWED_ORIGINS = _env_list(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173",
    )

    # Pagination
    BROWSE_PAGE_SIZE = _env_int("BROWSE_PAGE_SIZE", "12")
    CUSTOMER_PAGE_SIZE = _env_int("CUSTOMER_PAGE_SIZE", "20")
    AGENCY_PAGE_SIZE = _env_int("AGENCY_PAGE_SIZE", "50")
    MAX_PAGE_SIZE = _env_int("MAX_PAGE_SIZE", "100")

    # Booking rules
    DEFAULT_SLOT_MINUTES = _env_int("DEFAULT_SLOT_MINUTES", "60")
    MAX_PROMO_DISCOUNT = 50

    # Dates are stored as UTC and rendered in this zone
    DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")


def configure_logging(level: str = None) -> None:
    """Configure root logging once for the process"""
    level = level or settings.LOG_LEVEL
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


settings = Settings()
