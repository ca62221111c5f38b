"""
Centralized configuration with environment variable overrides.

Restaurant details, opening hours, and dialog thresholds live here so the
parsers, tools, and dialog engine never hardcode them.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class RestaurantConfig:
    """Restaurant-specific settings loaded from environment or defaults."""

    name: str = os.getenv("RESTAURANT_NAME", "La Maison")
    lunch_hours: str = os.getenv("LUNCH_HOURS", "12:00 PM - 3:00 PM")
    dinner_hours: str = os.getenv("DINNER_HOURS", "7:00 PM - 10:00 PM")
    lunch_service: str = os.getenv("LUNCH_SERVICE", "12-2 PM")
    dinner_service: str = os.getenv("DINNER_SERVICE", "7-9 PM")
    seats_per_slot: int = _safe_int("SEATS_PER_SLOT", "40")


@dataclass(frozen=True)
class DialogConfig:
    """Slot validation bounds and reply limits."""

    min_guests: int = _safe_int("MIN_GUESTS", "1")
    max_guests: int = _safe_int("MAX_GUESTS", "20")
    min_name_length: int = _safe_int("MIN_NAME_LENGTH", "2")
    min_phone_length: int = _safe_int("MIN_PHONE_LENGTH", "7")
    max_alternatives: int = _safe_int("MAX_ALTERNATIVES", "3")
    max_input_length: int = _safe_int("MAX_INPUT_LENGTH", "500")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    restaurant: RestaurantConfig = field(default_factory=RestaurantConfig)
    dialog: DialogConfig = field(default_factory=DialogConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.dialog.min_guests < 1:
        raise ValueError(f"MIN_GUESTS must be >= 1, got {config.dialog.min_guests}")
    if config.dialog.max_guests < config.dialog.min_guests:
        raise ValueError(
            f"MAX_GUESTS must be >= MIN_GUESTS ({config.dialog.min_guests}), "
            f"got {config.dialog.max_guests}"
        )
    if config.dialog.min_name_length < 1:
        raise ValueError(
            f"MIN_NAME_LENGTH must be >= 1, got {config.dialog.min_name_length}"
        )
    if config.dialog.min_phone_length < 1:
        raise ValueError(
            f"MIN_PHONE_LENGTH must be >= 1, got {config.dialog.min_phone_length}"
        )
    if config.dialog.max_alternatives < 1:
        raise ValueError(
            f"MAX_ALTERNATIVES must be >= 1, got {config.dialog.max_alternatives}"
        )
    if config.dialog.max_input_length < 1:
        raise ValueError(
            f"MAX_INPUT_LENGTH must be >= 1, got {config.dialog.max_input_length}"
        )
    if config.restaurant.seats_per_slot < 1:
        raise ValueError(
            f"SEATS_PER_SLOT must be >= 1, got {config.restaurant.seats_per_slot}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.restaurant.name)
    return config


# Singleton instance
settings = load_config()
