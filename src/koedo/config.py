"""
Configuration management for the Koedo menu client.

Loads environment variables and provides a strongly-typed configuration object.
The page markers below describe the restaurant's current markup. They are an
unpublished contract with the site: when the markup changes, extraction quietly
yields fewer tags (or none) instead of failing, so the markers can be
overridden from the environment without touching the parsing code.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv
import structlog

from src.koedo.models import Day

load_dotenv()

logger = structlog.get_logger(__name__)

DEFAULT_MENU_URL = "https://koedo.fr/"
DEFAULT_ORDER_URL = "https://koedo.fr/"

DEFAULT_DAY_LABELS: Tuple[Tuple[Day, str], ...] = (
    (Day.MONDAY, "lundi"),
    (Day.TUESDAY, "mardi"),
    (Day.WEDNESDAY, "mercredi"),
    (Day.THURSDAY, "jeudi"),
    (Day.FRIDAY, "vendredi"),
)


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


@dataclass(frozen=True)
class MarkupRules:
    """Substring markers used to pull day and dish labels out of the page."""

    fragment_delimiter: str = "<div"

    # Day headings look like: <div class="primary_type" data-name='*** Lundi ***'>
    day_marker: str = "primary_type"
    day_start: str = "data-name='*** "
    day_end: str = " ***"

    # Dishes look like: <div class="fp_price" title='Curry poulet'>
    dish_marker: str = "fp_price"
    dish_start: str = "title='"
    dish_end: str = "'"

    # Lowercase page literal for each serving day
    day_labels: Tuple[Tuple[Day, str], ...] = DEFAULT_DAY_LABELS

    def day_for_label(self, text: str) -> Optional[Day]:
        """Match a heading label (case-insensitively) against the day literals."""
        lowered = text.lower()
        for day, label in self.day_labels:
            if label == lowered:
                return day
        return None

    def label_for(self, day: Day) -> str:
        for known_day, label in self.day_labels:
            if known_day is day:
                return label
        raise KeyError(day)

    def validate(self) -> None:
        empty = [
            name
            for name in (
                "fragment_delimiter",
                "day_marker",
                "day_start",
                "day_end",
                "dish_marker",
                "dish_start",
                "dish_end",
            )
            if not getattr(self, name)
        ]
        if empty:
            raise ConfigError(f"Markup markers must not be empty: {', '.join(empty)}")

        days = [day for day, _ in self.day_labels]
        if sorted(days, key=lambda d: d.value) != list(Day):
            raise ConfigError("Day labels must cover Monday to Friday exactly once")


@dataclass(frozen=True)
class Config:
    """Strongly-typed configuration object."""

    menu_url: str = DEFAULT_MENU_URL
    order_url: str = DEFAULT_ORDER_URL
    log_level: str = "WARNING"
    markup: MarkupRules = field(default_factory=MarkupRules)

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.menu_url:
            raise ConfigError("KOEDO_MENU_URL must not be empty")
        if not self.order_url:
            raise ConfigError("KOEDO_ORDER_URL must not be empty")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Invalid LOG_LEVEL '{self.log_level}'")
        self.markup.validate()

    def log_config(self) -> None:
        """Log configuration."""
        logger.info(
            "Configuration loaded",
            menu_url=self.menu_url,
            order_url=self.order_url,
            log_level=self.log_level,
            day_marker=self.markup.day_marker,
            dish_marker=self.markup.dish_marker,
        )


def _get_marker(key: str, default: str) -> str:
    """Get a markup marker from environment variable."""
    return os.getenv(key, default)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """
    Get the application configuration.

    Uses lru_cache to ensure we only load config once.
    """
    defaults = MarkupRules()
    markup = MarkupRules(
        fragment_delimiter=_get_marker("KOEDO_FRAGMENT_DELIMITER", defaults.fragment_delimiter),
        day_marker=_get_marker("KOEDO_DAY_MARKER", defaults.day_marker),
        day_start=_get_marker("KOEDO_DAY_START", defaults.day_start),
        day_end=_get_marker("KOEDO_DAY_END", defaults.day_end),
        dish_marker=_get_marker("KOEDO_DISH_MARKER", defaults.dish_marker),
        dish_start=_get_marker("KOEDO_DISH_START", defaults.dish_start),
        dish_end=_get_marker("KOEDO_DISH_END", defaults.dish_end),
    )

    return Config(
        menu_url=os.getenv("KOEDO_MENU_URL", DEFAULT_MENU_URL).strip(),
        order_url=os.getenv("KOEDO_ORDER_URL", DEFAULT_ORDER_URL).strip(),
        log_level=os.getenv("LOG_LEVEL", "WARNING").strip().upper(),
        markup=markup,
    )


def init_config() -> Config:
    """
    Initialize and validate configuration.

    Call this at application startup to fail fast if config is invalid.
    """
    config = get_config()
    config.validate()
    config.log_config()
    return config
