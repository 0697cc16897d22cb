"""
Pytest configuration and fixtures.
"""

import pytest
import os
from unittest.mock import patch


@pytest.fixture(autouse=True)
def mock_env_vars():
    """Mock environment variables for tests."""
    env_vars = {
        "KOEDO_MENU_URL": "https://koedo.test/",
        "KOEDO_ORDER_URL": "https://koedo.test/commander",
        "LOG_LEVEL": "WARNING",
    }

    with patch.dict(os.environ, env_vars):
        # Clear config cache
        from src.koedo.config import get_config
        get_config.cache_clear()
        yield
        get_config.cache_clear()


def _day_block(label):
    return f"<div class=\"primary_type\" data-name='*** {label} ***'></div>\n"


def _dish_block(name):
    return f"<div class=\"fp_price\" title='{name}'><span>9,50 €</span></div>\n"


@pytest.fixture
def make_page():
    """Build a menu page from ("day", label) / ("dish", name) blocks."""
    def build(blocks):
        parts = ["<html><body>\n", "<div class=\"header\">Koedo</div>\n"]
        for kind, text in blocks:
            parts.append(_day_block(text) if kind == "day" else _dish_block(text))
        parts.append("</body></html>\n")
        return "".join(parts)

    return build


@pytest.fixture
def week_blocks():
    """A full week, with the curry served on Tuesday only."""
    return [
        ("dish", "Soupe miso"),
        ("day", "Lundi"),
        ("dish", "Ramen tonkotsu"),
        ("dish", "Salade de chou"),
        ("day", "Mardi"),
        ("dish", "Curry poulet"),
        ("dish", "Gyoza"),
        ("day", "Mercredi"),
        ("dish", "Donburi saumon"),
        ("day", "Jeudi"),
        ("dish", "Udon tempura"),
        ("day", "Vendredi"),
        ("dish", "Bento tofu"),
        ("dish", "Mochi"),
    ]


@pytest.fixture
def week_page(make_page, week_blocks):
    return make_page(week_blocks)
