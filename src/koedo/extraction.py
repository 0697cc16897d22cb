"""
Tag extraction from the raw menu page.

The page is not parsed as HTML. It is cut into fragments on a structural
delimiter, and each fragment carrying a day or dish marker is reduced to the
label found between that kind's start and end markers. Fragments whose label
cannot be isolated are dropped silently.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from src.koedo.config import MarkupRules
from src.koedo.models import DayTag, DishTag, Tag

logger = structlog.get_logger(__name__)


def text_between(fragment: str, start: str, end: str) -> Optional[str]:
    """
    Return the text after `start` up to the first `end`.

    `start` must occur exactly once in the fragment, otherwise None.
    """
    parts = fragment.split(start)
    if len(parts) != 2:
        return None
    return parts[1].split(end)[0]


def is_day_fragment(fragment: str, rules: MarkupRules) -> bool:
    return rules.day_marker in fragment


def is_dish_fragment(fragment: str, rules: MarkupRules) -> bool:
    return rules.dish_marker in fragment


def _classify(fragment: str, rules: MarkupRules) -> Optional[Tag]:
    # Day check first: a fragment carrying both markers is a day.
    if is_day_fragment(fragment, rules):
        label = text_between(fragment, rules.day_start, rules.day_end)
        return DayTag(label) if label is not None else None

    if is_dish_fragment(fragment, rules):
        label = text_between(fragment, rules.dish_start, rules.dish_end)
        return DishTag(label) if label is not None else None

    return None


def extract_tags(markup: str, rules: Optional[MarkupRules] = None) -> List[Tag]:
    """Split `markup` into fragments and keep the ones that yield a label, in page order."""
    rules = rules or MarkupRules()

    candidates = [
        fragment
        for fragment in markup.split(rules.fragment_delimiter)
        if is_day_fragment(fragment, rules) or is_dish_fragment(fragment, rules)
    ]

    tags: List[Tag] = []
    for fragment in candidates:
        tag = _classify(fragment, rules)
        if tag is not None:
            tags.append(tag)

    logger.debug(
        "Tags extracted",
        candidates=len(candidates),
        tags=len(tags),
        dropped=len(candidates) - len(tags),
    )
    return tags
