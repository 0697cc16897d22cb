"""
Menu building and meal search.

`build_menu` folds the tag sequence into a day -> dishes mapping:
- leading dish tags (before any day heading) are discarded
- a recognized day heading opens that day with an empty dish list; if the
  same heading shows up again later, the dishes gathered so far for it are
  discarded and the list starts over
- an unrecognized heading closes the current day, so the dishes that follow
  it are dropped until the next recognized heading
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from itertools import dropwhile
from typing import Dict, Iterable, List, Optional, Sequence

import structlog

from src.koedo.config import MarkupRules
from src.koedo.extraction import extract_tags
from src.koedo.models import (
    Day,
    DayScope,
    DayTag,
    DishTag,
    MealMatch,
    Menu,
    Scope,
    Tag,
    WeekScope,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _FoldState:
    current_day: Optional[Day] = None
    menu: Menu = field(default_factory=dict)


def drop_leading_dishes(tags: Sequence[Tag]) -> List[Tag]:
    """Drop tags ahead of the first day heading. An all-dish sequence is returned as-is."""
    if not any(isinstance(tag, DayTag) for tag in tags):
        return list(tags)
    return list(dropwhile(lambda tag: not isinstance(tag, DayTag), tags))


def _fold_tag(rules: MarkupRules, state: _FoldState, tag: Tag) -> _FoldState:
    if isinstance(tag, DayTag):
        day = rules.day_for_label(tag.text)
        if day is None:
            return _FoldState(current_day=None, menu=state.menu)
        return _FoldState(current_day=day, menu={**state.menu, day: ()})

    if isinstance(tag, DishTag):
        if state.current_day is None:
            return state
        day = state.current_day
        return _FoldState(
            current_day=day,
            menu={**state.menu, day: state.menu[day] + (tag.text,)},
        )

    raise TypeError(f"Unexpected tag: {tag!r}")


def build_menu(tags: Iterable[Tag], rules: Optional[MarkupRules] = None) -> Menu:
    rules = rules or MarkupRules()
    ordered = drop_leading_dishes(list(tags))
    state = reduce(lambda acc, tag: _fold_tag(rules, acc, tag), ordered, _FoldState())
    return state.menu


def parse_menu(markup: str, rules: Optional[MarkupRules] = None) -> Menu:
    """Extract tags from the page and build the weekly menu."""
    rules = rules or MarkupRules()
    menu = build_menu(extract_tags(markup, rules), rules)
    logger.info(
        "Menu parsed",
        days=[rules.label_for(day) for day in Day if day in menu],
        num_dishes=sum(len(dishes) for dishes in menu.values()),
    )
    return menu


def search_meals(
    menu: Menu,
    meal: str,
    scope: Scope,
    rules: Optional[MarkupRules] = None,
) -> List[MealMatch]:
    """
    Find dishes whose name contains `meal`, ignoring case.

    Matches are labelled with the day's page literal. Dishes keep their order
    within a day.
    """
    rules = rules or MarkupRules()
    needle = meal.lower()

    if isinstance(scope, DayScope):
        days = [scope.day] if scope.day in menu else []
    elif isinstance(scope, WeekScope):
        days = list(menu.keys())
    else:
        raise TypeError(f"Unexpected scope: {scope!r}")

    matches: List[MealMatch] = []
    for day in days:
        label = rules.label_for(day)
        matches.extend(
            MealMatch(day=label, dish=dish) for dish in menu[day] if needle in dish.lower()
        )
    return matches


def menu_to_dict(menu: Menu, rules: Optional[MarkupRules] = None) -> Dict[str, List[str]]:
    """Render the menu Monday to Friday, keyed by day literal. Missing days are skipped."""
    rules = rules or MarkupRules()
    return {rules.label_for(day): list(menu[day]) for day in Day if day in menu}
