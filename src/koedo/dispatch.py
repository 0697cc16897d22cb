"""
Query dispatch.

Maps a validated query to its action. The page is fetched lazily and at most
once per query.
"""

from __future__ import annotations

import sys
import webbrowser
from typing import Callable, Optional, Sequence, TextIO

import structlog

from src.koedo.arguments import (
    ArgumentItem,
    DayArgument,
    HelpArgument,
    MealArgument,
    OrderArgument,
    WeekArgument,
    usage_text,
)
from src.koedo.config import Config
from src.koedo.fetch import ensure_url, fetch_menu_source
from src.koedo.menu import parse_menu, search_meals
from src.koedo.models import Day, DayScope, Menu, Scope, WEEK
from src.koedo.validation import resolve_scope

logger = structlog.get_logger(__name__)


class Dispatcher:
    """Runs a validated query and writes the answer to `out`."""

    def __init__(
        self,
        config: Config,
        *,
        fetch_source: Callable[[str], str] = fetch_menu_source,
        open_url: Callable[[str], bool] = webbrowser.open,
        out: Optional[TextIO] = None,
    ):
        self.config = config
        self._fetch_source = fetch_source
        self._open_url = open_url
        self._out = out if out is not None else sys.stdout
        self._menu: Optional[Menu] = None

    def _print(self, line: str = "") -> None:
        print(line, file=self._out)

    @property
    def menu(self) -> Menu:
        if self._menu is None:
            source = self._fetch_source(self.config.menu_url)
            self._menu = parse_menu(source, self.config.markup)
        return self._menu

    def run(self, items: Sequence[ArgumentItem]) -> None:
        """Execute a query that already passed `validate_query`."""
        if len(items) == 1:
            self._run_single(items[0], items)
            return

        scope = resolve_scope(items)
        meals = [item.meal for item in items if isinstance(item, MealArgument)]
        logger.debug("Dispatching meal searches", meals=meals, scope=repr(scope))
        for meal in meals:
            self.show_meal(meal, scope)

    def _run_single(self, item: ArgumentItem, items: Sequence[ArgumentItem]) -> None:
        logger.debug("Dispatching", item=repr(item))
        if isinstance(item, HelpArgument):
            self._print(usage_text())
        elif isinstance(item, OrderArgument):
            self.open_order_page()
        elif isinstance(item, DayArgument):
            self.show_day(item.day)
        elif isinstance(item, WeekArgument):
            self.show_week()
        elif isinstance(item, MealArgument):
            self.show_meal(item.meal, resolve_scope(items))
        else:
            raise TypeError(f"Cannot dispatch {item!r}")

    def open_order_page(self) -> None:
        url = ensure_url(self.config.order_url)
        opened = self._open_url(url)
        logger.info("Order page requested", url=url, opened=opened)
        if opened:
            self._print(f"Opening {url}")
        else:
            logger.info("No browser available to open order page", url=url)
            self._print(f"Order online at {url}")

    def show_day(self, day: Day) -> None:
        label = self.config.markup.label_for(day)
        dishes = self.menu.get(day)
        if dishes is None:
            self._print(f"No menu found for {label}")
            return
        self._print(label)
        for dish in dishes:
            self._print(f"- {dish}")

    def show_week(self) -> None:
        for index, day in enumerate(Day):
            if index:
                self._print()
            self.show_day(day)

    def show_meal(self, meal: str, scope: Scope = WEEK) -> None:
        matches = search_meals(self.menu, meal, scope, self.config.markup)
        if not matches:
            if isinstance(scope, DayScope):
                where = f"on {self.config.markup.label_for(scope.day)}"
            else:
                where = "this week"
            self._print(f"No {meal} planned {where}")
            return

        for match in matches:
            self._print(f"{match.day}: {match.dish}")
