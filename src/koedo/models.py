"""
Core data types for the weekly menu.

A page is reduced to an ordered list of tags (day labels and dish labels),
which is then folded into a `Menu`: a mapping from weekday to the dishes
served that day, in page order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class Day(Enum):
    """Serving days. Values are calendar weekday numbers (Sunday = 1)."""
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6

    @property
    def weekday_number(self) -> int:
        return self.value

    @classmethod
    def from_weekday_number(cls, number: int) -> Optional["Day"]:
        for day in cls:
            if day.value == number:
                return day
        return None


@dataclass(frozen=True)
class DayTag:
    """A fragment classified as a day heading."""
    text: str


@dataclass(frozen=True)
class DishTag:
    """A fragment classified as a dish."""
    text: str


Tag = Union[DayTag, DishTag]

# Dish order within a day follows the page.
Menu = Dict[Day, Tuple[str, ...]]


@dataclass(frozen=True)
class MealMatch:
    day: str
    dish: str


@dataclass(frozen=True)
class WeekScope:
    """Search every day of the menu."""


@dataclass(frozen=True)
class DayScope:
    """Search a single day."""
    day: Day


Scope = Union[WeekScope, DayScope]

WEEK = WeekScope()
