"""
Command-line argument parsing.

Tokens are read left to right. Each flag declares how many value tokens must
follow it. When a flag is short of values, or one of its value slots holds
another flag, a single `MalformedArgument` is emitted and parsing stops: the
rest of the command line is ignored. Tokens matching no flag become
`UnknownArgument` items.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from src.koedo.models import Day


class ArgumentItem:
    """Base class of the parsed query items."""

    @property
    def is_temporal(self) -> bool:
        """True for items that scope a query to a day or to the week."""
        return False

    @property
    def is_standalone(self) -> bool:
        """True for items that must be the only item of the query."""
        return False


@dataclass(frozen=True)
class DayArgument(ArgumentItem):
    day: Day

    @property
    def is_temporal(self) -> bool:
        return True


@dataclass(frozen=True)
class WeekArgument(ArgumentItem):
    @property
    def is_temporal(self) -> bool:
        return True


@dataclass(frozen=True)
class MealArgument(ArgumentItem):
    meal: str


@dataclass(frozen=True)
class OrderArgument(ArgumentItem):
    @property
    def is_standalone(self) -> bool:
        return True


@dataclass(frozen=True)
class HelpArgument(ArgumentItem):
    @property
    def is_standalone(self) -> bool:
        return True


@dataclass(frozen=True)
class UnknownArgument(ArgumentItem):
    token: str


@dataclass(frozen=True)
class MalformedArgument(ArgumentItem):
    reason: str


class FlagKind(str, Enum):
    MEAL = "meal"
    TODAY = "today"
    WEEK = "week"
    ORDER = "order"
    HELP = "help"


@dataclass(frozen=True)
class FlagSpec:
    kind: FlagKind
    long: str
    short: str
    value_count: int
    value_name: str
    description: str

    @property
    def aliases(self) -> Tuple[str, str]:
        return (self.short, self.long)


FLAGS: Tuple[FlagSpec, ...] = (
    FlagSpec(FlagKind.MEAL, "--meal", "-m", 1, "MEAL", "Search the week (or the given day) for dishes containing MEAL"),
    FlagSpec(FlagKind.TODAY, "--today", "-t", 0, "", "Show today's menu"),
    FlagSpec(FlagKind.WEEK, "--week", "-w", 0, "", "Show the whole week's menu"),
    FlagSpec(FlagKind.ORDER, "--order", "-o", 0, "", "Open the order page in the browser"),
    FlagSpec(FlagKind.HELP, "--help", "-h", 0, "", "Show this help"),
)

_FLAGS_BY_ALIAS: Dict[str, FlagSpec] = {
    alias: spec for spec in FLAGS for alias in spec.aliases
}

WEEKEND_MESSAGE = "No menu is served today (weekend)"


def find_flag(token: str) -> Optional[FlagSpec]:
    return _FLAGS_BY_ALIAS.get(token)


def calendar_weekday(day: date) -> int:
    """Weekday number counted from Sunday = 1 to Saturday = 7."""
    return day.isoweekday() % 7 + 1


def resolve_today(today: date) -> ArgumentItem:
    served = Day.from_weekday_number(calendar_weekday(today))
    if served is None:
        return UnknownArgument(WEEKEND_MESSAGE)
    return DayArgument(served)


def _build_item(spec: FlagSpec, values: Sequence[str], today: date) -> ArgumentItem:
    if spec.kind is FlagKind.MEAL:
        return MealArgument(values[0])
    if spec.kind is FlagKind.TODAY:
        return resolve_today(today)
    if spec.kind is FlagKind.WEEK:
        return WeekArgument()
    if spec.kind is FlagKind.ORDER:
        return OrderArgument()
    if spec.kind is FlagKind.HELP:
        return HelpArgument()
    raise ValueError(f"Unhandled flag kind: {spec.kind}")


def parse_arguments(tokens: Sequence[str], *, today: Optional[date] = None) -> List[ArgumentItem]:
    """
    Turn raw command-line tokens into query items.

    `today` is used to resolve --today; it defaults to the local date.
    """
    today = today or date.today()
    items: List[ArgumentItem] = []
    index = 0

    while index < len(tokens):
        token = tokens[index]
        spec = find_flag(token)
        if spec is None:
            items.append(UnknownArgument(token))
            index += 1
            continue

        values = list(tokens[index + 1 : index + 1 + spec.value_count])
        if len(values) < spec.value_count:
            items.append(MalformedArgument(f"{token} requires {spec.value_count} value(s)"))
            break
        clashing = [value for value in values if find_flag(value) is not None]
        if clashing:
            items.append(
                MalformedArgument(f"{token} requires a {spec.value_name} value, got flag {clashing[0]}")
            )
            break

        items.append(_build_item(spec, values, today))
        index += 1 + spec.value_count

    return items


def usage_text(program: str = "koedo") -> str:
    lines = [f"Usage: {program} [options]", "", "Options:"]
    for spec in FLAGS:
        names = f"{spec.short}, {spec.long}"
        if spec.value_name:
            names = f"{names} {spec.value_name}"
        lines.append(f"  {names:<22}{spec.description}")
    lines.extend(
        [
            "",
            "Several --meal searches may be combined with one of --today or --week.",
            "--help and --order must be used alone.",
        ]
    )
    return "\n".join(lines)
