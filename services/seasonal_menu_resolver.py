"""
Selects the seasonal menu that overrides the catalog at a given instant.

Menus are checked in stored (creation) order and the first one that is
switched on and whose date range and daily time window both contain ``now``
wins. Overlapping later menus are only reported by ``all_currently_active``.
"""
import logging
from collections import namedtuple
from datetime import date, datetime
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple, Union

from utils.config import settings
from utils.time_window import (
    in_date_range,
    in_time_range,
    split_instant,
    time_to_minutes,
    validate_date,
    validate_time,
)

logger = logging.getLogger(__name__)

MenuWindow = namedtuple("MenuWindow", "is_active start_date end_date start_time end_time")


def _window(menu) -> MenuWindow:
    return MenuWindow(
        bool(menu.is_active),
        menu.start_date,
        menu.end_date,
        menu.start_time,
        menu.end_time,
    )


def _matches(window: MenuWindow, current_date: str, current_time: str) -> bool:
    # Every field is parsed even for switched-off menus: bad data never passes silently
    validate_date(window.start_date)
    validate_date(window.end_date)
    validate_time(window.start_time)
    validate_time(window.end_time)
    return (
        window.is_active
        and in_date_range(window.start_date, window.end_date, current_date)
        and in_time_range(window.start_time, window.end_time, current_time)
    )


def _matching_positions(windows: Tuple[MenuWindow, ...], current_date: str, current_time: str) -> Tuple[int, ...]:
    return tuple(
        position for position, window in enumerate(windows)
        if _matches(window, current_date, current_time)
    )


if settings.resolver_cache_size > 0:
    # Resolution only changes at minute granularity, which is what the key carries
    _matching_positions = lru_cache(maxsize=settings.resolver_cache_size)(_matching_positions)


class SeasonalMenuResolver:

    def matching(self, menus: Sequence, now: Union[datetime, str]) -> List:
        menus = list(menus)
        current_date, current_time = split_instant(now)
        windows = tuple(_window(menu) for menu in menus)
        return [menus[position] for position in _matching_positions(windows, current_date, current_time)]

    def current(self, menus: Sequence, now: Union[datetime, str]):
        """Return the first matching menu in stored order, or None."""
        matches = self.matching(menus, now)
        if not matches:
            logger.debug(f"No seasonal menu applies at {now}")
            return None
        selected = matches[0]
        if len(matches) > 1:
            logger.debug(
                f"Seasonal menus {[menu.id for menu in matches]} overlap at {now}; "
                f"first in order ({selected.id}) wins"
            )
        return selected

    def all_currently_active(self, menus: Sequence, now: Union[datetime, str]) -> List:
        return self.matching(menus, now)

    def is_menu_active(self, menus: Sequence, menu_id, now: Union[datetime, str]) -> bool:
        return any(menu.id == menu_id for menu in self.matching(menus, now))


def menus_in_date_range(menus: Sequence, start: str, end: str) -> List:
    """Menus whose calendar range overlaps [start, end], in stored order."""
    validate_date(start)
    validate_date(end)
    return [menu for menu in menus if menu.start_date <= end and menu.end_date >= start]


def duration_days(menu) -> int:
    start = date.fromisoformat(validate_date(menu.start_date))
    end = date.fromisoformat(validate_date(menu.end_date))
    return abs((end - start).days) + 1


def minutes_until_end(menu, now: Union[datetime, str]) -> Optional[int]:
    """Minutes left in today's window of a currently matching menu, else None."""
    current_date, current_time = split_instant(now)
    if not _matches(_window(menu), current_date, current_time):
        return None
    remaining = time_to_minutes(menu.end_time) - time_to_minutes(current_time)
    if remaining < 0:
        # Before midnight inside an overnight window
        remaining += 24 * 60
    return remaining


seasonal_menu_resolver = SeasonalMenuResolver()
