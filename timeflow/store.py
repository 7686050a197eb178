"""
Entry Storage Module.

This module persists logged slot entries in a JSON file keyed by date
string. It provides the EntryStore class for point and range reads/writes,
and utility functions for generating date ranges (week, month, custom).
"""

from __future__ import annotations

import calendar
import json
import os
import tempfile
from datetime import date, datetime, timedelta
from typing import Any

from timeflow.slots import SLOT_IDS, category_by_id, is_filled

DATE_FORMAT = "%Y-%m-%d"


class StoreError(Exception):
    """Raised when the store file cannot be read or parsed."""


class EntryStore:
    """
    JSON-file store of logged entries.

    The file holds a single object mapping "YYYY-MM-DD" keys to day records
    of the form ``{"date": ..., "entries": [...]}``. Only filled entries are
    persisted. Every write replaces the whole file atomically.

    Attributes:
        path: Location of the JSON data file.

    Example:
        >>> store = EntryStore("./data/timeflow_data.json")
        >>> store.set_entry("2024-03-04", "09:00", "Write report", "deep-work")
        >>> week = store.read_range(*week_range("2024-03-04"))
    """

    def __init__(self, path: str = "./data/timeflow_data.json") -> None:
        """
        Initialize the store.

        Args:
            path: Location of the JSON data file. The file and its
                directory are created on first write.
        """
        self.path = path

    def load_all(self) -> dict[str, Any]:
        """
        Read the whole store.

        Returns:
            Dictionary mapping date strings to day records. Empty if the
            file does not exist yet.

        Raises:
            StoreError: If the file cannot be read or is not a JSON object.
        """
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} does not contain a JSON object")
        return data

    def replace_all(self, data: dict[str, Any]) -> None:
        """
        Overwrite the whole store with new contents.

        The data is written to a temporary file in the same directory and
        moved into place, so readers see either the old or the new store.

        Args:
            data: Dictionary mapping date strings to day records.
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def load_day(self, date_str: str) -> dict[str, Any]:
        """
        Read the day record for a date.

        Args:
            date_str: Date in YYYY-MM-DD format.

        Returns:
            The stored day record, or ``{"date": date_str, "entries": []}``.
        """
        return self.load_all().get(date_str) or {"date": date_str, "entries": []}

    def read_day(self, date_str: str) -> list[dict[str, Any]]:
        """
        Read the entries logged on a date.

        Args:
            date_str: Date in YYYY-MM-DD format.

        Returns:
            The list of entries, possibly empty.
        """
        return list(self.load_day(date_str).get("entries", []))

    def write_day(self, date_str: str, entries: list[dict[str, Any]]) -> None:
        """
        Replace the entries of a date.

        Unfilled entries are dropped; a date left without entries is removed
        from the store.

        Args:
            date_str: Date in YYYY-MM-DD format.
            entries: The entries to store for that date.
        """
        parse_date(date_str)
        data = self.load_all()
        filled = [e for e in entries if is_filled(e)]
        if filled:
            data[date_str] = {"date": date_str, "entries": filled}
        else:
            data.pop(date_str, None)
        self.replace_all(data)

    def set_entry(
        self,
        date_str: str,
        slot_id: str,
        activity: str,
        category: str = "",
    ) -> None:
        """
        Log, update or clear a single slot.

        Args:
            date_str: Date in YYYY-MM-DD format.
            slot_id: A slot id on the grid, e.g. "09:15".
            activity: Free-text activity. An empty string clears the slot.
            category: Category id, or an empty string for none.

        Raises:
            ValueError: If the slot id or the category id is unknown.
        """
        if slot_id not in SLOT_IDS:
            raise ValueError(f"Unknown slot id: {slot_id!r}")
        if category and category_by_id(category) is None:
            raise ValueError(f"Unknown category: {category!r}")

        entries = [e for e in self.read_day(date_str) if e.get("slotId") != slot_id]
        if activity:
            entries.append({"slotId": slot_id, "activity": activity, "category": category})
            entries.sort(key=lambda e: e.get("slotId", ""))
        self.write_day(date_str, entries)

    def read_range(self, start: str, end: str) -> dict[str, list[dict[str, Any]]]:
        """
        Read the entries of every date in an inclusive range.

        Args:
            start: First date in YYYY-MM-DD format.
            end: Last date in YYYY-MM-DD format.

        Returns:
            Dictionary mapping each date in the range to its entries. Dates
            without stored data map to an empty list.
        """
        data = self.load_all()
        return {
            d: list((data.get(d) or {}).get("entries", []))
            for d in date_range(start, end)
        }

    def all_dates(self) -> list[str]:
        """
        List the dates that have stored data.

        Returns:
            Date strings, newest first.
        """
        return sorted(self.load_all(), reverse=True)


# =============================================================================
# Date Range Utilities
# =============================================================================


def parse_date(date_str: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Args:
        date_str: The date string.

    Returns:
        The corresponding date.

    Raises:
        ValueError: If the string is not a valid date in that format.
    """
    return datetime.strptime(date_str, DATE_FORMAT).date()


def format_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.strftime(DATE_FORMAT)


def get_today() -> str:
    """
    Get today's date.

    Returns:
        Today's local date in YYYY-MM-DD format.
    """
    return format_date(date.today())


def week_range(date_str: str) -> tuple[str, str]:
    """
    Get the Monday-to-Sunday week containing a date.

    Args:
        date_str: Date in YYYY-MM-DD format.

    Returns:
        A tuple of (monday, sunday) date strings.
    """
    day = parse_date(date_str)
    start = day - timedelta(days=day.weekday())
    end = start + timedelta(days=6)
    return format_date(start), format_date(end)


def month_range(date_str: str) -> tuple[str, str]:
    """
    Get the calendar month containing a date.

    Args:
        date_str: Date in YYYY-MM-DD format.

    Returns:
        A tuple of (first_day, last_day) date strings.
    """
    day = parse_date(date_str)
    last_day = calendar.monthrange(day.year, day.month)[1]
    return (
        format_date(day.replace(day=1)),
        format_date(day.replace(day=last_day)),
    )


def date_range(start: str, end: str) -> list[str]:
    """
    Enumerate every date in an inclusive range.

    Args:
        start: First date in YYYY-MM-DD format.
        end: Last date in YYYY-MM-DD format.

    Returns:
        Date strings from start to end, ascending. Empty if end < start.
    """
    current = parse_date(start)
    last = parse_date(end)
    dates: list[str] = []
    while current <= last:
        dates.append(format_date(current))
        current += timedelta(days=1)
    return dates


def get_custom_range(start_str: str, end_str: str) -> tuple[str, str]:
    """
    Validate a custom date range.

    Args:
        start_str: Start date in YYYY-MM-DD format.
        end_str: End date in YYYY-MM-DD format.

    Returns:
        A tuple of (start, end) date strings.

    Raises:
        ValueError: If either date is invalid or end is before start.
    """
    if parse_date(end_str) < parse_date(start_str):
        raise ValueError(f"End date {end_str} is before start date {start_str}")
    return start_str, end_str
