"""
Slot Calendar Module.

This module defines the fixed universe of loggable time slots for a day
(72 slots from 06:00 to 23:45 at 15-minute granularity) and the category
taxonomy used to tag each slot.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

SLOT_MINUTES = 15
FIRST_HOUR = 6
LAST_HOUR = 23

# =============================================================================
# Category Taxonomy
# =============================================================================

CATEGORIES: tuple[dict[str, str], ...] = (
    {"id": "deep-work", "label": "Deep Work", "color": "#6366f1", "emoji": "🧠"},
    {"id": "meeting", "label": "Meeting", "color": "#f59e0b", "emoji": "👥"},
    {"id": "email", "label": "Email / Comms", "color": "#3b82f6", "emoji": "📧"},
    {"id": "admin", "label": "Admin", "color": "#f472b6", "emoji": "📋"},
    {"id": "learning", "label": "Learning", "color": "#8b5cf6", "emoji": "📚"},
    {"id": "creative", "label": "Creative", "color": "#14b8a6", "emoji": "🎨"},
    {"id": "exercise", "label": "Exercise", "color": "#ef4444", "emoji": "💪"},
    {"id": "break", "label": "Break", "color": "#10b981", "emoji": "☕"},
    {"id": "leisure", "label": "Leisure", "color": "#f97316", "emoji": "🎮"},
    {"id": "chores", "label": "Chores", "color": "#a3e635", "emoji": "🧹"},
    {"id": "morning-ritual", "label": "Morning Ritual", "color": "#fbbf24", "emoji": "🌅"},
    {"id": "night-ritual", "label": "Night Ritual", "color": "#818cf8", "emoji": "🌙"},
    {"id": "startup-ritual", "label": "Startup Ritual", "color": "#34d399", "emoji": "🚀"},
    {"id": "shutdown-ritual", "label": "Shutdown Ritual", "color": "#fb923c", "emoji": "🔒"},
    {"id": "commute", "label": "Commute", "color": "#38bdf8", "emoji": "🚗"},
    {"id": "social", "label": "Social", "color": "#e879f9", "emoji": "🤝"},
    {"id": "other", "label": "Other", "color": "#64748b", "emoji": "📌"},
)

CATEGORY_IDS: tuple[str, ...] = tuple(c["id"] for c in CATEGORIES)

PRODUCTIVE_IDS: frozenset[str] = frozenset(
    {"deep-work", "meeting", "email", "admin", "learning", "creative", "exercise"}
)
BREAK_ID = "break"
MEETING_ID = "meeting"
EXERCISE_ID = "exercise"

_CATEGORY_INDEX: dict[str, dict[str, str]] = {c["id"]: c for c in CATEGORIES}


def category_by_id(category_id: str | None) -> dict[str, str] | None:
    """
    Look up a category by its id.

    Args:
        category_id: The stable category key, e.g. "deep-work".

    Returns:
        The category record, or None for unknown or empty ids.
    """
    if not category_id:
        return None
    return _CATEGORY_INDEX.get(category_id)


def is_productive(category_id: str | None) -> bool:
    """Return True if the category counts toward the productivity score."""
    return category_id in PRODUCTIVE_IDS


# =============================================================================
# Slots
# =============================================================================


def hour_label(hour: int) -> str:
    """
    Format an hour as a 12-hour clock label.

    Args:
        hour: Hour of the day (0-23).

    Returns:
        A label such as "9:00 AM" or "12:00 PM".
    """
    return f"{hour % 12 or 12}:00 {'AM' if hour < 12 else 'PM'}"


def short_hour_label(hour: int) -> str:
    """Format an hour as a compact chart label such as "9a" or "3p"."""
    return f"{hour % 12 or 12}{'a' if hour < 12 else 'p'}"


def generate_slots() -> list[dict[str, Any]]:
    """
    Generate the ordered list of trackable slots for a day.

    Returns:
        72 slot dictionaries in chronological order, each with:
            - id: Zero-padded "HH:MM" slot id
            - label: 12-hour display label, e.g. "9:15 AM"
            - hour: Hour of the day
            - minute: Minute within the hour (0, 15, 30 or 45)
    """
    slots: list[dict[str, Any]] = []
    for hour in range(FIRST_HOUR, LAST_HOUR + 1):
        for minute in range(0, 60, SLOT_MINUTES):
            slots.append(
                {
                    "id": f"{hour:02d}:{minute:02d}",
                    "label": f"{hour % 12 or 12}:{minute:02d} {'AM' if hour < 12 else 'PM'}",
                    "hour": hour,
                    "minute": minute,
                }
            )
    return slots


SLOT_IDS: tuple[str, ...] = tuple(slot["id"] for slot in generate_slots())


def current_slot_id(now: datetime | None = None) -> str:
    """
    Get the slot id containing the given instant.

    The minute is floored to the nearest lower multiple of 15. The hour is
    not clamped to the trackable day, so early-morning times produce ids
    outside the slot grid.

    Args:
        now: The instant to convert. Defaults to the local current time.

    Returns:
        A zero-padded "HH:MM" slot id.
    """
    if now is None:
        now = datetime.now()
    minute = now.minute // SLOT_MINUTES * SLOT_MINUTES
    return f"{now.hour:02d}:{minute:02d}"


def slot_hour(slot_id: str) -> int | None:
    """
    Parse the hour prefix of a slot id.

    Args:
        slot_id: A "HH:MM" slot id.

    Returns:
        The hour as an integer, or None if the prefix is not numeric.
    """
    try:
        return int(slot_id.split(":")[0])
    except (AttributeError, ValueError):
        return None


def is_filled(entry: dict[str, Any]) -> bool:
    """Return True if the entry has a non-empty activity."""
    return bool(entry.get("activity"))


def normalize_day(entries: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Expand a day's stored entries into the full chronological slot list.

    Stored days only contain filled slots. Analytics that depend on
    iteration order (the focus streak) need gaps to appear as empty slots,
    so every slot of the grid gets an entry here. If several entries share
    a slot id the last one wins; entries whose slot id is not on the grid
    are dropped.

    Args:
        entries: The stored entries for one day, in any order.

    Returns:
        72 entries ordered by slot, empty slots having blank activity and
        category.
    """
    by_slot = {entry.get("slotId"): entry for entry in entries}
    return [
        by_slot.get(slot_id, {"slotId": slot_id, "activity": "", "category": ""})
        for slot_id in SLOT_IDS
    ]
