"""
Daily Analytics Module.

This module turns a sequence of slot entries into the single-day metrics
bundle: time per category, productivity score, longest focus streak, peak
hour, hourly productive/other split and rule-based insights.

All functions are pure: they never mutate their inputs and return freshly
built dictionaries on every call.
"""

from __future__ import annotations

import math
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from timeflow.insights import DAILY_RULES, evaluate_rules
from timeflow.slots import (
    BREAK_ID,
    CATEGORIES,
    EXERCISE_ID,
    FIRST_HOUR,
    LAST_HOUR,
    MEETING_ID,
    PRODUCTIVE_IDS,
    SLOT_MINUTES,
    hour_label,
    is_filled,
    short_hour_label,
    slot_hour,
)


def round_half_up(value: float) -> int:
    """
    Round a non-negative number to the nearest integer, halves going up.

    Args:
        value: The number to round.

    Returns:
        The rounded integer (2.5 -> 3, unlike the built-in ``round``).
    """
    return int(math.floor(value + 0.5))


def minutes_to_hours(minutes: int) -> str:
    """
    Convert minutes to an hours string with one decimal place.

    Args:
        minutes: The number of minutes.

    Returns:
        The hours formatted with one decimal, halves rounded up
        (15 minutes -> "0.3").
    """
    hours = Decimal(minutes) / Decimal(60)
    return str(hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def percentage(part: int, total: int) -> int:
    """Return ``part`` as a rounded percentage of ``total``, 0 if total is 0."""
    if total <= 0:
        return 0
    return round_half_up(part / total * 100)


def aggregate_by_category(entries: list[dict[str, Any]]) -> dict[str, int]:
    """
    Sum logged minutes per category.

    Every known category starts at 0. Filled entries without a category
    contribute nothing.

    Args:
        entries: Filled entries.

    Returns:
        Dictionary mapping category ids to minutes.
    """
    category_minutes: dict[str, int] = {c["id"]: 0 for c in CATEGORIES}
    for entry in entries:
        category = entry.get("category")
        if category:
            category_minutes[category] = category_minutes.get(category, 0) + SLOT_MINUTES
    return category_minutes


def build_category_breakdown(
    category_minutes: dict[str, int],
    total_minutes: int,
) -> list[dict[str, Any]]:
    """
    Build the per-category breakdown for display.

    Args:
        category_minutes: Minutes per category id.
        total_minutes: Total logged minutes, the percentage base.

    Returns:
        Category records extended with "minutes", "hours" and "percentage",
        only for categories with time logged, sorted by minutes descending.
        Ties keep the category table order.
    """
    breakdown = [
        {
            **category,
            "minutes": category_minutes.get(category["id"], 0),
            "hours": minutes_to_hours(category_minutes.get(category["id"], 0)),
            "percentage": percentage(
                category_minutes.get(category["id"], 0), total_minutes
            ),
        }
        for category in CATEGORIES
    ]
    breakdown = [c for c in breakdown if c["minutes"] > 0]
    breakdown.sort(key=lambda c: -c["minutes"])
    return breakdown


def longest_productive_streak(entries: Iterable[dict[str, Any]]) -> int:
    """
    Find the longest run of consecutive filled, productive entries.

    The entries are scanned in the order given, so callers must pass them
    in slot order (see ``timeflow.slots.normalize_day``) for the result to
    describe uninterrupted time.

    Args:
        entries: Entries in iteration order, empty slots included.

    Returns:
        The length of the longest run, in slots.
    """
    max_streak = 0
    current_streak = 0
    for entry in entries:
        if is_filled(entry) and entry.get("category") in PRODUCTIVE_IDS:
            current_streak += 1
            max_streak = max(max_streak, current_streak)
        else:
            current_streak = 0
    return max_streak


def find_peak_hour(entries: list[dict[str, Any]]) -> str:
    """
    Find the hour with the most filled entries.

    Ties go to the earliest hour.

    Args:
        entries: Filled entries.

    Returns:
        A 12-hour label such as "9:00 AM", or "N/A" without usable entries.
    """
    hour_counts: dict[int, int] = defaultdict(int)
    for entry in entries:
        hour = slot_hour(entry.get("slotId", ""))
        if hour is not None:
            hour_counts[hour] += 1

    if not hour_counts:
        return "N/A"

    peak = max(sorted(hour_counts), key=lambda h: hour_counts[h])
    return hour_label(peak)


def build_hourly_data(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Split each trackable hour into productive and other minutes.

    Args:
        entries: Filled entries.

    Returns:
        18 dictionaries for hours 6 to 23, each with "hour", "label",
        "productive" and "other" minutes. Hours without entries are present
        with zero minutes.
    """
    productive: dict[int, int] = defaultdict(int)
    other: dict[int, int] = defaultdict(int)
    for entry in entries:
        hour = slot_hour(entry.get("slotId", ""))
        if hour is None:
            continue
        if entry.get("category") in PRODUCTIVE_IDS:
            productive[hour] += SLOT_MINUTES
        else:
            other[hour] += SLOT_MINUTES

    return [
        {
            "hour": hour,
            "label": short_hour_label(hour),
            "productive": productive[hour],
            "other": other[hour],
        }
        for hour in range(FIRST_HOUR, LAST_HOUR + 1)
    ]


def compute_daily_metrics(entries: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """
    Compute the metrics bundle for a sequence of entries.

    The sequence may hold one day's full slot list, only the filled entries,
    or the concatenated entries of several days. Duplicate slot ids are not
    merged. The function never raises on well-formed entries, including an
    empty sequence.

    Args:
        entries: Entry dictionaries with "slotId", "activity" and "category"
            keys, in slot order.

    Returns:
        Dictionary containing:
            - total_slots: Number of filled entries
            - total_minutes: total_slots * 15
            - total_hours: Logged hours with one decimal, as a string
            - category_breakdown: Per-category minutes, hours and percentage
            - productive_minutes: Minutes in productive categories
            - productivity_score: Productive share of logged time, 0-100
            - max_streak: Longest uninterrupted productive run, in minutes
            - peak_hour_label: Busiest hour, or "N/A"
            - hourly_data: Productive/other minutes for hours 6-23
            - insights: Rule-based insight messages
    """
    entries = list(entries)

    # Step 1: Filled entries
    filled = [e for e in entries if is_filled(e)]
    total_slots = len(filled)
    total_minutes = total_slots * SLOT_MINUTES

    # Step 2: Category minutes
    category_minutes = aggregate_by_category(filled)
    category_breakdown = build_category_breakdown(category_minutes, total_minutes)

    # Step 3: Productivity score
    productive_minutes = sum(category_minutes.get(c, 0) for c in PRODUCTIVE_IDS)
    productivity_score = percentage(productive_minutes, total_minutes)

    # Step 4: Longest streak (iteration order, empty slots included)
    streak_slots = longest_productive_streak(entries)

    # Step 5-6: Hour-based views
    peak_hour_label = find_peak_hour(filled)
    hourly_data = build_hourly_data(filled)

    # Step 7: Insights
    meeting_minutes = category_minutes.get(MEETING_ID, 0)
    insights = evaluate_rules(
        DAILY_RULES,
        {
            "productivity_score": productivity_score,
            "total_minutes": total_minutes,
            "streak_slots": streak_slots,
            "max_streak": streak_slots * SLOT_MINUTES,
            "meeting_minutes": meeting_minutes,
            "meeting_hours": minutes_to_hours(meeting_minutes),
            "break_minutes": category_minutes.get(BREAK_ID, 0),
            "exercise_minutes": category_minutes.get(EXERCISE_ID, 0),
        },
    )

    return {
        "total_slots": total_slots,
        "total_minutes": total_minutes,
        "total_hours": minutes_to_hours(total_minutes),
        "category_breakdown": category_breakdown,
        "productive_minutes": productive_minutes,
        "productivity_score": productivity_score,
        "max_streak": streak_slots * SLOT_MINUTES,
        "peak_hour_label": peak_hour_label,
        "hourly_data": hourly_data,
        "insights": insights,
    }
