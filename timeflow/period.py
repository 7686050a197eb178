"""
Period Analytics Module.

This module aggregates the entries of a contiguous date range (a week or a
month) into a period metrics bundle: the daily bundle over all entries,
one summary per date, averages and period-level insights.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Sequence

from timeflow.insights import PERIOD_RULES, evaluate_rules
from timeflow.processor import (
    compute_daily_metrics,
    minutes_to_hours,
    percentage,
    round_half_up,
)
from timeflow.slots import MEETING_ID, PRODUCTIVE_IDS, SLOT_MINUTES, is_filled


def day_label(day: date) -> str:
    """Format a date as a short label such as "Mon, Oct 19"."""
    return f"{day.strftime('%a')}, {day.strftime('%b')} {day.day}"


def build_daily_summary(date_str: str, entries: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """
    Summarize one day of a period.

    Args:
        date_str: The date in YYYY-MM-DD format.
        entries: The day's entries (possibly empty).

    Returns:
        Dictionary with the date, display labels, filled and productive
        slot counts and minutes, the day's productivity score and the
        entries themselves.
    """
    day = date.fromisoformat(date_str)
    filled = [e for e in entries if is_filled(e)]
    productive = [e for e in filled if e.get("category") in PRODUCTIVE_IDS]

    return {
        "date": date_str,
        "day_label": day_label(day),
        "day_number": day.day,
        # 0 = Sunday
        "day_of_week": day.isoweekday() % 7,
        "total_slots": len(filled),
        "total_minutes": len(filled) * SLOT_MINUTES,
        "productive_slots": len(productive),
        "productive_minutes": len(productive) * SLOT_MINUTES,
        "productivity_score": percentage(len(productive), len(filled)),
        "entries": list(entries),
    }


def find_best_day(daily_summaries: list[dict[str, Any]]) -> dict[str, Any] | None:
    """
    Pick the highest-scoring day among days with data.

    Args:
        daily_summaries: Per-day summaries in date order.

    Returns:
        The best day's summary (earliest on ties), or None when fewer than
        two days have data.
    """
    logged = [d for d in daily_summaries if d["total_slots"] > 0]
    if len(logged) < 2:
        return None
    return sorted(logged, key=lambda d: -d["productivity_score"])[0]


def compute_period_metrics(
    date_entries: Mapping[str, Sequence[dict[str, Any]]],
) -> dict[str, Any]:
    """
    Compute the metrics bundle for a date range.

    Args:
        date_entries: Mapping from every date in the range (YYYY-MM-DD) to
            that date's entries. Dates without data map to an empty list.

    Returns:
        The daily metrics bundle computed over all entries of the range,
        with these keys added or replaced:
            - daily_summaries: One summary per date, ascending
            - days_with_data: Number of dates with at least one filled slot
            - total_days: Number of dates in the range
            - avg_minutes_per_day: Logged minutes per day with data
            - avg_productivity_score: Mean score over days with data
            - insights: Period insights (replacing the daily ones)
    """
    dates = sorted(date_entries)

    # Step 1: Aggregate over the flattened range
    all_entries = [entry for d in dates for entry in date_entries[d]]
    aggregated = compute_daily_metrics(all_entries)

    # Step 2: Per-day summaries
    daily_summaries = [build_daily_summary(d, date_entries[d]) for d in dates]

    # Step 3-5: Averages over days with data
    logged = [d for d in daily_summaries if d["total_slots"] > 0]
    days_with_data = len(logged)
    if days_with_data:
        avg_minutes_per_day = round_half_up(aggregated["total_minutes"] / days_with_data)
        avg_productivity_score = round_half_up(
            sum(d["productivity_score"] for d in logged) / days_with_data
        )
    else:
        avg_minutes_per_day = 0
        avg_productivity_score = 0

    # Step 6: Period insights
    insights: list[dict[str, str]] = []
    if days_with_data:
        meeting_minutes = next(
            (c["minutes"] for c in aggregated["category_breakdown"] if c["id"] == MEETING_ID),
            0,
        )
        best_day = find_best_day(daily_summaries)
        insights = evaluate_rules(
            PERIOD_RULES,
            {
                "days_with_data": days_with_data,
                "total_days": len(daily_summaries),
                "productivity_score": aggregated["productivity_score"],
                "total_minutes": aggregated["total_minutes"],
                "best_day": best_day,
                "best_day_label": best_day["day_label"] if best_day else "",
                "best_day_score": best_day["productivity_score"] if best_day else 0,
                "meeting_minutes": meeting_minutes,
                "meeting_hours": minutes_to_hours(meeting_minutes),
            },
        )

    return {
        **aggregated,
        "daily_summaries": daily_summaries,
        "days_with_data": days_with_data,
        "total_days": len(daily_summaries),
        "avg_minutes_per_day": avg_minutes_per_day,
        "avg_productivity_score": avg_productivity_score,
        "insights": insights,
    }
