"""
Insight Rules Module.

Natural-language insights are produced from ordered rule tables. Each rule
pairs a predicate over the computed aggregates with a message template.
Every predicate is evaluated, so several insights may fire for one input;
tiers that must not overlap use disjoint predicates.
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple


class InsightRule(NamedTuple):
    """
    A single insight rule.

    Attributes:
        predicate: Callable receiving the aggregate context, returning True
            when the insight applies.
        type: One of "positive", "warning" or "neutral".
        template: Message template, formatted with the context via
            ``str.format``.
    """

    predicate: Callable[[dict[str, Any]], bool]
    type: str
    template: str


DAILY_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        lambda c: c["productivity_score"] >= 70,
        "positive",
        "Incredible focus today! You spent over 70% of your time on productive tasks.",
    ),
    InsightRule(
        lambda c: 50 <= c["productivity_score"] < 70,
        "positive",
        "Solid day! Over half your time went to productive work.",
    ),
    InsightRule(
        lambda c: c["productivity_score"] < 50 and c["total_minutes"] > 0,
        "neutral",
        "Consider blocking off more time for deep work tomorrow.",
    ),
    InsightRule(
        lambda c: c["streak_slots"] >= 4,
        "positive",
        "Great focus streak! You had {max_streak} minutes of uninterrupted productive time.",
    ),
    InsightRule(
        lambda c: c["meeting_minutes"] > 120,
        "warning",
        "You spent {meeting_hours} hours in meetings. Consider protecting more focus time.",
    ),
    InsightRule(
        lambda c: c["break_minutes"] == 0 and c["total_minutes"] > 120,
        "warning",
        "No breaks logged! Remember to take breaks for sustained productivity.",
    ),
    InsightRule(
        lambda c: c["exercise_minutes"] > 0,
        "positive",
        "Nice work fitting in exercise today!",
    ),
)

PERIOD_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        lambda c: c["days_with_data"] < c["total_days"],
        "neutral",
        "You logged data on {days_with_data} of {total_days} days in this period.",
    ),
    InsightRule(
        lambda c: c["days_with_data"] >= c["total_days"],
        "positive",
        "Perfect logging streak! You tracked all {total_days} days.",
    ),
    InsightRule(
        lambda c: c["productivity_score"] >= 70,
        "positive",
        "Strong period! {productivity_score}% of your logged time was productive.",
    ),
    InsightRule(
        lambda c: 50 <= c["productivity_score"] < 70,
        "positive",
        "Solid productivity at {productivity_score}% across the period.",
    ),
    InsightRule(
        lambda c: c["productivity_score"] < 50 and c["total_minutes"] > 0,
        "neutral",
        "Consider blocking off more time for deep work.",
    ),
    InsightRule(
        lambda c: c["best_day"] is not None,
        "positive",
        "Most productive day: {best_day_label} at {best_day_score}%.",
    ),
    InsightRule(
        lambda c: c["meeting_minutes"] > 300,
        "warning",
        "{meeting_hours} hours in meetings this period. Consider protecting more focus blocks.",
    ),
)


def evaluate_rules(
    rules: tuple[InsightRule, ...],
    context: dict[str, Any],
) -> list[dict[str, str]]:
    """
    Evaluate every rule against the context, in table order.

    Args:
        rules: The ordered rule table.
        context: Aggregates the predicates and templates read.

    Returns:
        A list of insight dictionaries with "type" and "text" keys.
    """
    return [
        {"type": rule.type, "text": rule.template.format(**context)}
        for rule in rules
        if rule.predicate(context)
    ]
