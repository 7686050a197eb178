import pytest

from timeflow.processor import (
    compute_daily_metrics,
    longest_productive_streak,
    minutes_to_hours,
    percentage,
    round_half_up,
)
from timeflow.slots import normalize_day


def entry(slot_id, activity="Work", category="deep-work"):
    return {"slotId": slot_id, "activity": activity, "category": category}


def texts(metrics):
    return [i["text"] for i in metrics["insights"]]


def test_rounding_helpers():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert minutes_to_hours(15) == "0.3"
    assert minutes_to_hours(45) == "0.8"
    assert minutes_to_hours(150) == "2.5"
    assert minutes_to_hours(0) == "0.0"
    assert percentage(1, 8) == 13
    assert percentage(5, 0) == 0


def test_single_entry_in_full_day():
    metrics = compute_daily_metrics(normalize_day([entry("09:00", "Code")]))

    assert metrics["total_slots"] == 1
    assert metrics["total_minutes"] == 15
    assert metrics["productivity_score"] == 100
    assert len(metrics["category_breakdown"]) == 1
    breakdown = metrics["category_breakdown"][0]
    assert breakdown["id"] == "deep-work"
    assert breakdown["minutes"] == 15
    assert breakdown["hours"] == "0.3"
    assert breakdown["percentage"] == 100
    assert metrics["peak_hour_label"] == "9:00 AM"
    assert [i["type"] for i in metrics["insights"]] == ["positive"]


def test_empty_day():
    metrics = compute_daily_metrics([])

    assert metrics["total_slots"] == 0
    assert metrics["total_minutes"] == 0
    assert metrics["productivity_score"] == 0
    assert metrics["max_streak"] == 0
    assert metrics["peak_hour_label"] == "N/A"
    assert metrics["category_breakdown"] == []
    assert metrics["insights"] == []
    assert len(metrics["hourly_data"]) == 18


def test_unfilled_slots_are_ignored():
    metrics = compute_daily_metrics(normalize_day([]))

    assert metrics["total_slots"] == 0
    assert metrics["peak_hour_label"] == "N/A"
    assert metrics["insights"] == []


def test_entry_with_category_but_no_activity_is_not_counted():
    metrics = compute_daily_metrics([entry("09:00", activity="")])

    assert metrics["total_slots"] == 0
    assert metrics["category_breakdown"] == []


def test_four_consecutive_productive_slots_make_an_hour_streak():
    day = normalize_day([entry(s) for s in ("09:00", "09:15", "09:30", "09:45")])

    metrics = compute_daily_metrics(day)

    assert metrics["max_streak"] == 60
    assert "Great focus streak! You had 60 minutes of uninterrupted productive time." in texts(metrics)


def test_gap_splits_streak():
    day = normalize_day([entry(s) for s in ("09:00", "09:15", "09:45", "10:00")])

    assert compute_daily_metrics(day)["max_streak"] == 30


def test_non_productive_entry_resets_streak():
    entries = [entry("09:00"), entry("09:15", category="leisure"), entry("09:30")]
    assert longest_productive_streak(entries) == 1


def test_streak_follows_iteration_order():
    # Without normalization the gap at 09:30 is invisible
    entries = [entry(s) for s in ("09:00", "09:15", "09:45", "10:00")]
    assert compute_daily_metrics(entries)["max_streak"] == 60


def test_meeting_warning():
    slots = [f"{h:02d}:{m:02d}" for h in (10, 11) for m in (0, 15, 30, 45)] + ["12:00", "12:15"]
    metrics = compute_daily_metrics(normalize_day([entry(s, "Sync", "meeting") for s in slots]))

    assert metrics["total_minutes"] == 150
    warnings = [i["text"] for i in metrics["insights"] if i["type"] == "warning"]
    assert any("2.5" in t for t in warnings)
    assert "No breaks logged! Remember to take breaks for sustained productivity." in warnings


def test_break_suppresses_no_break_warning():
    slots = [f"{h:02d}:{m:02d}" for h in (9, 10) for m in (0, 15, 30, 45)]
    entries = [entry(s) for s in slots] + [entry("11:00", "Coffee", "break")]

    metrics = compute_daily_metrics(normalize_day(entries))

    assert metrics["total_minutes"] == 135
    assert not any("No breaks" in t for t in texts(metrics))


def test_exercise_insight():
    metrics = compute_daily_metrics([entry("07:00", "Run", "exercise")])
    assert "Nice work fitting in exercise today!" in texts(metrics)


@pytest.mark.parametrize(
    "productive, other, expected",
    [
        (3, 1, "Incredible focus today! You spent over 70% of your time on productive tasks."),
        (1, 1, "Solid day! Over half your time went to productive work."),
        (1, 3, "Consider blocking off more time for deep work tomorrow."),
    ],
)
def test_score_tiers_are_exclusive(productive, other, expected):
    entries = [entry(f"{h:02d}:00") for h in range(6, 6 + productive)]
    entries += [entry(f"{h:02d}:30", "Game", "leisure") for h in range(6, 6 + other)]

    metrics = compute_daily_metrics(entries)

    tier_texts = [
        t for t in texts(metrics)
        if t.startswith(("Incredible", "Solid", "Consider"))
    ]
    assert tier_texts == [expected]


def test_category_breakdown_sorted_with_table_order_ties():
    entries = [
        entry("09:00", "Chat", "meeting"),
        entry("09:15", "Code", "deep-work"),
        entry("09:30", "Game", "leisure"),
        entry("09:45", "Game", "leisure"),
    ]

    breakdown = compute_daily_metrics(entries)["category_breakdown"]

    assert [c["id"] for c in breakdown] == ["leisure", "deep-work", "meeting"]
    assert [c["percentage"] for c in breakdown] == [50, 25, 25]
    assert all(c["minutes"] > 0 for c in breakdown)


def test_percentages_are_rounded_per_category():
    entries = [entry(f"09:{m:02d}") for m in (0, 15, 30, 45)] + [entry("10:00")]
    entries += [entry(f"11:{m:02d}", "Game", "leisure") for m in (0, 15, 30)]

    breakdown = compute_daily_metrics(entries)["category_breakdown"]

    # 62.5 and 37.5 both round up, so the shares can total more than 100
    assert [c["percentage"] for c in breakdown] == [63, 38]
    for c in breakdown:
        assert c["percentage"] == round_half_up(c["minutes"] / 120 * 100)


def test_missing_and_unknown_categories_are_tolerated():
    entries = [
        {"slotId": "09:00", "activity": "Something"},
        entry("09:15", "Dig", "gardening"),
        entry("09:30", "Code", "deep-work"),
    ]

    metrics = compute_daily_metrics(entries)

    assert metrics["total_slots"] == 3
    assert metrics["productivity_score"] == 33
    assert [c["id"] for c in metrics["category_breakdown"]] == ["deep-work"]


def test_peak_hour_prefers_busiest_then_earliest():
    busiest = [entry("14:00"), entry("14:15"), entry("09:00")]
    tied = [entry("14:00"), entry("09:00")]

    assert compute_daily_metrics(busiest)["peak_hour_label"] == "2:00 PM"
    assert compute_daily_metrics(tied)["peak_hour_label"] == "9:00 AM"


def test_hourly_data_buckets():
    entries = [
        entry("09:00"),
        entry("09:15", "Game", "leisure"),
        entry("09:30", "Mystery", ""),
        entry("23:45", "Read", "learning"),
    ]

    hourly = compute_daily_metrics(entries)["hourly_data"]

    assert [b["hour"] for b in hourly] == list(range(6, 24))
    nine = hourly[3]
    assert nine == {"hour": 9, "label": "9a", "productive": 15, "other": 30}
    assert hourly[-1]["productive"] == 15
    assert hourly[0] == {"hour": 6, "label": "6a", "productive": 0, "other": 0}


def test_invariants_hold_and_computation_is_pure():
    entries = normalize_day(
        [entry("08:00", "Email", "email"), entry("13:00", "Lunch", "break")]
    )
    snapshot = [dict(e) for e in entries]

    first = compute_daily_metrics(entries)
    second = compute_daily_metrics(entries)

    assert first == second
    assert entries == snapshot
    assert first["total_minutes"] == first["total_slots"] * 15
    assert 0 <= first["productivity_score"] <= 100
    assert first["total_hours"] == "0.5"
    assert first["productive_minutes"] == 15
