import json

import pytest

from timeflow.store import (
    EntryStore,
    StoreError,
    date_range,
    get_custom_range,
    get_today,
    month_range,
    parse_date,
    week_range,
)


@pytest.fixture
def store(tmp_path):
    return EntryStore(str(tmp_path / "data" / "timeflow_data.json"))


def test_read_day_on_missing_file_is_empty(store):
    assert store.read_day("2024-03-04") == []
    assert store.load_day("2024-03-04") == {"date": "2024-03-04", "entries": []}
    assert store.all_dates() == []


def test_set_entry_persists_in_slot_order(store):
    store.set_entry("2024-03-04", "10:00", "Review", "meeting")
    store.set_entry("2024-03-04", "09:00", "Code", "deep-work")

    assert store.read_day("2024-03-04") == [
        {"slotId": "09:00", "activity": "Code", "category": "deep-work"},
        {"slotId": "10:00", "activity": "Review", "category": "meeting"},
    ]
    with open(store.path, encoding="utf-8") as f:
        on_disk = json.load(f)
    assert on_disk["2024-03-04"]["date"] == "2024-03-04"


def test_set_entry_replaces_existing_slot(store):
    store.set_entry("2024-03-04", "09:00", "Code", "deep-work")
    store.set_entry("2024-03-04", "09:00", "Walk", "exercise")

    assert store.read_day("2024-03-04") == [
        {"slotId": "09:00", "activity": "Walk", "category": "exercise"},
    ]


def test_clearing_last_entry_removes_date(store):
    store.set_entry("2024-03-04", "09:00", "Code", "deep-work")
    store.set_entry("2024-03-04", "09:00", "")

    assert store.all_dates() == []


def test_set_entry_validates_slot_and_category(store):
    with pytest.raises(ValueError):
        store.set_entry("2024-03-04", "05:45", "Too early")
    with pytest.raises(ValueError):
        store.set_entry("2024-03-04", "09:10", "Off grid")
    with pytest.raises(ValueError):
        store.set_entry("2024-03-04", "09:00", "Dig", "gardening")
    with pytest.raises(ValueError):
        store.set_entry("2024-13-04", "09:00", "Code")


def test_write_day_keeps_only_filled_entries(store):
    store.write_day("2024-03-04", [
        {"slotId": "09:00", "activity": "Code", "category": "deep-work"},
        {"slotId": "09:15", "activity": "", "category": ""},
    ])

    assert [e["slotId"] for e in store.read_day("2024-03-04")] == ["09:00"]


def test_read_range_includes_empty_dates(store):
    store.set_entry("2024-03-05", "09:00", "Code", "deep-work")

    week = store.read_range("2024-03-04", "2024-03-10")

    assert list(week) == date_range("2024-03-04", "2024-03-10")
    assert week["2024-03-04"] == []
    assert len(week["2024-03-05"]) == 1


def test_all_dates_newest_first(store):
    store.set_entry("2024-03-04", "09:00", "A")
    store.set_entry("2024-03-06", "09:00", "B")
    store.set_entry("2024-03-05", "09:00", "C")

    assert store.all_dates() == ["2024-03-06", "2024-03-05", "2024-03-04"]


def test_corrupt_store_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError):
        EntryStore(str(path)).read_day("2024-03-04")


def test_non_object_store_raises(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(StoreError):
        EntryStore(str(path)).load_all()


def test_replace_all_leaves_no_temp_files(store, tmp_path):
    store.replace_all({"2024-03-04": {"date": "2024-03-04", "entries": []}})

    assert [p.name for p in (tmp_path / "data").iterdir()] == ["timeflow_data.json"]


@pytest.mark.parametrize(
    "day, expected",
    [
        ("2024-03-06", ("2024-03-04", "2024-03-10")),
        ("2024-03-04", ("2024-03-04", "2024-03-10")),
        ("2024-03-10", ("2024-03-04", "2024-03-10")),
        ("2025-01-01", ("2024-12-30", "2025-01-05")),
        ("2023-12-31", ("2023-12-25", "2023-12-31")),
    ],
)
def test_week_range_starts_on_monday(day, expected):
    assert week_range(day) == expected


@pytest.mark.parametrize(
    "day, expected",
    [
        ("2024-02-15", ("2024-02-01", "2024-02-29")),
        ("2023-02-01", ("2023-02-01", "2023-02-28")),
        ("2024-12-31", ("2024-12-01", "2024-12-31")),
        ("2024-04-30", ("2024-04-01", "2024-04-30")),
    ],
)
def test_month_range(day, expected):
    assert month_range(day) == expected


def test_date_range_crosses_year_boundary():
    assert date_range("2024-12-30", "2025-01-02") == [
        "2024-12-30", "2024-12-31", "2025-01-01", "2025-01-02",
    ]
    assert date_range("2024-03-04", "2024-03-04") == ["2024-03-04"]
    assert date_range("2024-03-05", "2024-03-04") == []


def test_custom_range_validation():
    assert get_custom_range("2024-03-01", "2024-03-31") == ("2024-03-01", "2024-03-31")
    with pytest.raises(ValueError):
        get_custom_range("2024-03-31", "2024-03-01")
    with pytest.raises(ValueError):
        get_custom_range("2024-03-01", "March 31")


def test_get_today_format():
    assert parse_date(get_today()).isoformat() == get_today()
