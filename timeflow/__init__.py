"""
TimeFlow - Personal time tracking in 15-minute slots.

This package provides modules for storing slot entries, computing daily and
period productivity metrics, and generating productivity reports.
"""

from timeflow.backup import (
    BackupError,
    BackupReadError,
    InvalidBackupError,
    export_backup,
    import_backup,
)
from timeflow.period import compute_period_metrics
from timeflow.processor import compute_daily_metrics
from timeflow.reporter import ConsolePrinter, ReportGenerator
from timeflow.slots import (
    CATEGORIES,
    PRODUCTIVE_IDS,
    category_by_id,
    current_slot_id,
    generate_slots,
    normalize_day,
)
from timeflow.store import (
    EntryStore,
    StoreError,
    date_range,
    get_custom_range,
    get_today,
    month_range,
    week_range,
)

__version__ = "1.0.0"

__all__ = [
    # Slots
    "CATEGORIES",
    "PRODUCTIVE_IDS",
    "category_by_id",
    "current_slot_id",
    "generate_slots",
    "normalize_day",
    # Analytics
    "compute_daily_metrics",
    "compute_period_metrics",
    # Store
    "EntryStore",
    "StoreError",
    "get_today",
    "week_range",
    "month_range",
    "date_range",
    "get_custom_range",
    # Backup
    "export_backup",
    "import_backup",
    "BackupError",
    "BackupReadError",
    "InvalidBackupError",
    # Reporter
    "ReportGenerator",
    "ConsolePrinter",
]
