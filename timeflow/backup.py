"""
Backup Module.

This module exports the whole entry store to a versioned JSON document and
imports such a document back, replacing the store contents.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any

from timeflow.store import EntryStore, get_today

BACKUP_VERSION = 1


class BackupError(Exception):
    """Base class for backup import errors."""


class InvalidBackupError(BackupError):
    """Raised when a backup document lacks its "version" or "data" fields."""


class BackupReadError(BackupError):
    """Raised when a backup file cannot be read or parsed."""


def build_backup(data: dict[str, Any], now: datetime | None = None) -> dict[str, Any]:
    """
    Wrap store contents in the backup document.

    Args:
        data: Dictionary mapping date strings to day records.
        now: Export time. Defaults to the current UTC time.

    Returns:
        ``{"version": 1, "exportDate": <ISO-8601>, "data": data}``
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return {
        "version": BACKUP_VERSION,
        "exportDate": now.isoformat(),
        "data": data,
    }


def export_backup(store: EntryStore, path: str) -> str:
    """
    Write the whole store to a backup file.

    Args:
        store: The store to export.
        path: Target file, or an existing directory in which a file named
            ``timeflow-backup-<today>.json`` is created.

    Returns:
        The path of the written backup file.
    """
    if os.path.isdir(path):
        path = os.path.join(path, f"timeflow-backup-{get_today()}.json")

    document = build_backup(store.load_all())
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, ensure_ascii=False, indent=2)

    return path


def parse_backup(text: str) -> dict[str, Any]:
    """
    Parse and validate a backup document.

    Args:
        text: The raw JSON text.

    Returns:
        The "data" mapping of the document.

    Raises:
        BackupReadError: If the text is not valid JSON.
        InvalidBackupError: If "data" is missing or not an object,
            "version" is missing, or a day record is not an object with
            a list of entry objects.
    """
    try:
        document = json.loads(text)
    except ValueError as e:
        raise BackupReadError("Failed to parse backup file") from e

    if (
        not isinstance(document, dict)
        or not isinstance(document.get("data"), dict)
        or document.get("version") is None
    ):
        raise InvalidBackupError("Invalid backup file format")

    for day in document["data"].values():
        if (
            not isinstance(day, dict)
            or not isinstance(day.get("entries", []), list)
            or not all(isinstance(e, dict) for e in day.get("entries", []))
        ):
            raise InvalidBackupError("Invalid backup file format")

    return document["data"]


def import_backup(store: EntryStore, path: str) -> int:
    """
    Replace the store contents with a backup file.

    Nothing is written unless the whole file is read and validated.

    Args:
        store: The store to overwrite.
        path: The backup file to import.

    Returns:
        The number of dates imported.

    Raises:
        BackupReadError: If the file cannot be read or parsed.
        InvalidBackupError: If the document has the wrong shape.
    """
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise BackupReadError("Failed to read file") from e

    data = parse_backup(text)
    store.replace_all(data)
    return len(data)
