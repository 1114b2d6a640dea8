"""CSV ingestion of completion entries."""

from __future__ import annotations

from pathlib import Path
from typing import Hashable, Optional

import pandas as pd

from ..domain.entries import CompletionEntry
from ..logging_config import get_logger

logger = get_logger("services.import_csv")

_TRUE_VALUES = {"1", "true", "yes", "y", "done", "x"}
_FALSE_VALUES = {"0", "false", "no", "n", ""}


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    return frame


def parse_completed(raw: object) -> Optional[bool]:
    """Interpret a cell as a completion flag; None when unrecognised."""

    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def entries_from_frame(frame: pd.DataFrame, *, habit_id: Hashable = None) -> list[CompletionEntry]:
    """Convert rows into entries; row order becomes ``sequence``.

    A non-empty ``habit_id`` column overrides the ``habit_id`` argument (as a
    string) so the engine can filter mixed files. Dates must be ISO 8601, each
    row parsed on its own; rows with bad dates or flags are skipped.
    """

    if "date" not in frame.columns:
        raise ValueError("CSV is missing the required 'date' column")

    dates = pd.to_datetime(frame["date"], errors="coerce", format="ISO8601")
    entries: list[CompletionEntry] = []
    for position, (row_index, row) in enumerate(frame.iterrows()):
        stamp = dates.loc[row_index]
        if pd.isna(stamp):
            logger.warning("Skipping row with invalid date", extra={"row": position, "value": row["date"]})
            continue

        completed = parse_completed(row.get("completed", "true"))
        if completed is None:
            logger.warning(
                "Skipping row with invalid completed flag",
                extra={"row": position, "value": row.get("completed")},
            )
            continue

        row_habit = habit_id
        raw_habit = str(row.get("habit_id", "")).strip()
        if raw_habit:
            row_habit = raw_habit

        reason = row.get("reason") or None
        entries.append(
            CompletionEntry(
                habit_id=row_habit,
                occurred_on=stamp.date(),
                completed=completed,
                reason=reason.strip() if isinstance(reason, str) else reason,
                sequence=position,
            )
        )
    return entries


def load_entries_csv(file_path: Path, *, habit_id: Hashable = None, encoding: str = "utf-8") -> list[CompletionEntry]:
    """Read completion entries from ``file_path``."""

    frame = normalize_frame(file_path=Path(file_path), encoding=encoding)
    entries = entries_from_frame(frame, habit_id=habit_id)
    logger.info("Entries imported", extra={"path": str(file_path), "count": len(entries)})
    return entries


__all__ = ["entries_from_frame", "load_entries_csv", "normalize_frame", "parse_completed"]
