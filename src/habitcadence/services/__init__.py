"""Service module exports."""

from . import habits, import_csv

__all__ = ["habits", "import_csv"]
