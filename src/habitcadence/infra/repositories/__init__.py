"""Concrete repository implementations."""

from .habit import SQLModelHabitRepository, to_completion_entries

__all__ = ["SQLModelHabitRepository", "to_completion_entries"]
