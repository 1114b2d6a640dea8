"""Repository protocols for the habit store."""

from .habit import HabitRepository

__all__ = ["HabitRepository"]
