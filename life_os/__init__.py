"""
Life OS: daily protocol (habit) dashboard.
"""

from life_os.store import HabitStore, RemoteError
from life_os.toggle import ToggleController

__all__ = ["HabitStore", "RemoteError", "ToggleController"]
