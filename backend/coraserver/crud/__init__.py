"""
CRUD operations module.
"""

from coraserver.crud.timetable import (
    add_timetable_entries,
    clear_timetable,
    get_free_class,
    get_free_slot,
    get_timetable_by_day,
)

__all__ = [
    "add_timetable_entries",
    "clear_timetable",
    "get_free_class",
    "get_free_slot",
    "get_timetable_by_day",
]
