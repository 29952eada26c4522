"""
Models package for database models.

    from coraserver.models import TimetableEntry
"""

# Re-export SQLModel for table creation
from sqlmodel import SQLModel

from coraserver.models.timetable import TimetableEntry, TimetableEntryBase

__all__ = [
    "SQLModel",
    "TimetableEntry",
    "TimetableEntryBase",
]
