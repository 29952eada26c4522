"""
Timetable model.

One row per scheduled lecture: which class sits in which classroom for
which subject, in a given slot of a given day.
"""

from sqlmodel import Field, SQLModel


class TimetableEntryBase(SQLModel):
    """Shared properties for TimetableEntry."""
    classroom: str = Field(max_length=64, index=True)
    slot: int = Field(ge=1)
    day: str = Field(max_length=16, index=True)
    # Stored in a column named "class", which is a Python keyword
    class_name: str = Field(max_length=64, index=True, sa_column_kwargs={"name": "class"})
    subject: str = Field(max_length=128)


class TimetableEntry(TimetableEntryBase, table=True):
    """Timetable database model."""
    __tablename__ = "timetable"

    id: int | None = Field(default=None, primary_key=True)
