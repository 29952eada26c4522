"""
CRUD operations for TimetableEntry model.

The three lookups answer "what is free" questions against the timetable:
a classroom or slot is free when it is known to the timetable but has no
entry for the requested slot/class on the requested day.
"""

from typing import Iterable

from sqlmodel import Session, col, select

from coraserver.models import TimetableEntry, TimetableEntryBase


def get_free_class(*, session: Session, slot: int, day: str) -> list[str]:
    """
    Get classrooms with nothing scheduled in a slot.

    Args:
        session: Database session
        slot: Slot number
        day: Day name as stored in the timetable (e.g. "Mon")

    Returns:
        Classroom names, sorted
    """
    busy = select(TimetableEntry.classroom).where(
        TimetableEntry.slot == slot,
        TimetableEntry.day == day,
    )
    statement = (
        select(TimetableEntry.classroom)
        .where(col(TimetableEntry.classroom).not_in(busy))
        .distinct()
        .order_by(TimetableEntry.classroom)
    )
    return list(session.exec(statement).all())


def get_free_slot(*, session: Session, class_name: str, day: str) -> list[int]:
    """
    Get slot numbers in which a class has nothing scheduled.

    Args:
        session: Database session
        class_name: Class identifier (e.g. "10A")
        day: Day name as stored in the timetable

    Returns:
        Slot numbers in ascending order
    """
    busy = select(TimetableEntry.slot).where(
        TimetableEntry.class_name == class_name,
        TimetableEntry.day == day,
    )
    statement = (
        select(TimetableEntry.slot)
        .where(col(TimetableEntry.slot).not_in(busy))
        .distinct()
        .order_by(TimetableEntry.slot)
    )
    return list(session.exec(statement).all())


def get_timetable_by_day(*, session: Session, class_name: str, day: str) -> list[str]:
    """
    Get the subjects a class has on a day, in slot order.

    Args:
        session: Database session
        class_name: Class identifier
        day: Day name as stored in the timetable

    Returns:
        Subject names ordered by slot
    """
    statement = (
        select(TimetableEntry.subject)
        .where(
            TimetableEntry.class_name == class_name,
            TimetableEntry.day == day,
        )
        .order_by(TimetableEntry.slot)
    )
    return list(session.exec(statement).all())


def add_timetable_entries(
    *,
    session: Session,
    entries: Iterable[TimetableEntryBase],
) -> int:
    """
    Insert timetable entries.

    Args:
        session: Database session
        entries: Entries to insert

    Returns:
        Number of rows inserted
    """
    count = 0
    for entry in entries:
        session.add(TimetableEntry.model_validate(entry))
        count += 1

    if count > 0:
        session.commit()

    return count


def clear_timetable(*, session: Session) -> int:
    """
    Remove every timetable entry.

    Returns:
        Number of rows removed
    """
    entries = session.exec(select(TimetableEntry)).all()

    count = len(entries)
    for entry in entries:
        session.delete(entry)

    if count > 0:
        session.commit()

    return count
