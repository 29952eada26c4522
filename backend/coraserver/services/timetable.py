"""
Timetable query gateway backed by the SQL timetable table.
"""

from sqlmodel import Session

from coraserver.crud.timetable import (
    get_free_class,
    get_free_slot,
    get_timetable_by_day,
)


class SqlTimetableGateway:
    """TimetableGatewayProtocol implementation over a database session."""

    def __init__(self, session: Session):
        self.session = session

    def get_free_class(self, slot: int, day: str) -> list[str]:
        return get_free_class(session=self.session, slot=slot, day=day)

    def get_free_slot(self, class_name: str, day: str) -> list[int]:
        return get_free_slot(session=self.session, class_name=class_name, day=day)

    def get_timetable_by_day(self, class_name: str, day: str) -> list[str]:
        return get_timetable_by_day(
            session=self.session, class_name=class_name, day=day
        )
