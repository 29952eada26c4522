"""
Tests for the SQL-backed timetable gateway.
"""

from sqlmodel import Session

from coraserver.crud.timetable import add_timetable_entries
from coraserver.models import TimetableEntryBase
from coraserver.services.protocols import TimetableGatewayProtocol
from coraserver.services.timetable import SqlTimetableGateway


def _seed(session: Session) -> None:
    add_timetable_entries(
        session=session,
        entries=[
            TimetableEntryBase(
                classroom="Room A", slot=1, day="Mon", class_name="10A", subject="Mathematics"
            ),
            TimetableEntryBase(
                classroom="Room B", slot=2, day="Mon", class_name="10A", subject="Physics"
            ),
            TimetableEntryBase(
                classroom="Room B", slot=1, day="Mon", class_name="10B", subject="Art"
            ),
        ],
    )


class TestSqlTimetableGateway:
    """SqlTimetableGateway delegates to the timetable queries."""

    def test_satisfies_protocol(self, session: Session):
        assert isinstance(SqlTimetableGateway(session), TimetableGatewayProtocol)

    def test_free_class(self, session: Session):
        _seed(session)
        gateway = SqlTimetableGateway(session)

        assert gateway.get_free_class(2, "Mon") == ["Room A"]
        assert gateway.get_free_class(1, "Mon") == []

    def test_free_slot(self, session: Session):
        _seed(session)
        gateway = SqlTimetableGateway(session)

        assert gateway.get_free_slot("10B", "Mon") == [2]

    def test_timetable_by_day(self, session: Session):
        _seed(session)
        gateway = SqlTimetableGateway(session)

        assert gateway.get_timetable_by_day("10A", "Mon") == ["Mathematics", "Physics"]
