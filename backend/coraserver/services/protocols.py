"""
Protocol definitions for service collaborators.

Route handlers depend on these protocols rather than on concrete classes,
so tests can substitute mocks through FastAPI dependency overrides.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TimetableGatewayProtocol(Protocol):
    """
    Read-only timetable lookups used by the /db routes.

    Example:
        class FakeGateway:
            def get_free_class(self, slot, day):
                return ["Room A", "Room B"]
            ...

        app.dependency_overrides[get_timetable_gateway] = lambda: FakeGateway()
    """

    def get_free_class(self, slot: int, day: str) -> list[str]:
        """Classrooms with nothing scheduled in `slot` on `day`."""
        ...

    def get_free_slot(self, class_name: str, day: str) -> list[int]:
        """Slot numbers in which `class_name` has nothing scheduled on `day`."""
        ...

    def get_timetable_by_day(self, class_name: str, day: str) -> list[str]:
        """Subjects `class_name` has on `day`, in slot order."""
        ...
