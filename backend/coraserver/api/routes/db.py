"""
Timetable query routes.

Endpoints:
  - GET /db/freeclass?slot=<int>&day=<day>
  - GET /db/freeslot?class=<class>&day=<day>
  - GET /db/daytimetable?class=<class>&day=<day>

Each returns a JSON array. Parameters are passed through to the timetable
gateway as-is; only `slot` is checked (it must parse as a 64-bit integer).
"""

import json
import logging
import re

from fastapi import APIRouter, Query, status
from fastapi.responses import PlainTextResponse, Response

from coraserver.api.deps import TimetableGatewayDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/db", tags=["timetable"])

# Optional sign and ASCII digits only, no whitespace or underscores
_SLOT_PATTERN = re.compile(r"[+-]?[0-9]+")

# Signed 64-bit range, the widest slot the database column holds
_SLOT_MIN = -(2**63)
_SLOT_MAX = 2**63 - 1


def _parse_slot(slot: str) -> int | None:
    """Parse `slot` as a signed 64-bit integer, or return None."""
    if not _SLOT_PATTERN.fullmatch(slot):
        return None
    try:
        value = int(slot)
    except ValueError:
        # Longer than the interpreter's integer string limit
        return None
    if not _SLOT_MIN <= value <= _SLOT_MAX:
        return None
    return value


def _json_list(result: list) -> Response:
    """Serialize a query result, or report a 500 if it cannot be."""
    try:
        content = json.dumps(result, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        logger.error("Error serializing timetable result: %s", e)
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(content=content, media_type="application/json")


@router.get("/freeclass")
def free_class(
    gateway: TimetableGatewayDep,
    slot: str = "",
    day: str = "",
) -> Response:
    """Classrooms with nothing scheduled in `slot` on `day`."""
    slot_value = _parse_slot(slot)
    if slot_value is None:
        logger.info("Rejected freeclass query with slot=%r", slot)
        return PlainTextResponse("Invalid slot value", status_code=status.HTTP_400_BAD_REQUEST)

    return _json_list(gateway.get_free_class(slot_value, day))


@router.get("/freeslot")
def free_slot(
    gateway: TimetableGatewayDep,
    class_name: str = Query("", alias="class"),
    day: str = "",
) -> Response:
    """Slots in which `class` has nothing scheduled on `day`."""
    return _json_list(gateway.get_free_slot(class_name, day))


@router.get("/daytimetable")
def day_timetable(
    gateway: TimetableGatewayDep,
    class_name: str = Query("", alias="class"),
    day: str = "",
) -> Response:
    """Subjects `class` has on `day`, in slot order."""
    return _json_list(gateway.get_timetable_by_day(class_name, day))
