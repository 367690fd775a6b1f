"""Value formatting for records leaving the service (responses, audit snapshots)."""

from datetime import date, datetime
from typing import Any

WIRE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_wire(value: Any) -> Any:
    """Render datetimes as ``YYYY-MM-DD HH:MM:SS`` throughout a payload."""
    if isinstance(value, datetime):
        return value.strftime(WIRE_DATETIME_FORMAT)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: format_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [format_wire(item) for item in value]
    return value
