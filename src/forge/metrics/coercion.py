"""Lenient field access for fetched records.

Records reach the metrics as backend rows (dicts) or as pydantic models.
Missing or malformed fields fall back to zero/False/None instead of raising.
"""

import math
from datetime import date, datetime
from typing import Any, Optional


def get_field(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an object."""
    if record is None:
        return default
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def to_number(value: Any) -> float:
    """Coerce a value to a finite float, 0.0 when it is not numeric."""
    if isinstance(value, bool):
        number = float(value)
    elif isinstance(value, (int, float, str)):
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except (ValueError, OverflowError):
            return 0.0
    else:
        return 0.0
    # NaN and infinities
    return number if math.isfinite(number) else 0.0


def to_int(value: Any) -> int:
    """Coerce a value to an int (truncating), 0 when it is not numeric."""
    return int(to_number(value))


def to_count(value: Any) -> int:
    """Length of a list or tuple, 0 for anything else."""
    if isinstance(value, (list, tuple)):
        return len(value)
    return 0


def to_bool(value: Any) -> bool:
    """Coerce backend booleans (bool, 0/1, "true"/"false") to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes")
    return False


def to_date(value: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string (or date/datetime) into a date, None if invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None
