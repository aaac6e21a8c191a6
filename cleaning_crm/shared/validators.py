"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional, Union

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_iso_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Validate a calendar date in YYYY-MM-DD form.

    Args:
        value: date string or date instance

    Returns:
        Parsed date (or None when no value was given)

    Raises:
        ValueError: If the value is not a valid YYYY-MM-DD date
    """
    if value is None or isinstance(value, date):
        return value

    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        raise ValueError("Date must be in YYYY-MM-DD format")

    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Invalid calendar date: {value}") from None


def validate_id_list(value: Union[int, list, None]) -> Optional[list[int]]:
    """
    Normalize a single record ID or a list of record IDs to a list of ints.

    Raises:
        ValueError: If any ID is not a positive integer
    """
    if value is None:
        return None
    if not isinstance(value, list):
        value = [value]

    ids = []
    for item in value:
        try:
            record_id = int(item)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid record ID: {item!r}") from None
        if record_id <= 0:
            raise ValueError(f"Invalid record ID: {item!r}")
        ids.append(record_id)
    return ids
