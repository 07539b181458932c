from __future__ import annotations

from datetime import datetime, timezone


class InvalidDate(ValueError):
    """Raised when a textual birth date is not a valid ``dd/mm/yyyy`` date."""


def parse_birth_date(text: str) -> int:
    """Parse a ``dd/mm/yyyy`` date and return its epoch timestamp in milliseconds (UTC midnight)."""

    parts = text.strip().split("/") if isinstance(text, str) else []
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise InvalidDate(f"'{text}' is not a date in dd/mm/yyyy format.")

    day, month, year = parts
    if len(year) != 4:
        raise InvalidDate(f"'{text}' must carry a four-digit year.")
    try:
        moment = datetime(int(year), int(month), int(day), tzinfo=timezone.utc)
    except ValueError as e:
        raise InvalidDate(f"'{text}' is not a valid calendar date: {e}") from e
    return to_epoch_millis(moment)


def to_epoch_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.astimezone(timezone.utc).timestamp() * 1000)
