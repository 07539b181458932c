from __future__ import annotations

from typing import Iterable, Optional, Tuple

from people_directory.domain.errors import PersonConflictError
from people_directory.domain.models import Person


def name_key(lastname: str, firstname: str) -> Tuple[str, str]:
    """Comparison key for the (lastname, firstname) pair, case-insensitive."""
    return lastname.casefold(), firstname.casefold()


def assert_no_conflict(
    lastname: str,
    firstname: str,
    existing: Iterable[Person],
    exclude_id: Optional[str] = None,
) -> None:
    """Raise ``PersonConflictError`` if another record already uses the name pair.

    The record identified by ``exclude_id`` is skipped so an update may keep its own names.
    """

    candidate = name_key(lastname, firstname)
    for person in existing:
        if exclude_id is not None and person.id == exclude_id:
            continue
        if name_key(person.lastname, person.firstname) == candidate:
            raise PersonConflictError(lastname=lastname, firstname=firstname)
