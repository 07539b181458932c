"""Input shaping for person records: birth date parsing and default fields."""

from __future__ import annotations

from typing import Any, Dict, Mapping
from uuid import uuid4

from people_directory.application.commands import CreatePersonCommand, UpdatePersonCommand
from people_directory.domain.models import Person, PersonDraft
from people_directory.domain.time import parse_birth_date

# Applied whenever a new record arrives without a birth date.
DEFAULT_BIRTH_DATE = "06/05/1985"
DEFAULT_PHOTO = "https://randomuser.me/api/portraits/lego/6.jpg"

# Identifiers belong to the store and are never taken from input.
_RESERVED_FIELDS = frozenset({"id", "_id"})


def prepare_for_create(command: CreatePersonCommand) -> PersonDraft:
    """Build the draft handed to the store. Raises ``InvalidDate`` for a malformed birth date."""

    extra = {key: value for key, value in (command.model_extra or {}).items() if key not in _RESERVED_FIELDS}
    return PersonDraft.model_validate(
        {
            **extra,
            "firstname": command.firstname,
            "lastname": command.lastname,
            "birthDate": parse_birth_date(command.birth_date or DEFAULT_BIRTH_DATE),
            "photo": command.photo or DEFAULT_PHOTO,
        }
    )


def prepare_for_update(command: UpdatePersonCommand) -> Dict[str, Any]:
    """Return only the supplied fields, keyed by wire name, with the birth date as a timestamp."""

    fields = command.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    fields.update({key: value for key, value in (command.model_extra or {}).items() if value is not None})
    for key in _RESERVED_FIELDS:
        fields.pop(key, None)
    # An empty photo means "not supplied", as on create.
    if not fields.get("photo", True):
        del fields["photo"]
    if "birthDate" in fields:
        fields["birthDate"] = parse_birth_date(fields["birthDate"])
    return fields


def prepare_seed_record(raw: Mapping[str, Any]) -> Person:
    """Normalize one record of initial data.

    Seed files carry textual ``dd/mm/yyyy`` birth dates; integers are taken as
    timestamps already. Records without an ``id`` get a generated one.
    """

    document = {key: value for key, value in raw.items() if key != "_id"}
    birth_date = document.get("birthDate")
    if birth_date is None:
        document["birthDate"] = parse_birth_date(DEFAULT_BIRTH_DATE)
    elif isinstance(birth_date, str):
        document["birthDate"] = parse_birth_date(birth_date)
    if not document.get("photo"):
        document["photo"] = DEFAULT_PHOTO
    document["id"] = str(document.get("id") or uuid4().hex)
    return Person.model_validate(document)
