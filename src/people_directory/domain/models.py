from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class PersonDraft(BaseModel):
    """A normalized person that has not been given an identifier by a store yet.

    Descriptive fields beyond the ones declared here (email, phone, address, ...)
    are carried through untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    birth_date: int = Field(..., alias="birthDate", description="Epoch timestamp in milliseconds")
    photo: str

    def to_document(self) -> Dict[str, Any]:
        """Wire/storage representation, using ``birthDate`` and keeping extra fields."""
        return self.model_dump(by_alias=True)


class Person(PersonDraft):
    """A stored person record."""

    id: str

    def name_pair(self) -> tuple[str, str]:
        return self.lastname, self.firstname

    def merged(self, fields: Dict[str, Any]) -> "Person":
        """Return a copy with ``fields`` (wire names) applied; the identifier never changes."""
        document = self.to_document()
        document.update(fields)
        document["id"] = self.id
        return Person.model_validate(document)
