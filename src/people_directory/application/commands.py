from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from people_directory.domain.errors import ValidationFailedError

CommandT = TypeVar("CommandT", bound=BaseModel)


class CreatePersonCommand(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    birth_date: Optional[str] = Field(None, alias="birthDate", description="Birth date as dd/mm/yyyy")
    photo: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CreatePersonCommand":
        return _validate(cls, payload)


class UpdatePersonCommand(BaseModel):
    """Partial update; only the fields present in the payload are applied."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    firstname: Optional[str] = Field(None, min_length=1)
    lastname: Optional[str] = Field(None, min_length=1)
    birth_date: Optional[str] = Field(None, alias="birthDate", description="Birth date as dd/mm/yyyy")
    photo: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UpdatePersonCommand":
        return _validate(cls, payload)


def _validate(model: Type[CommandT], payload: Mapping[str, Any]) -> CommandT:
    if not isinstance(payload, Mapping):
        raise ValidationFailedError(field="body", reason="expected a JSON object")
    try:
        command = model.model_validate(dict(payload))
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "body"
        raise ValidationFailedError(field=field, reason=error["msg"]) from e
    # Document stores read these as paths and operators, not field names.
    for key in command.model_extra or {}:
        if "." in key or key.startswith("$"):
            raise ValidationFailedError(field=key, reason="field names may not contain '.' or start with '$'")
    return command
