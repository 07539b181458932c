from __future__ import annotations


class DirectoryError(Exception):
    """Base class for the failures a directory operation can end with."""


class PersonNotFoundError(DirectoryError):
    def __init__(self, person_id: str) -> None:
        self.person_id = person_id
        super().__init__(f"People with id '{person_id}' not found")


class PersonConflictError(DirectoryError):
    def __init__(self, lastname: str, firstname: str) -> None:
        self.lastname = lastname
        self.firstname = firstname
        super().__init__(
            f"People with lastname '{lastname}' and firstname '{firstname}' already exists"
        )


class ValidationFailedError(DirectoryError):
    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for '{field}': {reason}")


class StoreUnavailableError(DirectoryError):
    """The record store failed for reasons unrelated to the directory invariants."""
