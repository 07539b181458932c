from __future__ import annotations

import logging
import math
import random
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

from people_directory.application.commands import CreatePersonCommand, UpdatePersonCommand
from people_directory.application.normalizer import prepare_for_create, prepare_for_update
from people_directory.domain.errors import (
    DirectoryError,
    PersonConflictError,
    PersonNotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)
from people_directory.domain.models import Person
from people_directory.domain.time import InvalidDate
from people_directory.domain.uniqueness import assert_no_conflict
from people_directory.ports.persistence import DuplicateKeyError, PersonStore

CommandT = TypeVar("CommandT")
PreparedT = TypeVar("PreparedT")


class PersonDirectoryService:
    """Application service exposing the person directory operations.

    Every operation either returns its value or raises one ``DirectoryError``
    subclass. The name-pair check always runs before the store is mutated.
    """

    def __init__(self, store: PersonStore, random_source: Callable[[], float] = random.random) -> None:
        self.store = store
        # Must return floats in [0, 1).
        self.random_source = random_source
        self.logger = logging.getLogger(__name__)

    async def list_all(self) -> Optional[List[Person]]:
        """Return every person, or ``None`` when the directory is empty."""
        people = await self._snapshot()
        return people or None

    async def find_random(self) -> Optional[Person]:
        people = await self._snapshot()
        if not people:
            return None
        # Same snapshot for the size and the pick; clamped for sources that return 1.0.
        index = min(math.floor(self.random_source() * len(people)), len(people) - 1)
        return people[index]

    async def get_by_id(self, person_id: str) -> Person:
        with self._store_errors():
            person = await self.store.get_by_id(person_id)
        if person is None:
            raise PersonNotFoundError(person_id)
        return person

    async def create(self, command: CreatePersonCommand) -> Person:
        existing = await self._snapshot()
        self._check_names(command.lastname, command.firstname, existing)
        draft = self._normalize(prepare_for_create, command)
        with self._store_errors(command.lastname, command.firstname):
            return await self.store.insert(draft)

    async def update(self, person_id: str, command: UpdatePersonCommand) -> Person:
        existing = await self._snapshot()
        target = next((person for person in existing if person.id == person_id), None)
        if target is None:
            raise PersonNotFoundError(person_id)

        lastname = command.lastname or target.lastname
        firstname = command.firstname or target.firstname
        if command.lastname is not None or command.firstname is not None:
            self._check_names(lastname, firstname, existing, exclude_id=person_id)

        fields = self._normalize(prepare_for_update, command)
        with self._store_errors(lastname, firstname):
            updated = await self.store.update_by_id(person_id, fields)
        if updated is None:
            raise PersonNotFoundError(person_id)
        return updated

    async def delete(self, person_id: str) -> None:
        with self._store_errors():
            removed = await self.store.remove_by_id(person_id)
        if not removed:
            raise PersonNotFoundError(person_id)

    # Helpers -----------------------------------------------------------------

    async def _snapshot(self) -> List[Person]:
        with self._store_errors():
            return list(await self.store.list_all())

    def _check_names(
        self,
        lastname: str,
        firstname: str,
        existing: Sequence[Person],
        exclude_id: Optional[str] = None,
    ) -> None:
        try:
            assert_no_conflict(lastname, firstname, existing, exclude_id=exclude_id)
        except PersonConflictError:
            self.logger.debug("Rejected duplicate name pair (%s, %s)", lastname, firstname)
            raise

    @staticmethod
    def _normalize(prepare: Callable[[CommandT], PreparedT], command: CommandT) -> PreparedT:
        try:
            return prepare(command)
        except InvalidDate as e:
            raise ValidationFailedError(field="birthDate", reason=str(e)) from e

    @contextmanager
    def _store_errors(self, lastname: Optional[str] = None, firstname: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as e:
            self.logger.debug("Store rejected duplicate name pair (%s, %s)", lastname, firstname)
            raise PersonConflictError(lastname=lastname or "", firstname=firstname or "") from e
        except DirectoryError:
            raise
        except Exception as e:
            raise StoreUnavailableError(f"Record store failed: {e}") from e
