from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, List, Mapping, Optional
from uuid import uuid4

from people_directory.domain.models import Person, PersonDraft
from people_directory.domain.uniqueness import name_key
from people_directory.ports.persistence import DuplicateKeyError, PersonStore

logger = logging.getLogger(__name__)


class InMemoryPersonStore(PersonStore):
    """Ordered in-process store.

    Writes are serialized by a lock and reject duplicate name pairs the way a
    unique index would. Reads never await, so they always see a whole snapshot.
    """

    def __init__(self, people: Iterable[Person] = ()) -> None:
        self._people: List[Person] = []
        self._lock = asyncio.Lock()
        for person in people:
            if self._index_of(person.id) is not None:
                raise ValueError(f"Duplicate person id '{person.id}' in initial data")
            try:
                self._ensure_unique(person.lastname, person.firstname)
            except DuplicateKeyError as e:
                raise ValueError(f"Duplicate name pair for person '{person.id}' in initial data") from e
            self._people.append(person.model_copy(deep=True))

    async def list_all(self) -> List[Person]:
        return [person.model_copy(deep=True) for person in self._people]

    async def get_by_id(self, person_id: str) -> Optional[Person]:
        index = self._index_of(person_id)
        return None if index is None else self._people[index].model_copy(deep=True)

    async def insert(self, draft: PersonDraft) -> Person:
        async with self._lock:
            self._ensure_unique(draft.lastname, draft.firstname)
            person = Person.model_validate({**draft.to_document(), "id": uuid4().hex})
            self._people.append(person)
            logger.info("Inserted person %s", person.id)
            return person.model_copy(deep=True)

    async def update_by_id(self, person_id: str, fields: Mapping[str, Any]) -> Optional[Person]:
        async with self._lock:
            index = self._index_of(person_id)
            if index is None:
                return None
            updated = self._people[index].merged(dict(fields))
            self._ensure_unique(updated.lastname, updated.firstname, exclude_id=person_id)
            self._people[index] = updated
            logger.info("Updated person %s", person_id)
            return updated.model_copy(deep=True)

    async def remove_by_id(self, person_id: str) -> bool:
        async with self._lock:
            index = self._index_of(person_id)
            if index is None:
                return False
            del self._people[index]
            logger.info("Removed person %s", person_id)
            return True

    def _index_of(self, person_id: str) -> Optional[int]:
        for index, person in enumerate(self._people):
            if person.id == person_id:
                return index
        return None

    def _ensure_unique(self, lastname: str, firstname: str, exclude_id: Optional[str] = None) -> None:
        key = name_key(lastname, firstname)
        for person in self._people:
            if person.id != exclude_id and name_key(person.lastname, person.firstname) == key:
                raise DuplicateKeyError(f"Duplicate name pair ({lastname}, {firstname})")
