from typing import Any, List, Mapping, Optional

from people_directory.domain.models import Person, PersonDraft


class DuplicateKeyError(Exception):
    """Raised by a store whose own uniqueness constraint rejected a write."""


class PersonStore:
    """Abstract storage for person records.

    Failures unrelated to the directory invariants should surface as
    ``StoreUnavailableError``.
    """

    async def list_all(self) -> List[Person]:
        raise NotImplementedError

    async def get_by_id(self, person_id: str) -> Optional[Person]:
        raise NotImplementedError

    async def insert(self, draft: PersonDraft) -> Person:
        raise NotImplementedError

    async def update_by_id(self, person_id: str, fields: Mapping[str, Any]) -> Optional[Person]:
        raise NotImplementedError

    async def remove_by_id(self, person_id: str) -> bool:
        raise NotImplementedError
