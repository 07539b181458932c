from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument, errors
from pymongo.collation import Collation

from people_directory.domain.errors import StoreUnavailableError
from people_directory.domain.models import Person, PersonDraft
from people_directory.ports.persistence import DuplicateKeyError, PersonStore

logger = logging.getLogger(__name__)

NAME_INDEX = "lastname_firstname_unique"
# Strength 2 compares base letters and accents but ignores case.
CASE_INSENSITIVE = Collation(locale="en", strength=2)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except errors.DuplicateKeyError as e:
        raise DuplicateKeyError(str(e)) from e
    except errors.PyMongoError as e:
        logger.error(f"MongoDB {operation} failed: {e}")
        raise StoreUnavailableError(f"MongoDB {operation} failed: {e}") from e


class MongoPersonStore(PersonStore):
    """Person store backed by a MongoDB collection through motor.

    The unique name index created by ``ensure_indexes`` is the final authority
    on duplicate name pairs; writes it rejects raise ``DuplicateKeyError``.
    """

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    @classmethod
    def from_url(cls, url: str, database: str = "people", collection: str = "people") -> "MongoPersonStore":
        client = AsyncIOMotorClient(url)
        logger.info(f"Using MongoDB collection {database}.{collection}")
        return cls(client[database][collection])

    async def ensure_indexes(self) -> None:
        with _translate_errors("create_index"):
            await self.collection.create_index(
                [("lastname", ASCENDING), ("firstname", ASCENDING)],
                name=NAME_INDEX,
                unique=True,
                collation=CASE_INSENSITIVE,
            )

    async def seed(self, people: Iterable[Person]) -> int:
        """Insert initial records when the collection is empty. Returns how many were inserted."""

        documents = [self._to_document(person) for person in people]
        with _translate_errors("seed"):
            if not documents or await self.collection.count_documents({}) > 0:
                return 0
            await self.collection.insert_many(documents)
        logger.info(f"Seeded {len(documents)} people into {self.collection.name}")
        return len(documents)

    async def list_all(self) -> List[Person]:
        with _translate_errors("find"):
            documents = await self.collection.find({}).to_list(length=None)
        return [self._to_person(document) for document in documents]

    async def get_by_id(self, person_id: str) -> Optional[Person]:
        object_id = self._object_id(person_id)
        if object_id is None:
            return None
        with _translate_errors("find_one"):
            document = await self.collection.find_one({"_id": object_id})
        return self._to_person(document) if document else None

    async def insert(self, draft: PersonDraft) -> Person:
        document = draft.to_document()
        with _translate_errors("insert_one"):
            result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(f"Inserted person {result.inserted_id}")
        return self._to_person(document)

    async def update_by_id(self, person_id: str, fields: Mapping[str, Any]) -> Optional[Person]:
        object_id = self._object_id(person_id)
        if object_id is None:
            return None
        with _translate_errors("find_one_and_update"):
            if fields:
                document = await self.collection.find_one_and_update(
                    {"_id": object_id},
                    {"$set": dict(fields)},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                document = await self.collection.find_one({"_id": object_id})
        if not document:
            return None
        logger.info(f"Updated person {person_id}")
        return self._to_person(document)

    async def remove_by_id(self, person_id: str) -> bool:
        object_id = self._object_id(person_id)
        if object_id is None:
            return False
        with _translate_errors("delete_one"):
            result = await self.collection.delete_one({"_id": object_id})
        if result.deleted_count:
            logger.info(f"Removed person {person_id}")
        return result.deleted_count > 0

    @staticmethod
    def _object_id(person_id: str) -> Optional[ObjectId]:
        # Identifiers that could never have been issued are simply absent.
        return ObjectId(person_id) if ObjectId.is_valid(person_id) else None

    @staticmethod
    def _to_person(document: Mapping[str, Any]) -> Person:
        data = {key: value for key, value in document.items() if key != "_id"}
        data["id"] = str(document["_id"])
        return Person.model_validate(data)

    @staticmethod
    def _to_document(person: Person) -> Dict[str, Any]:
        document = person.to_document()
        person_id = document.pop("id")
        if ObjectId.is_valid(person_id):
            document["_id"] = ObjectId(person_id)
        return document
