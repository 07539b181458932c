from people_directory.infrastructure.persistence.in_memory import InMemoryPersonStore
from people_directory.infrastructure.persistence.mongo import MongoPersonStore

__all__ = ["InMemoryPersonStore", "MongoPersonStore"]
