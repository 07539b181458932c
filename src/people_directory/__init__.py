from .application.services import PersonDirectoryService
from .adapters.http.api import create_app
from .infrastructure.persistence.in_memory import InMemoryPersonStore
from .infrastructure.persistence.mongo import MongoPersonStore
from .infrastructure.seed.file import load_people

__all__ = [
    "PersonDirectoryService",
    "create_app",
    "InMemoryPersonStore",
    "MongoPersonStore",
    "load_people",
]
