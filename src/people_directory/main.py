from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

import uvicorn
from fastapi import FastAPI

from people_directory.adapters.http.api import create_app
from people_directory.application.services import PersonDirectoryService
from people_directory.domain.models import Person
from people_directory.infrastructure.persistence.in_memory import InMemoryPersonStore
from people_directory.infrastructure.persistence.mongo import MongoPersonStore
from people_directory.infrastructure.seed.file import load_people

STORE_BACKENDS = ("memory", "mongo")
REQUIRED_MONGO_ENV_VARS = ["MONGODB_URL"]


def _missing_env(vars_to_check: List[str]) -> List[str]:
    return [name for name in vars_to_check if not os.environ.get(name)]


def build_app() -> FastAPI:
    """
    Wire the store, the directory service and the HTTP app from the environment.

    Environment variables:
    - PEOPLE_STORE         memory (default) or mongo
    - MONGODB_URL          (required for mongo)
    - MONGODB_DATABASE     (default: people)
    - MONGODB_COLLECTION   (default: people)
    - PEOPLE_SEED_FILE     optional JSON list of initial people
    """

    backend = os.environ.get("PEOPLE_STORE", "memory").lower()
    if backend not in STORE_BACKENDS:
        raise SystemExit(f"PEOPLE_STORE must be one of {', '.join(STORE_BACKENDS)}, got '{backend}'")

    seed_file = os.environ.get("PEOPLE_SEED_FILE")
    people: List[Person] = load_people(seed_file) if seed_file else []

    if backend == "memory":
        service = PersonDirectoryService(store=InMemoryPersonStore(people))
        return create_app(service)

    missing = _missing_env(REQUIRED_MONGO_ENV_VARS)
    if missing:
        joined = ", ".join(missing)
        raise SystemExit(f"Missing required environment variables: {joined}")

    store = MongoPersonStore.from_url(
        os.environ["MONGODB_URL"],
        database=os.environ.get("MONGODB_DATABASE", "people"),
        collection=os.environ.get("MONGODB_COLLECTION", "people"),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await store.ensure_indexes()
        await store.seed(people)
        yield

    return create_app(PersonDirectoryService(store=store), lifespan=lifespan)


def main() -> None:
    """
    Serve the people directory over HTTP.

    Optional:
    - HOST       (default: 0.0.0.0)
    - PORT       (default: 3000)
    - LOG_LEVEL  (default: INFO)
    """

    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    app = build_app()
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3000"))
    logging.info("Starting people directory on %s:%s (store=%s)", host, port, os.environ.get("PEOPLE_STORE", "memory"))
    uvicorn.run(app, host=host, port=port, log_level=level.lower())


if __name__ == "__main__":
    main()
