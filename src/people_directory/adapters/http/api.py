"""FastAPI adapter exposing the person directory under ``/people``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from people_directory.application.commands import CreatePersonCommand, UpdatePersonCommand
from people_directory.application.services import PersonDirectoryService
from people_directory.domain.errors import (
    DirectoryError,
    PersonConflictError,
    PersonNotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    PersonNotFoundError: 404,
    PersonConflictError: 409,
    ValidationFailedError: 422,
    StoreUnavailableError: 503,
}


def create_router(service: PersonDirectoryService) -> APIRouter:
    router = APIRouter(prefix="/people", tags=["people"])

    @router.get("")
    async def list_people() -> Any:
        """Return all people, or 204 when there are none."""
        people = await service.list_all()
        if people is None:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return [person.to_document() for person in people]

    @router.get("/random")
    async def random_person() -> Any:
        person = await service.find_random()
        if person is None:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return person.to_document()

    @router.get("/{person_id}")
    async def get_person(person_id: str) -> Dict[str, Any]:
        person = await service.get_by_id(person_id)
        return person.to_document()

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_person(payload: Any = Body(...)) -> Dict[str, Any]:
        person = await service.create(CreatePersonCommand.from_payload(payload))
        return person.to_document()

    @router.put("/{person_id}")
    async def update_person(person_id: str, payload: Any = Body(...)) -> Dict[str, Any]:
        person = await service.update(person_id, UpdatePersonCommand.from_payload(payload))
        return person.to_document()

    @router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_person(person_id: str) -> Response:
        await service.delete(person_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


async def _directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    content: Dict[str, Any] = {"detail": str(exc)}
    if isinstance(exc, ValidationFailedError):
        content["field"] = exc.field
    return JSONResponse(status_code=status_code, content=content)


def create_app(service: PersonDirectoryService, lifespan: Optional[Any] = None) -> FastAPI:
    app = FastAPI(title="People Directory", lifespan=lifespan)
    app.include_router(create_router(service))
    app.add_exception_handler(DirectoryError, _directory_error_handler)
    return app
