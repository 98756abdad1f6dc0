from __future__ import annotations

import logging
import uuid
from typing import Any, Iterator, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session, sessionmaker

from translatable.config import TranslatableSettings
from translatable.database import session_scope
from translatable.errors import (
    InvalidInputError,
    PersistenceError,
    TranslationNotFoundError,
)
from translatable.models import (
    CreateTranslationRequest,
    LocaleInfo,
    QueryParams,
    Translation,
    TranslationPage,
    UpdateTranslationRequest,
)
from translatable.repository import TranslationRepository
from translatable.service import TranslationService

logger = logging.getLogger(__name__)

USER_ID_STATE_KEY = "user_id"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidInputError)
    async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(TranslationNotFoundError)
    async def _not_found(request: Request, exc: TranslationNotFoundError) -> JSONResponse:
        return error_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(PersistenceError)
    async def _persistence(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.public_message)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s failed", request.method, request.url.path, exc_info=exc)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )


def get_current_user_id(request: Request) -> Optional[uuid.UUID]:
    """Caller id placed on ``request.state`` by the host auth layer, if any."""
    value = getattr(request.state, USER_ID_STATE_KEY, None)
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, str):
        try:
            return uuid.UUID(value)
        except ValueError:
            return None
    return None


def path_translation_id(translation_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(translation_id)
    except ValueError:
        raise InvalidInputError("Invalid ID") from None


def _query_value(request: Request, *names: str) -> Optional[str]:
    for name in names:
        value = request.query_params.get(name)
        if value:
            return value
    return None


def _query_uuid(request: Request, camel: str, snake: str) -> Optional[uuid.UUID]:
    raw = _query_value(request, camel, snake)
    if raw is None:
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise InvalidInputError(f"Invalid {snake}") from None


def _query_int(request: Request, name: str) -> int:
    raw = _query_value(request, name)
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"{name} must be an integer") from None


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        data = await request.json()
    except ValueError:
        raise InvalidInputError("Invalid request body") from None
    if not isinstance(data, dict):
        raise InvalidInputError("Invalid request body")
    return data


async def parse_create_request(request: Request) -> CreateTranslationRequest:
    data = await _read_json_object(request)
    try:
        return CreateTranslationRequest.model_validate(data)
    except ValidationError:
        raise InvalidInputError("Invalid request body") from None


async def parse_update_request(
    request: Request,
    _: uuid.UUID = Depends(path_translation_id),
) -> UpdateTranslationRequest:
    """Body of a PUT; the path id is checked before the body is read."""
    data = await _read_json_object(request)
    try:
        return UpdateTranslationRequest.model_validate(data)
    except ValidationError:
        raise InvalidInputError("Invalid request body") from None


def register_translation_routes(
    router: APIRouter,
    config: TranslatableSettings,
    session_factory: sessionmaker,
) -> APIRouter:
    """Attach the translation endpoints and ``/locales`` to ``router``."""
    service = TranslationService(config)

    def db_session_dependency() -> Iterator[Session]:
        with session_scope(session_factory) as session:
            yield session

    def repository_dependency(
        session: Session = Depends(db_session_dependency),
    ) -> TranslationRepository:
        return TranslationRepository(session)

    @router.post(
        "/translations",
        response_model=Translation,
        status_code=status.HTTP_201_CREATED,
    )
    def create_translation(
        payload: CreateTranslationRequest = Depends(parse_create_request),
        user_id: Optional[uuid.UUID] = Depends(get_current_user_id),
        repo: TranslationRepository = Depends(repository_dependency),
    ) -> Translation:
        payload.validate_for(config)
        translation = payload.to_translation(user_id)
        repo.create(translation)
        logger.info(
            "Created translation id=%s translatable=%s locale=%s",
            translation.id,
            translation.translatable,
            translation.locale,
        )
        return translation

    @router.get("/translations/{translation_id}", response_model=Translation)
    def get_translation(
        parsed_id: uuid.UUID = Depends(path_translation_id),
        repo: TranslationRepository = Depends(repository_dependency),
    ) -> Translation:
        return repo.get_by_id(parsed_id)

    @router.get("/translations", response_model=TranslationPage)
    def query_translations(
        request: Request,
        repo: TranslationRepository = Depends(repository_dependency),
    ) -> TranslationPage:
        params = QueryParams(
            translatable_id=_query_uuid(request, "translatableId", "translatable_id"),
            translatable=_query_value(request, "translatable"),
            locale=_query_value(request, "locale"),
            user_id=_query_uuid(request, "userId", "user_id"),
            limit=_query_int(request, "limit"),
            offset=_query_int(request, "offset"),
        )
        params.validate_for(config)
        items, total = repo.query(params)
        return TranslationPage(
            data=items,
            total=total,
            limit=params.limit,
            offset=params.offset,
        )

    @router.put("/translations/{translation_id}", response_model=Translation)
    def update_translation(
        parsed_id: uuid.UUID = Depends(path_translation_id),
        payload: UpdateTranslationRequest = Depends(parse_update_request),
        user_id: Optional[uuid.UUID] = Depends(get_current_user_id),
        repo: TranslationRepository = Depends(repository_dependency),
    ) -> Translation:
        payload.validate_for(config)
        repo.update(parsed_id, payload.content, payload.locale, user_id)
        return repo.get_by_id(parsed_id)

    @router.delete("/translations/{translation_id}")
    def delete_translation(
        parsed_id: uuid.UUID = Depends(path_translation_id),
        user_id: Optional[uuid.UUID] = Depends(get_current_user_id),
        repo: TranslationRepository = Depends(repository_dependency),
    ) -> dict[str, str]:
        repo.delete(parsed_id, user_id)
        return {"message": "Translation deleted successfully"}

    @router.get("/locales", response_model=List[LocaleInfo])
    def list_locales() -> List[LocaleInfo]:
        return service.get_locales()

    return router


def create_router(
    config: TranslatableSettings,
    session_factory: sessionmaker,
    prefix: str = "",
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["translations"])
    return register_translation_routes(router, config, session_factory)
