from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Tuple

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from translatable.errors import (
    PersistenceError,
    TranslationNotFoundError,
    TranslationNotPermittedError,
)
from translatable.models import QueryParams, Translation
from translatable.tables import translations_table

logger = logging.getLogger(__name__)

_COLUMNS = (
    translations_table.c.id,
    translations_table.c.user_id,
    translations_table.c.translatable_id,
    translations_table.c.translatable,
    translations_table.c.locale,
    translations_table.c.content,
    translations_table.c.updated_at,
    translations_table.c.created_at,
)


class TranslationsTableAction(str, Enum):
    CREATE = "create"
    GET_BY_ID = "get_by_id"
    QUERY = "query"
    UPDATE = "update"
    DELETE = "delete"


def filter_pairs(params: QueryParams) -> List[Tuple[Any, Any]]:
    """Ordered (column, value) pairs for the filters that are set.

    Order is fixed: translatable_id, translatable, locale, user_id.
    """
    candidates = (
        (translations_table.c.translatable_id, params.translatable_id),
        (translations_table.c.translatable, params.translatable),
        (translations_table.c.locale, params.locale),
        (translations_table.c.user_id, params.user_id),
    )
    return [(column, value) for column, value in candidates if value is not None]


def build_predicates(params: QueryParams) -> List[ColumnElement[bool]]:
    return [column == value for column, value in filter_pairs(params)]


def _row_to_translation(row: Any) -> Translation:
    return Translation(
        id=row["id"],
        user_id=row["user_id"],
        translatable_id=row["translatable_id"],
        translatable=row["translatable"],
        locale=row["locale"],
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class TranslationRepository:
    """Persistence for the ``translations`` table over one request-scoped session."""

    def __init__(self, session: Session):
        self.session = session

    def _log(self, action: TranslationsTableAction, **fields: Any) -> None:
        logger.debug("translations.%s %s", action.value, fields)

    def _commit(self, action: TranslationsTableAction) -> None:
        # Writes commit before the handler builds its response.
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(
                f"failed to {action.value} translation",
                f"Failed to {action.value} translation",
            ) from exc

    def create(self, translation: Translation) -> None:
        stmt = insert(translations_table).values(
            id=translation.id,
            user_id=translation.user_id,
            translatable_id=translation.translatable_id,
            translatable=translation.translatable,
            locale=translation.locale,
            content=translation.content,
            created_at=translation.created_at,
        )
        try:
            self.session.execute(stmt)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(
                "failed to create translation", "Failed to create translation"
            ) from exc
        self._commit(TranslationsTableAction.CREATE)
        self._log(
            TranslationsTableAction.CREATE,
            id=str(translation.id),
            translatable=translation.translatable,
        )

    def get_by_id(self, translation_id: uuid.UUID) -> Translation:
        stmt = select(*_COLUMNS).where(translations_table.c.id == translation_id)
        try:
            row = self.session.execute(stmt).mappings().first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "failed to get translation", "Failed to get translation"
            ) from exc
        if row is None:
            raise TranslationNotFoundError()
        self._log(TranslationsTableAction.GET_BY_ID, id=str(translation_id))
        return _row_to_translation(row)

    def query(self, params: QueryParams) -> Tuple[List[Translation], int]:
        """Return one page of matches plus the total match count.

        The count and the page are two statements; a concurrent write between
        them can make ``total`` disagree with the page.
        """
        predicates = build_predicates(params)

        count_stmt = select(func.count()).select_from(translations_table)
        page_stmt = select(*_COLUMNS)
        if predicates:
            count_stmt = count_stmt.where(and_(*predicates))
            page_stmt = page_stmt.where(and_(*predicates))
        page_stmt = (
            page_stmt.order_by(translations_table.c.created_at.desc())
            .limit(params.limit)
            .offset(params.offset)
        )

        try:
            total = self.session.execute(count_stmt).scalar_one()
            rows = self.session.execute(page_stmt).mappings().all()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "failed to query translations", "Failed to query translations"
            ) from exc

        self._log(
            TranslationsTableAction.QUERY,
            filters=len(predicates),
            total=total,
            count=len(rows),
        )
        return [_row_to_translation(row) for row in rows], int(total)

    def update(
        self,
        translation_id: uuid.UUID,
        content: str,
        locale: Optional[str] = None,
        owner_id: Optional[uuid.UUID] = None,
    ) -> None:
        values: dict[str, Any] = {
            "content": content,
            "updated_at": datetime.now(timezone.utc),
        }
        if locale is not None:
            values["locale"] = locale

        conditions = [translations_table.c.id == translation_id]
        if owner_id is not None:
            conditions.append(translations_table.c.user_id == owner_id)

        stmt = update(translations_table).where(and_(*conditions)).values(**values)
        try:
            result = self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "failed to update translation", "Failed to update translation"
            ) from exc

        if result.rowcount == 0:
            if owner_id is not None:
                raise TranslationNotPermittedError("update")
            raise TranslationNotFoundError()
        self._commit(TranslationsTableAction.UPDATE)
        self._log(
            TranslationsTableAction.UPDATE,
            id=str(translation_id),
            scoped=owner_id is not None,
        )

    def delete(
        self,
        translation_id: uuid.UUID,
        owner_id: Optional[uuid.UUID] = None,
    ) -> None:
        conditions = [translations_table.c.id == translation_id]
        if owner_id is not None:
            conditions.append(translations_table.c.user_id == owner_id)

        stmt = delete(translations_table).where(and_(*conditions))
        try:
            result = self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "failed to delete translation", "Failed to delete translation"
            ) from exc

        if result.rowcount == 0:
            if owner_id is not None:
                raise TranslationNotPermittedError("delete")
            raise TranslationNotFoundError()
        self._commit(TranslationsTableAction.DELETE)
        self._log(
            TranslationsTableAction.DELETE,
            id=str(translation_id),
            scoped=owner_id is not None,
        )
