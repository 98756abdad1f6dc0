from __future__ import annotations

import html
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from translatable.config import TranslatableSettings
from translatable.errors import InvalidInputError

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        return None


def _sanitize_content(content: str, config: TranslatableSettings) -> str:
    text = (content or "").strip()
    if not text:
        raise InvalidInputError("content cannot be empty")
    if len(text.encode("utf-8")) > config.max_content_length:
        raise InvalidInputError("content exceeds maximum length")
    return html.escape(text, quote=True)


class Translation(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    id: uuid.UUID = Field(..., description="Server generated primary key")
    user_id: Optional[uuid.UUID] = Field(
        None, description="Owner of the record, None when created anonymously"
    )
    translatable_id: uuid.UUID = Field(..., description="Id of the host resource")
    translatable: str = Field(..., description="Host resource type, e.g. 'posts'")
    locale: Optional[str] = Field(None, description="Language code of the content")
    content: str = Field(..., description="HTML-escaped content")
    created_at: datetime
    updated_at: Optional[datetime] = None


class CreateTranslationRequest(BaseModel):
    model_config = _CAMEL

    translatable_id: str = ""
    translatable: str = ""
    locale: Optional[str] = None
    content: str = ""

    def validate_for(self, config: TranslatableSettings) -> None:
        """Validate and sanitise in place; raises ``InvalidInputError``."""
        if _parse_uuid(self.translatable_id) is None:
            raise InvalidInputError("translatable_id must be a valid UUID")

        if not config.is_allowed_type(self.translatable):
            raise InvalidInputError("translatable type is not allowed")

        if config.locale_aware:
            if self.locale is None or self.locale == "":
                self.locale = config.default_locale
            elif not config.is_supported_locale(self.locale):
                raise InvalidInputError("locale is not supported")
        else:
            self.locale = None

        self.content = _sanitize_content(self.content, config)

    def to_translation(self, user_id: Optional[uuid.UUID]) -> Translation:
        translatable_id = _parse_uuid(self.translatable_id)
        if translatable_id is None:
            raise InvalidInputError("translatable_id must be a valid UUID")
        return Translation(
            id=uuid.uuid4(),
            user_id=user_id,
            translatable_id=translatable_id,
            translatable=self.translatable,
            locale=self.locale,
            content=self.content,
            created_at=datetime.now(timezone.utc),
        )


class UpdateTranslationRequest(BaseModel):
    model_config = _CAMEL

    locale: Optional[str] = None
    content: str = ""

    def validate_for(self, config: TranslatableSettings) -> None:
        if config.locale_aware:
            # None keeps the stored locale.
            if self.locale == "":
                self.locale = None
            if self.locale is not None and not config.is_supported_locale(self.locale):
                raise InvalidInputError("locale is not supported")
        else:
            self.locale = None

        self.content = _sanitize_content(self.content, config)


class QueryParams(BaseModel):
    translatable_id: Optional[uuid.UUID] = None
    translatable: Optional[str] = None
    locale: Optional[str] = None
    user_id: Optional[uuid.UUID] = None
    limit: int = 0
    offset: int = 0

    def validate_for(self, config: TranslatableSettings) -> None:
        if not self.limit:
            self.limit = config.pagination_limit
        if self.limit < 1 or self.limit > config.max_pagination_limit:
            raise InvalidInputError(
                f"limit must be between 1 and {config.max_pagination_limit}"
            )
        if self.offset < 0:
            raise InvalidInputError("offset must be non-negative")
        if not config.locale_aware:
            self.locale = None
        elif self.locale is not None and not config.is_supported_locale(self.locale):
            raise InvalidInputError("locale is not supported")


class TranslationPage(BaseModel):
    data: List[Translation]
    total: int
    limit: int
    offset: int


class LocaleInfo(BaseModel):
    model_config = _CAMEL

    locale: str
    is_default: bool
