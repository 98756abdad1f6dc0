"""Multi-language content records attached to arbitrary host resources."""

from .config import TranslatableSettings, default_settings
from .errors import (
    ConfigError,
    InvalidInputError,
    PersistenceError,
    TranslatableError,
    TranslationNotFoundError,
    TranslationNotPermittedError,
)
from .models import (
    CreateTranslationRequest,
    LocaleInfo,
    QueryParams,
    Translation,
    TranslationPage,
    UpdateTranslationRequest,
)
from .plugin import TranslatablePlugin
from .repository import TranslationRepository

__all__ = [
    "TranslatableSettings",
    "default_settings",
    "TranslatableError",
    "ConfigError",
    "InvalidInputError",
    "TranslationNotFoundError",
    "TranslationNotPermittedError",
    "PersistenceError",
    "Translation",
    "CreateTranslationRequest",
    "UpdateTranslationRequest",
    "QueryParams",
    "TranslationPage",
    "LocaleInfo",
    "TranslationRepository",
    "TranslatablePlugin",
]
