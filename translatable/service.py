from __future__ import annotations

from typing import List

from translatable.config import TranslatableSettings
from translatable.models import LocaleInfo


class TranslationService:
    def __init__(self, config: TranslatableSettings):
        self.config = config

    def get_locales(self) -> List[LocaleInfo]:
        """Supported locales in configured order, flagging the default one."""
        if not self.config.locale_aware:
            return []
        return [
            LocaleInfo(locale=code, is_default=code == self.config.default_locale)
            for code in self.config.supported_locales
        ]
