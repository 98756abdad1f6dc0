from __future__ import annotations


class TranslatableError(Exception):
    """Base class for every error raised by the plugin."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(TranslatableError):
    pass


class InvalidInputError(TranslatableError):
    """Client supplied a malformed id, body, filter or content value."""


class TranslationNotFoundError(TranslatableError):
    def __init__(self, message: str = "translation not found") -> None:
        super().__init__(message)


class TranslationNotPermittedError(TranslationNotFoundError):
    """Row matched nothing once the owner predicate was applied.

    Reported with the same HTTP status as a missing row so callers cannot
    probe for ids they do not own.
    """

    def __init__(self, action: str) -> None:
        super().__init__(
            f"translation not found or you don't have permission to {action} it"
        )
        self.action = action


class PersistenceError(TranslatableError):
    """Storage failure. The driver error is chained as ``__cause__``.

    ``public_message`` is the only text that reaches the HTTP caller.
    """

    def __init__(self, message: str, public_message: str = "Internal server error") -> None:
        super().__init__(message)
        self.public_message = public_message
