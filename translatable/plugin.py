from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from fastapi import APIRouter, FastAPI
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from translatable.config import TranslatableSettings
from translatable.database import create_db_engine, create_session_factory
from translatable.errors import ConfigError
from translatable.handlers import (
    create_router,
    install_exception_handlers,
    register_translation_routes,
)
from translatable.tables import metadata, translations_table

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations" / "versions"


class TranslatablePlugin:
    name = "translatable"
    version = "1.0.0"
    # The translations table references users(id); apply the host's users migration first.
    dependencies: Tuple[str, ...] = ("users",)

    def __init__(self, settings: TranslatableSettings):
        try:
            settings.ensure_valid()
        except ConfigError as exc:
            raise ConfigError(f"invalid config: {exc.message}") from exc
        self.settings = settings
        self._engine: Optional[Engine] = None
        self._owns_engine = False
        self._session_factory: Optional[sessionmaker] = None

    @property
    def config(self) -> TranslatableSettings:
        return self.settings

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("TranslatablePlugin.initialize() must be called first")
        return self._session_factory

    def initialize(self, engine: Optional[Engine] = None) -> None:
        if engine is None:
            engine = create_db_engine(self.settings)
            self._owns_engine = True
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        logger.info(
            "Plugin %s %s initialized (locale_aware=%s, allowed_types=%s)",
            self.name,
            self.version,
            self.settings.locale_aware,
            ",".join(self.settings.allowed_types),
        )

    def register_routes(self, app: FastAPI, prefix: Optional[str] = None) -> None:
        route_prefix = self.settings.route_prefix if prefix is None else prefix
        app.include_router(
            create_router(self.settings, self.session_factory, prefix=route_prefix)
        )
        install_exception_handlers(app)

    def register_routes_with_custom_router(self, router: APIRouter) -> APIRouter:
        """Register the endpoints on a router owned by the host.

        The host must also install the error handlers, see
        ``translatable.handlers.install_exception_handlers``.
        """
        return register_translation_routes(router, self.settings, self.session_factory)

    def migration_location(self) -> str:
        """Directory to add to the host's alembic ``version_locations``."""
        return str(MIGRATIONS_DIR)

    def bootstrap_schema(self) -> None:
        if self._engine is None:
            raise RuntimeError("TranslatablePlugin.initialize() must be called first")
        metadata.create_all(bind=self._engine, tables=[translations_table], checkfirst=True)

    def shutdown(self) -> None:
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None
