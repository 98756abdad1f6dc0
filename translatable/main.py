from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from translatable.config import TranslatableSettings
from translatable.plugin import TranslatablePlugin

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[TranslatableSettings] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """Standalone host for the plugin: one FastAPI app, routes and error handlers."""
    settings = settings or TranslatableSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    plugin = TranslatablePlugin(settings)
    plugin.initialize(engine)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        plugin.shutdown()
        logger.info("Plugin %s shut down", plugin.name)

    app = FastAPI(title="Translatable API", version=plugin.version, lifespan=lifespan)
    app.state.translatable_plugin = plugin
    plugin.register_routes(app)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
