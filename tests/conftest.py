from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from translatable.config import TranslatableSettings
from translatable.database import create_session_factory
from translatable.main import create_app
from translatable.tables import metadata


def make_settings(**overrides) -> TranslatableSettings:
    values = dict(
        _env_file=None,
        allowed_types=["posts", "articles"],
        supported_locales=["en", "fr"],
        default_locale="en",
        pagination_limit=20,
        max_pagination_limit=100,
        max_content_length=10240,
        database_dsn="sqlite://",
    )
    values.update(overrides)
    return TranslatableSettings(**values)


@pytest.fixture()
def settings() -> TranslatableSettings:
    return make_settings().ensure_valid()


@pytest.fixture()
def engine() -> Iterator[Engine]:
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    factory = create_session_factory(engine)
    with factory() as sess:
        yield sess


@pytest.fixture()
def app(settings: TranslatableSettings, engine: Engine):
    application = create_app(settings, engine=engine)

    # Stands in for the host auth layer.
    @application.middleware("http")
    async def fake_auth(request, call_next):
        user_id = request.headers.get("X-User-Id")
        if user_id:
            request.state.user_id = user_id
        return await call_next(request)

    return application


@pytest.fixture()
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def settings_factory():
    return make_settings
