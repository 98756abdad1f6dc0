from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from translatable.config import TranslatableSettings


def _connect_args(dsn: str, timeout_seconds: float) -> Dict[str, Any]:
    # A server-side statement timeout aborts stuck calls instead of hanging the request.
    if timeout_seconds > 0 and dsn.startswith("postgresql"):
        return {"options": f"-c statement_timeout={int(timeout_seconds * 1000)}"}
    return {}


def create_db_engine(settings: TranslatableSettings) -> Engine:
    return create_engine(
        settings.database_dsn,
        future=True,
        pool_pre_ping=True,
        connect_args=_connect_args(
            settings.database_dsn, settings.statement_timeout_seconds
        ),
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False, class_=Session)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
