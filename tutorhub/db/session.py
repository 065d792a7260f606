"""Database engine and session utilities.

The engine is configured at import time from the environment.  For local
development a SQLite fallback kicks in when the configured PostgreSQL
instance cannot be reached, so the API still boots.
"""

from __future__ import annotations

import logging
import os
import time
from time import perf_counter
from typing import Any, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError, OperationalError
from sqlalchemy.orm import sessionmaker

from tutorhub.core.config import settings

logger = logging.getLogger(__name__)


SQLITE_FALLBACK_URL = "sqlite:///./tutorhub_local.db"

# These globals are populated by ``configure_database``.
engine: Engine
SessionLocal: sessionmaker


def _connect_args_for(url: str) -> dict[str, Any]:
    """Return driver specific ``connect_args`` for *url*."""

    try:
        parsed_url = make_url(url)
    except ArgumentError:
        return {}

    if parsed_url.drivername.startswith("sqlite"):
        # Path operations run in FastAPI's threadpool.
        return {"check_same_thread": False}
    return {}


def _should_enable_sqlite_fallback() -> bool:
    environment = (settings.ENVIRONMENT or "").lower()
    if os.getenv("DISABLE_SQLITE_FALLBACK") == "1":
        return False
    return environment in {"development", "local"}


def _install_slow_query_logger(target: Engine) -> None:
    """Attach callbacks that warn when queries exceed the configured budget."""

    threshold_ms = max(settings.SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS or 0, 0)
    if threshold_ms == 0:
        return

    marker = "_tutorhub_slow_query_hook"
    if getattr(target, marker, False):
        return

    setattr(target, marker, True)

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        context._tutorhub_query_start = perf_counter()

    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start = getattr(context, "_tutorhub_query_start", None)
        if start is None:
            return

        elapsed_ms = (perf_counter() - start) * 1000.0
        if elapsed_ms < threshold_ms:
            return

        snippet = " ".join(statement.split()) if isinstance(statement, str) else str(statement)
        if len(snippet) > 200:
            snippet = snippet[:197] + "..."

        logger.warning("SQL lente (%.1f ms) - %s", elapsed_ms, snippet)

    event.listen(target, "before_cursor_execute", _before_cursor_execute)
    event.listen(target, "after_cursor_execute", _after_cursor_execute)


def _verify_database_connection(target: Engine, *, max_retries: int = 1, backoff: float = 1.0) -> None:
    """Ping *target* with retry logic to tolerate transient outages."""

    if target.dialect.name == "sqlite":
        with target.connect() as connection:
            connection.execute(text("SELECT 1"))
        return

    attempt = 1
    last_exc: Optional[Exception] = None

    while attempt <= max_retries:
        try:
            with target.connect() as connection:
                connection.execute(text("SELECT 1"))
            return
        except (OperationalError, OSError) as exc:
            last_exc = exc
            if attempt >= max_retries:
                break

            delay = min(30.0, backoff * (2 ** (attempt - 1)))
            logger.warning(
                "Connexion à la base de données échouée (tentative %s/%s): %s. Nouvelle tentative dans %.1f s.",
                attempt,
                max_retries,
                exc,
                delay,
            )
            time.sleep(delay)
            attempt += 1

    if last_exc is not None:
        raise last_exc


def configure_database(database_url: str | None = None, *, allow_fallback: bool = True) -> None:
    """Initialise the engine and session factory.

    ``database_url`` defaults to the environment configuration.  When the
    connection attempt fails locally we transparently fall back to a SQLite
    database.
    """

    global engine, SessionLocal

    target_url = str(database_url or settings.DATABASE_URL)
    logger.info("Configuration de la base de données: %s", make_url(target_url).render_as_string(hide_password=True))

    candidate_engine = create_engine(
        target_url,
        pool_pre_ping=True,
        connect_args=_connect_args_for(target_url),
    )
    _install_slow_query_logger(candidate_engine)

    try:
        _verify_database_connection(
            candidate_engine,
            max_retries=max(settings.DATABASE_CONNECTION_MAX_RETRIES or 1, 1),
            backoff=max(settings.DATABASE_CONNECTION_RETRY_BACKOFF_SECONDS or 1.0, 0.1),
        )
    except (OperationalError, OSError) as exc:
        if allow_fallback and _should_enable_sqlite_fallback():
            logger.warning(
                "Impossible de joindre la base de données (%s). Bascule automatique vers SQLite.",
                exc,
            )
            candidate_engine.dispose()
            configure_database(SQLITE_FALLBACK_URL, allow_fallback=False)
            return

        logger.error("Connexion à la base de données échouée: %s", exc)
        raise

    engine = candidate_engine
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


configure_database()
