"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Store failures are translated into `DatabaseError` subclasses so the HTTP
layer can answer 503/504 without knowing about asyncpg.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Iterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


class DatabaseError(RuntimeError):
    pass


class DatabaseUnavailableError(DatabaseError):
    pass


class DatabaseTimeoutError(DatabaseError):
    pass


# Checked after the timeout errors: QueryCanceledError is itself an
# OperatorInterventionError, and TimeoutError is an OSError.
_UNAVAILABLE_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.ConnectionDoesNotExistError,
    asyncpg.exceptions.OperatorInterventionError,
    asyncpg.exceptions.TooManyConnectionsError,
)

_TIMEOUT_ERRORS: tuple[type[BaseException], ...] = (
    asyncio.TimeoutError,
    asyncpg.exceptions.QueryCanceledError,
)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.database_url()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    timeout_s = settings.db_command_timeout_s()
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=1,
        max_size=settings.db_pool_max_size(),
        command_timeout=timeout_s,
        timeout=timeout_s,
    )
    logger.info("db_pool_ready max_size=%s command_timeout_s=%s", settings.db_pool_max_size(), timeout_s)


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except _TIMEOUT_ERRORS as exc:
        logger.warning("db_timeout error=%s", type(exc).__name__)
        raise DatabaseTimeoutError("Database did not respond in time.") from exc
    except _UNAVAILABLE_ERRORS as exc:
        logger.warning("db_unavailable error=%s", type(exc).__name__)
        raise DatabaseUnavailableError("Database is unavailable.") from exc


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with _translate_errors():
        row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with _translate_errors():
        rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return asyncpg's status
    tag, e.g. "DELETE 1".
    """
    with _translate_errors():
        return await pool().execute(sql, *args)


def affected_rows(status_tag: str) -> int:
    """
    Parse the row count out of a status tag such as "UPDATE 3".
    """
    tail = (status_tag or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0
