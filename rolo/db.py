"""Connection handling for the target PostgreSQL database.

One connection is opened per command and closed when the command finishes,
whether it succeeded or not. Every action issues a single statement, so the
connection runs in autocommit mode instead of wrapping work in a transaction.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import psycopg2
import psycopg2.extensions

from rolo.errors import DatabaseConnectionError

log = logging.getLogger(__name__)

UNKNOWN_DATABASE = "<unknown>"


def _parse(dsn: str) -> dict:
    try:
        return psycopg2.extensions.parse_dsn(dsn)
    except psycopg2.ProgrammingError:
        return {}


def database_name(dsn: str) -> str:
    """Return the database name encoded in *dsn*, for display only."""
    return _parse(dsn).get("dbname") or UNKNOWN_DATABASE


def redact_dsn(dsn: str) -> str:
    """Return *dsn* in key/value form with the password masked."""
    params = _parse(dsn)
    if not params:
        return "<unparseable dsn>"
    if "password" in params:
        params["password"] = "***"
    return psycopg2.extensions.make_dsn(**params)


@contextmanager
def get_connection(dsn: str) -> Iterator[psycopg2.extensions.connection]:
    """Context manager yielding an autocommit psycopg2 connection; always closes it."""
    try:
        pg = psycopg2.connect(dsn)
    except psycopg2.Error as exc:
        raise DatabaseConnectionError(f"Unable to connect to database ({redact_dsn(dsn)}): {exc}") from exc

    log.info("Connected to %s", redact_dsn(dsn))
    try:
        pg.autocommit = True
        yield pg
    finally:
        pg.close()
        log.debug("Connection closed")
