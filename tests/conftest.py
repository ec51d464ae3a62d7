from __future__ import annotations

import os
import uuid
from typing import Generator

import psycopg2
import pytest

from rolo.config.settings import get_settings


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: Tests that run against a real PostgreSQL (set ROLO_TEST_DSN).",
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.delenv("ROLO_DSN", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def integration_dsn() -> str:
    dsn = os.getenv("ROLO_TEST_DSN", "").strip()
    if not dsn:
        pytest.skip("ROLO_TEST_DSN not set, skipping PostgreSQL integration tests")
    try:
        psycopg2.connect(dsn).close()
    except psycopg2.Error as exc:
        pytest.skip(f"PostgreSQL unavailable, skipping integration tests: {exc}")
    return dsn


@pytest.fixture
def scratch_objects(integration_dsn: str) -> Generator[tuple[str, str], None, None]:
    """A throwaway NOLOGIN role and an empty table in ``public``; dropped afterwards."""
    suffix = uuid.uuid4().hex[:8]
    role = f"rolo_it_role_{suffix}"
    table = f"rolo_it_orders_{suffix}"

    conn = psycopg2.connect(integration_dsn)
    conn.autocommit = True
    try:
        with conn.cursor() as cur:
            cur.execute(f'CREATE ROLE "{role}" NOLOGIN')
            cur.execute(f'CREATE TABLE public."{table}" (id integer PRIMARY KEY)')
        yield role, table
    finally:
        with conn.cursor() as cur:
            cur.execute(f'DROP TABLE IF EXISTS public."{table}"')
            cur.execute(f'DROP ROLE IF EXISTS "{role}"')
        conn.close()
