"""Read roles, tables, and table privileges from the PostgreSQL catalogs.

Every function takes an open cursor and queries the catalogs directly;
nothing is cached between calls.
"""
from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

import psycopg2

from rolo.errors import CatalogQueryError
from rolo.models import PRIVILEGES, SYSTEM_ROLE_PREFIX, SYSTEM_SCHEMAS, Table

log = logging.getLogger(__name__)

_ROLES_SQL = "SELECT rolname FROM pg_roles ORDER BY rolname"

_TABLES_SQL = """
    SELECT schemaname, tablename
    FROM pg_catalog.pg_tables
    WHERE schemaname <> ALL(%s)
    ORDER BY schemaname, tablename
"""

# Schema and table are quoted server-side.
_PRIVILEGE_SQL = "SELECT has_table_privilege(%s, quote_ident(%s) || '.' || quote_ident(%s), %s)"


def _fetch_all(cur, query: str, params: Sequence[Any] | None = None) -> List[tuple]:
    try:
        cur.execute(query, params)
        return list(cur.fetchall())
    except psycopg2.Error as exc:
        raise CatalogQueryError(f"Query failed: {exc}".rstrip()) from exc


def list_roles(cur) -> List[str]:
    """Non-system roles, alphabetically."""
    rows = _fetch_all(cur, _ROLES_SQL)
    roles = [row[0] for row in rows if not row[0].startswith(SYSTEM_ROLE_PREFIX)]
    log.debug("Found %d roles (%d system roles skipped)", len(roles), len(rows) - len(roles))
    return roles


def list_tables(cur) -> List[Table]:
    """Tables outside the system schemas, ordered by schema then name."""
    rows = _fetch_all(cur, _TABLES_SQL, (list(SYSTEM_SCHEMAS),))
    tables = [Table(schema=schema, name=name) for schema, name in rows]
    log.debug("Found %d tables", len(tables))
    return tables


def check_privilege(cur, role: str, table: Table, privilege: str) -> bool:
    """Return whether *role* currently holds *privilege* on *table*."""
    if privilege not in PRIVILEGES:
        raise ValueError(f"Unsupported privilege: {privilege}")
    rows = _fetch_all(cur, _PRIVILEGE_SQL, (role, table.schema, table.name, privilege))
    return bool(rows and rows[0][0])


def granted_privileges(cur, role: str, table: Table) -> Tuple[str, ...]:
    return tuple(priv for priv in PRIVILEGES if check_privilege(cur, role, table, priv))
