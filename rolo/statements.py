"""Build and run GRANT / REVOKE statements for one role on one table.

Permission tokens come from the command line, so they are checked against
the fixed privilege set before any SQL is composed. Identifiers are quoted
with ``psycopg2.sql.Identifier``; privileges are only ever emitted from the
allow-list.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import psycopg2
from psycopg2 import sql

from rolo.errors import PermissionChangeError, UsageError
from rolo.logging_utils import log_event
from rolo.models import PRIVILEGES

log = logging.getLogger(__name__)

_GRANT = sql.SQL("GRANT {privileges} ON {table} TO {role}")
_REVOKE = sql.SQL("REVOKE {privileges} ON {table} FROM {role}")


def parse_permissions(text: Optional[str]) -> List[str]:
    """Split a comma-separated permission list into validated privilege names.

    Matching is case-insensitive; the result is upper case, in input order,
    without duplicates.
    """
    tokens = [token.strip() for token in (text or "").split(",")]
    if not any(tokens):
        raise UsageError("Please provide at least one permission (e.g. SELECT,INSERT).")
    if "" in tokens:
        raise UsageError(f"Empty permission in list: {text!r}")

    unknown = [token for token in tokens if token.upper() not in PRIVILEGES]
    if unknown:
        raise UsageError(
            f"Unknown permission(s): {', '.join(unknown)}. Allowed: {', '.join(PRIVILEGES)}"
        )

    privileges: List[str] = []
    for token in tokens:
        name = token.upper()
        if name not in privileges:
            privileges.append(name)
    return privileges


def _privilege_list(privileges: Sequence[str]) -> sql.Composable:
    for priv in privileges:
        if priv not in PRIVILEGES:
            raise ValueError(f"Unsupported privilege: {priv}")
    if not privileges:
        raise ValueError("At least one privilege is required")
    return sql.SQL(", ").join(sql.SQL(priv) for priv in privileges)


def build_grant(role: str, table: str, privileges: Sequence[str]) -> sql.Composed:
    return _GRANT.format(
        privileges=_privilege_list(privileges),
        table=sql.Identifier(table),
        role=sql.Identifier(role),
    )


def build_revoke(role: str, table: str, privileges: Sequence[str]) -> sql.Composed:
    return _REVOKE.format(
        privileges=_privilege_list(privileges),
        table=sql.Identifier(table),
        role=sql.Identifier(role),
    )


def _execute(conn, statement: sql.Composed, action: str) -> None:
    try:
        with conn.cursor() as cur:
            cur.execute(statement)
    except psycopg2.Error as exc:
        raise PermissionChangeError(f"failed to {action} permissions: {exc}".rstrip()) from exc


def grant_permissions(conn, role: str, table: str, privileges: Sequence[str]) -> None:
    """Grant *privileges* on *table* to *role* and print a confirmation line."""
    _execute(conn, build_grant(role, table, privileges), "grant")
    joined = ", ".join(privileges)
    log_event(log, logging.INFO, "permissions_granted", role=role, table=table, privileges=list(privileges))
    print(f"Granted {joined} on {table} to {role}")


def revoke_permissions(conn, role: str, table: str, privileges: Sequence[str]) -> None:
    """Revoke *privileges* on *table* from *role* and print a confirmation line."""
    _execute(conn, build_revoke(role, table, privileges), "revoke")
    joined = ", ".join(privileges)
    log_event(log, logging.INFO, "permissions_revoked", role=role, table=table, privileges=list(privileges))
    print(f"Revoked {joined} on {table} from {role}")
