"""Fixed-width role x table permission report."""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from rolo.catalog import granted_privileges, list_roles, list_tables
from rolo.errors import UsageError
from rolo.models import PermissionRow, ReportFilter

log = logging.getLogger(__name__)

FILTER_FORMAT_ERROR = "Invalid filter format. Use 'role=NAME' or 'table=NAME'."

_ROW_FORMAT = "{:<20} {:<20} {:<50}"
_RULE_WIDTH = 95


def parse_filter(text: Optional[str]) -> Optional[ReportFilter]:
    """Parse ``role=NAME`` or ``table=NAME``; ``None`` or empty means no filter."""
    if not text:
        return None
    key, sep, value = text.partition("=")
    if not sep or key not in ("role", "table") or not value:
        raise UsageError(FILTER_FORMAT_ERROR)
    return ReportFilter(field=key, value=value)


def collect_rows(cur, report_filter: Optional[ReportFilter] = None) -> Iterator[PermissionRow]:
    """Yield one row per (role, table) pair, roles outermost."""
    roles = list_roles(cur)
    tables = list_tables(cur)
    if report_filter is not None:
        roles = [role for role in roles if report_filter.matches_role(role)]
        tables = [table for table in tables if report_filter.matches_table(table.name)]
    log.info("Checking %d roles against %d tables", len(roles), len(tables))

    for role in roles:
        for table in tables:
            yield PermissionRow(role=role, table=table.name, privileges=granted_privileges(cur, role, table))


def format_header(db_name: str) -> str:
    return "\n".join(
        [
            f"Permissions in database {db_name}:",
            "",
            _ROW_FORMAT.format("Role", "Table", "Permissions").rstrip(),
            "-" * _RULE_WIDTH,
        ]
    )


def format_row(row: PermissionRow) -> str:
    return _ROW_FORMAT.format(row.role, row.table, row.permissions_text).rstrip()


def show_permissions(cur, db_name: str, report_filter: Optional[ReportFilter] = None) -> int:
    """Print the report and return the number of rows printed.

    All catalog queries finish before anything is printed, so a failed query
    leaves stdout empty.
    """
    rows = list(collect_rows(cur, report_filter))
    print(format_header(db_name))
    for row in rows:
        print(format_row(row))
    return len(rows)
