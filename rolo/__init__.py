# Role and table permission tooling for PostgreSQL
from rolo.models import NO_ACCESS, PRIVILEGES, PermissionRow, ReportFilter, Table

__all__ = [
    "NO_ACCESS",
    "PRIVILEGES",
    "PermissionRow",
    "ReportFilter",
    "Table",
]
