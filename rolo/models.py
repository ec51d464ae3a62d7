from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

Privilege = Literal["SELECT", "INSERT", "UPDATE", "DELETE", "TRUNCATE", "REFERENCES", "TRIGGER"]
FilterField = Literal["role", "table"]

# Order matters: reports list granted privileges in this order.
PRIVILEGES: Tuple[str, ...] = ("SELECT", "INSERT", "UPDATE", "DELETE", "TRUNCATE", "REFERENCES", "TRIGGER")

NO_ACCESS = "<no access>"
SYSTEM_ROLE_PREFIX = "pg_"
SYSTEM_SCHEMAS: Tuple[str, ...] = ("pg_catalog", "information_schema")


@dataclass(frozen=True)
class Table:
    """A relation in a non-system schema."""

    schema: str
    name: str


@dataclass(frozen=True)
class PermissionRow:
    """Role x table x granted privileges, used only for display."""

    role: str
    table: str
    privileges: Tuple[str, ...] = ()

    @property
    def permissions_text(self) -> str:
        if not self.privileges:
            return NO_ACCESS
        return ", ".join(self.privileges)


@dataclass(frozen=True)
class ReportFilter:
    field: FilterField
    value: str

    def matches_role(self, role: str) -> bool:
        return self.field != "role" or role == self.value

    def matches_table(self, table: str) -> bool:
        return self.field != "table" or table == self.value
