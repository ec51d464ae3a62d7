from __future__ import annotations


class RoloError(RuntimeError):
    """Base class for failures reported to the user with exit code 1."""


class UsageError(RoloError):
    """Raised for invalid command-line input, before any database call."""


class DatabaseConnectionError(RoloError):
    """Raised when the database connection cannot be opened."""


class CatalogQueryError(RoloError):
    """Raised for catalog or privilege query failures."""


class PermissionChangeError(RoloError):
    """Raised when a GRANT or REVOKE statement fails."""
