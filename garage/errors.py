# garage/errors.py
"""
Error taxonomy and service result objects.

Service internals raise the GarageError subclasses below. Every public
service function catches them at its boundary and returns a result object
instead, so callers (routers, scripts) never see raw storage errors —
only a displayable message plus the error class that produced it.
"""

from dataclasses import dataclass
from typing import Any, Optional, Type


class GarageError(Exception):
    """Base class. status_code is the HTTP status a router should answer with."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GarageError):
    """Field-level, user-correctable input problem."""
    status_code = 400


class NotFoundError(GarageError):
    """A referenced entity does not exist."""
    status_code = 404


class ConflictError(GarageError):
    """Duplicate record or a catalog entry under the wrong manufacturer."""
    status_code = 409


class PersistenceError(GarageError):
    """The underlying store rejected or failed a write."""
    status_code = 500


class PartialConsistencyError(PersistenceError):
    """
    Primary table write succeeded but the mirror write failed.
    The primary write is NOT rolled back; the caller must treat the two
    tables as out of sync until the operation is retried.
    """


@dataclass
class ServiceResult:
    success: bool
    error: Optional[str] = None
    error_type: Optional[Type[GarageError]] = None
    data: Any = None

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, exc: GarageError) -> "ServiceResult":
        return cls(success=False, error=exc.message, error_type=type(exc))

    @property
    def status_code(self) -> int:
        if self.success:
            return 200
        return self.error_type.status_code if self.error_type else 500


@dataclass
class SyncResult(ServiceResult):
    """Outcome of a dual-table (primary + garage_auth) update."""
    new_login_id: Optional[str] = None
    synced_auth_rows: int = 0

    def to_dict(self) -> dict:
        body: dict = {"success": self.success}
        if self.new_login_id is not None:
            body["newLoginId"] = self.new_login_id
        if self.error:
            body["error"] = self.error
        return body


@dataclass
class CatalogResult(ServiceResult):
    """Outcome of a catalog insert; data is the created model as a domain dict."""
