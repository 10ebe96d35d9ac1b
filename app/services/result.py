"""
Uniform outcome type returned by the public SalesService operations.

Business failures and storage faults are both reported as values; callers
inspect `success` (or `kind`) instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from app.exceptions import ECommerceError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Result of a service operation.

    success: True if the operation completed
    value: Operation payload (None on failure)
    error: Human-readable failure message (None on success)
    kind: ErrorKind of the failure (None on success)
    status_code: HTTP status hint for the transport layer
    details: Extra failure fields (e.g. available and requested stock)
    """
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    status_code: int = 200
    details: Optional[dict] = None

    @property
    def is_failure(self) -> bool:
        return not self.success

    @classmethod
    def ok(cls, value: Any = None, status_code: int = 200) -> "ServiceResult":
        return cls(success=True, value=value, status_code=status_code)

    @classmethod
    def fail(cls, error: ECommerceError) -> "ServiceResult":
        return cls(
            success=False,
            error=error.message,
            kind=error.kind,
            status_code=error.status_code,
            details=dict(error.payload) if error.payload else None,
        )

    def to_dict(self) -> dict:
        if self.success:
            return {'status': 'success', 'data': self.value}
        rv = dict(self.details or ())
        rv.update({'status': 'error', 'message': self.error, 'kind': self.kind.value})
        return rv
