"""
Repository exception hierarchy.

Lookups never raise for a missing record; they return None instead.
"""

from typing import Any, Dict, Optional


class RepositoryError(Exception):
    """Base class for repository exceptions."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidArgument(RepositoryError, ValueError):
    """Malformed caller input: paging/sort parameters or a missing identifier."""


class StorageError(RepositoryError):
    """
    The backing store failed the request.

    Covers connectivity failures, pool/statement timeouts and integrity
    violations (e.g. duplicate unique value). The originating SQLAlchemy
    exception is kept as __cause__.
    """
    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        model: Optional[str] = None,
        integrity: bool = False,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if model:
            details["model"] = model
        super().__init__(message, details)
        self.operation = operation
        self.model = model
        self.integrity = integrity
