"""Error taxonomy for remote calls, conversions, and identities."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .diagnostics import Diagnostics


class ErrorKind(StrEnum):
    """Semantic outcome of a failed remote call."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT = "transient"
    OTHER = "other"


class RiverspecError(Exception):
    """Base class for all riverspec errors."""


class ConversionError(RiverspecError):
    """Model <-> wire translation failed."""


class IdentityFormatError(RiverspecError, ValueError):
    """An externally supplied identity string has the wrong shape."""


class RemoteError(RiverspecError):
    """A remote API call failed."""

    kind: ErrorKind = ErrorKind.OTHER

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(RemoteError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(RemoteError):
    kind = ErrorKind.CONFLICT


class TransientError(RemoteError):
    kind = ErrorKind.TRANSIENT


class LifecycleError(RiverspecError):
    """One or more fatal diagnostics were recorded by a lifecycle operation."""

    def __init__(self, diagnostics: Diagnostics) -> None:
        self.diagnostics = diagnostics
        super().__init__("; ".join(str(d) for d in diagnostics.errors))
