"""Listing error taxonomy and the per-run failure reporter."""

from __future__ import annotations

import errno
from collections.abc import Callable
from dataclasses import dataclass, field

from fastls.runtime_logging import get_runtime_logger


class ListingError(Exception):
    """A failure tied to one path. Never aborts sibling work."""

    kind = "io"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class NotFoundError(ListingError):
    kind = "not_found"


class PermissionDeniedError(ListingError):
    kind = "permission_denied"


class ListingIOError(ListingError):
    kind = "io"


def _reason(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or exc.__class__.__name__


def error_from_os(exc: OSError, path: str) -> ListingError:
    """Map an ``OSError`` raised for ``path`` onto the listing taxonomy."""
    reason = _reason(exc)
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)) or exc.errno == errno.ENOENT:
        return NotFoundError(path, reason)
    if isinstance(exc, PermissionError) or exc.errno in {errno.EACCES, errno.EPERM}:
        return PermissionDeniedError(path, reason)
    return ListingIOError(path, reason)


def error_from_exception(exc: BaseException, path: str) -> ListingError:
    if isinstance(exc, ListingError):
        return exc
    if isinstance(exc, OSError):
        return error_from_os(exc, path)
    return ListingIOError(path, _reason(exc))


@dataclass(slots=True)
class ErrorReporter:
    """Collects per-path failures and emits one line for each.

    Only the coordinating thread reports, so no locking is needed here.
    """

    program: str = "fastls"
    sink: Callable[[str], None] | None = None
    failures: list[ListingError] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        return bool(self.failures)

    def report(self, error: ListingError, *, stage: str) -> None:
        self.failures.append(error)
        get_runtime_logger().warning(
            f"{stage}.failed",
            path=error.path,
            error_kind=error.kind,
            reason=error.reason,
        )
        if self.sink is not None:
            self.sink(f"{self.program}: {error}")
