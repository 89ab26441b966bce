"""Result types returned by micro-fs operations.

Operations do not raise on expected filesystem conditions (missing paths,
existing destinations, refused access). They return an ``FsResult`` whose
``status`` tells callers what happened, and whose ``unwrap()`` converts a
failure into the matching exception for callers that prefer raising.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

from micro_fs.core.exceptions import (
    AlreadyExistsError,
    IOFailureError,
    MicroFSError,
    PathNotFoundError,
    PermissionDeniedError,
)

T = TypeVar("T")


class Status(str, Enum):
    """Outcome of a filesystem operation."""

    ok = "ok"
    not_found = "not_found"
    already_exists = "already_exists"
    permission_denied = "permission_denied"
    io_failure = "io_failure"


_ERRORS: dict[Status, type[MicroFSError]] = {
    Status.not_found: PathNotFoundError,
    Status.already_exists: AlreadyExistsError,
    Status.permission_denied: PermissionDeniedError,
    Status.io_failure: IOFailureError,
}


@dataclass(frozen=True)
class FsResult(Generic[T]):
    """Outcome of a single operation.

    Attributes:
        status: What happened
        path: The path the operation acted on
        value: Operation output, present on success (and on partial copies)
        error: Human-readable failure description
    """

    status: Status
    path: str
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is Status.ok

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the value, or raise the exception matching the status.

        Raises:
            PathNotFoundError: status is not_found
            AlreadyExistsError: status is already_exists
            PermissionDeniedError: status is permission_denied
            IOFailureError: status is io_failure
        """
        if self.ok:
            return self.value  # type: ignore[return-value]
        raise _ERRORS[self.status](
            self.error or f"{self.status.value}: {self.path}", path=self.path
        )

    @classmethod
    def success(cls, path: str, value: Optional[T] = None) -> "FsResult[T]":
        return cls(status=Status.ok, path=path, value=value)

    @classmethod
    def failure(
        cls, status: Status, path: str, error: str, value: Optional[T] = None
    ) -> "FsResult[T]":
        if status is Status.ok:
            raise ValueError("failure() requires a non-ok status")
        return cls(status=status, path=path, value=value, error=error)


@dataclass(frozen=True)
class DirectoryCopyReport:
    """Per-file outcome of a directory copy.

    Attributes:
        source: Source directory
        destination: Destination directory
        copied: Destination paths written
        skipped: Destination paths left alone because they already existed
        failed: Source path mapped to the reason its copy failed
    """

    source: str
    destination: str
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return len(self.copied) + len(self.skipped) + len(self.failed)
