"""Exception hierarchy for micro-fs.

Operations report expected filesystem conditions as results; these
exceptions are what ``FsResult.unwrap()`` raises for them, plus
``ValidationError`` for invalid arguments.
"""

from typing import Optional


class MicroFSError(Exception):
    """Base exception for all micro-fs errors.

    Attributes:
        path: Filesystem path the error is about, when there is one
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ValidationError(MicroFSError):
    """Raised when arguments or options are invalid."""


class PathNotFoundError(MicroFSError):
    """Raised for a missing file or directory."""


class AlreadyExistsError(MicroFSError):
    """Raised when a copy destination exists and overwriting was not requested."""


class PermissionDeniedError(MicroFSError):
    """Raised when the host refuses access to a path."""


class IOFailureError(MicroFSError):
    """Raised for any other failed filesystem call."""
