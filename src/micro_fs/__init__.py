"""Small paired async/sync helpers for everyday file and directory work.

This package wraps the host filesystem with helpers that report expected
conditions (missing paths, existing destinations, refused access) as
results instead of exceptions.

Key Features:
    - Existence probes that never raise
    - Read, write, remove and copy for single files
    - Copy with an optional content transform
    - Flattened recursive directory listing
    - Recursive directory copy with bounded concurrency (async)
    - CLI interface

Recommended Usage:
    Async helpers carry the bare names, their blocking twins a ``_sync``
    suffix:

    >>> from micro_fs import copy_file_sync, read_file_sync
    >>> copy_file_sync("a.json", "b.json", transform=lambda s: s.upper())
    >>> read_file_sync("b.json").unwrap()

    >>> from micro_fs import copy_dir
    >>> report = (await copy_dir("src/components", "dist/components")).unwrap()

Advanced Usage:
    Bind the operations to another filesystem backend:

    >>> from micro_fs.operations import FileOperations
    >>> ops = FileOperations(filesystem=my_backend)
"""

__version__ = "0.1.0"

from .aio import (
    AsyncFileOperations,
    copy_dir,
    copy_file,
    create_dir,
    create_file,
    dir_exists,
    file_exists,
    read_dir,
    read_file,
    remove_dir,
    remove_file,
    write_file,
)
from .backends import AsyncFileSystem, AsyncLocalFileSystem, FileSystem, LocalFileSystem
from .core.exceptions import (
    AlreadyExistsError,
    IOFailureError,
    MicroFSError,
    PathNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .operations import (
    FileOperations,
    copy_dir_sync,
    copy_file_sync,
    create_dir_sync,
    create_file_sync,
    dir_exists_sync,
    file_exists_sync,
    read_dir_sync,
    read_file_sync,
    remove_dir_sync,
    remove_file_sync,
    write_file_sync,
)
from .results import DirectoryCopyReport, FsResult, Status
from .schemas import CopyOptions, DirectoryCopyOptions, DirectoryOptions

__all__ = [
    # Async operations
    "AsyncFileOperations",
    "copy_dir",
    "copy_file",
    "create_dir",
    "create_file",
    "dir_exists",
    "file_exists",
    "read_dir",
    "read_file",
    "remove_dir",
    "remove_file",
    "write_file",
    # Sync operations
    "FileOperations",
    "copy_dir_sync",
    "copy_file_sync",
    "create_dir_sync",
    "create_file_sync",
    "dir_exists_sync",
    "file_exists_sync",
    "read_dir_sync",
    "read_file_sync",
    "remove_dir_sync",
    "remove_file_sync",
    "write_file_sync",
    # Backends
    "AsyncFileSystem",
    "AsyncLocalFileSystem",
    "FileSystem",
    "LocalFileSystem",
    # Results and options
    "DirectoryCopyReport",
    "FsResult",
    "Status",
    "CopyOptions",
    "DirectoryCopyOptions",
    "DirectoryOptions",
    # Errors
    "AlreadyExistsError",
    "IOFailureError",
    "MicroFSError",
    "PathNotFoundError",
    "PermissionDeniedError",
    "ValidationError",
]
