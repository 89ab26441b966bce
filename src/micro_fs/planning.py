"""Decision logic shared by the blocking and non-blocking operations.

Nothing here touches the filesystem: these helpers map paths, shape
listings, classify host errors and assemble results, so ``operations`` and
``aio`` only differ in how they wait on I/O.
"""

import errno
import os
from collections.abc import Iterable, Sequence
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from micro_fs.backends import Entry, StrPath
from micro_fs.core import get_logger
from micro_fs.core.config import settings
from micro_fs.core.exceptions import ValidationError
from micro_fs.results import DirectoryCopyReport, FsResult, Status
from micro_fs.schemas import CopyOptions, DirectoryCopyOptions, DirectoryOptions

logger = get_logger(__name__)

_ERRNO_STATUS = {
    errno.ENOENT: Status.not_found,
    errno.ENOTDIR: Status.not_found,
    errno.EEXIST: Status.already_exists,
    errno.EACCES: Status.permission_denied,
    errno.EPERM: Status.permission_denied,
}


def parent_of(path: StrPath) -> str:
    """Directory holding path; the current directory for bare names."""
    return os.path.dirname(os.fspath(path)) or os.curdir


def destination_for(file: StrPath, src: StrPath, dest: StrPath) -> str:
    """Map a file under src onto the same relative location under dest.

    Raises:
        ValidationError: If file does not live under src
    """
    relative = os.path.relpath(os.fspath(file), os.fspath(src))
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise ValidationError(
            f"{os.fspath(file)} is not inside {os.fspath(src)}", path=os.fspath(file)
        )
    return os.path.join(os.fspath(dest), relative)


def plan_listing(
    path: StrPath, entries: Iterable[Entry], recursive: bool
) -> list[tuple[str, bool]]:
    """Join each entry onto path and flag the ones to descend into.

    Order follows the host's enumeration order.
    """
    base = os.fspath(path)
    return [
        (os.path.join(base, entry.name), entry.is_dir and recursive)
        for entry in entries
    ]


def flatten(chunks: Sequence[Any]) -> list[str]:
    """Splice nested listing results into one flat list."""
    flat: list[str] = []
    for chunk in chunks:
        if isinstance(chunk, list):
            flat.extend(chunk)
        else:
            flat.append(chunk)
    return flat


def classify(exc: BaseException, creating_dirs: bool = False) -> Status:
    """Map a host error onto a result status.

    Args:
        exc: Error raised by a backend call
        creating_dirs: The error came from building a directory chain. A
            non-directory in the way of that chain is an I/O failure, not an
            existing destination.
    """
    if creating_dirs and isinstance(exc, (FileExistsError, NotADirectoryError)):
        return Status.io_failure
    if isinstance(exc, FileNotFoundError):
        return Status.not_found
    if isinstance(exc, FileExistsError):
        return Status.already_exists
    if isinstance(exc, PermissionError):
        return Status.permission_denied
    if isinstance(exc, OSError) and exc.errno in _ERRNO_STATUS:
        return _ERRNO_STATUS[exc.errno]
    return Status.io_failure


def failed(
    event: str, path: StrPath, exc: BaseException, creating_dirs: bool = False
) -> FsResult[Any]:
    """Log a failed operation and turn the error into a result."""
    status = classify(exc, creating_dirs)
    message = f"{event} '{os.fspath(path)}': {exc}"
    logger.error(message, path=os.fspath(path), status=status.value, error=str(exc))
    return FsResult.failure(status, os.fspath(path), message)


def missing(event: str, path: StrPath) -> FsResult[Any]:
    """Warn about an absent target and report it as not found."""
    message = f"{event}: '{os.fspath(path)}' does not exist"
    logger.warning(message, path=os.fspath(path))
    return FsResult.failure(Status.not_found, os.fspath(path), message)


def guarded(path: StrPath, kind: str) -> FsResult[Any]:
    """Report that an existing destination blocked a copy."""
    message = f"Can't copy {kind} to '{os.fspath(path)}' because it already exists"
    if kind == "directory":
        logger.error(message, path=os.fspath(path))
    else:
        logger.warning(message, path=os.fspath(path))
    return FsResult.failure(Status.already_exists, os.fspath(path), message)


def resolve_dir_options(options: Optional[DirectoryOptions]) -> DirectoryOptions:
    return options if options is not None else DirectoryOptions()


def resolve_copy_options(
    options: Optional[CopyOptions], transform: Any, force: Optional[bool]
) -> CopyOptions:
    """Merge keyword arguments over an options object; keywords win."""
    base = options if options is not None else CopyOptions()
    updates: dict[str, Any] = {}
    if transform is not None:
        updates["transform"] = transform
    if force is not None:
        updates["force"] = force
    return _validated(CopyOptions, base, updates)


def resolve_dir_copy_options(
    options: Optional[DirectoryCopyOptions],
    force: Optional[bool],
    max_concurrency: Optional[int] = None,
) -> DirectoryCopyOptions:
    base = options if options is not None else DirectoryCopyOptions()
    updates: dict[str, Any] = {}
    if force is not None:
        updates["force"] = force
    if max_concurrency is not None:
        updates["max_concurrency"] = max_concurrency
    return _validated(DirectoryCopyOptions, base, updates)


def concurrency_limit(options: DirectoryCopyOptions) -> int:
    return options.max_concurrency or settings.max_concurrency


def _validated(model: Any, base: Any, updates: dict[str, Any]) -> Any:
    if not updates:
        return base
    current = {name: getattr(base, name) for name in model.model_fields}
    try:
        return model.model_validate({**current, **updates})
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}: {e}") from e


def copy_dir_result(
    src: StrPath,
    dest: StrPath,
    outcomes: Iterable[tuple[str, str, FsResult[str]]],
) -> FsResult[DirectoryCopyReport]:
    """Fold per-file copy results into one directory copy result.

    Only a destination guard hit (already_exists reported for the target
    itself) counts as skipped; every other non-ok result is a failure.

    Args:
        src: Source directory
        dest: Destination directory
        outcomes: (source file, target file, copy result) triples

    Returns:
        ok when every file was copied or skipped, io_failure otherwise;
        the report is attached either way
    """
    report = DirectoryCopyReport(source=os.fspath(src), destination=os.fspath(dest))
    for source_file, target, result in outcomes:
        if result.ok:
            report.copied.append(result.path)
        elif result.status is Status.already_exists and result.path == target:
            report.skipped.append(target)
        else:
            report.failed[source_file] = result.error or result.status.value

    logger.info(
        "Directory copy finished",
        src=report.source,
        dest=report.destination,
        copied=len(report.copied),
        skipped=len(report.skipped),
        failed=len(report.failed),
    )

    if report.failed:
        return FsResult.failure(
            Status.io_failure,
            report.destination,
            f"{len(report.failed)} of {report.file_count} files failed to copy",
            value=report,
        )
    return FsResult.success(report.destination, report)
