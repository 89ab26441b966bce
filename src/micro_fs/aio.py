"""Non-blocking filesystem operations for asyncio.

Same contracts as ``micro_fs.operations``. Directory listings and copies fan
out over files concurrently, with the number of in-flight filesystem calls
capped by a semaphore (``max_concurrency``, defaulting to
``settings.max_concurrency``).
"""

import asyncio
import inspect
import os
import stat
from typing import Optional

from micro_fs.backends import AsyncFileSystem, AsyncLocalFileSystem, StrPath
from micro_fs.core import get_logger, get_tracer
from micro_fs.core.config import settings
from micro_fs.core.exceptions import ValidationError
from micro_fs.planning import (
    concurrency_limit,
    copy_dir_result,
    destination_for,
    failed,
    flatten,
    guarded,
    missing,
    parent_of,
    plan_listing,
    resolve_copy_options,
    resolve_dir_copy_options,
    resolve_dir_options,
)
from micro_fs.results import DirectoryCopyReport, FsResult
from micro_fs.schemas import (
    ContentTransform,
    CopyOptions,
    DirectoryCopyOptions,
    DirectoryOptions,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class AsyncFileOperations:
    """File and directory helpers over a non-blocking AsyncFileSystem."""

    def __init__(
        self,
        filesystem: Optional[AsyncFileSystem] = None,
        max_concurrency: Optional[int] = None,
    ):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValidationError(
                f"max_concurrency must be at least 1, got: {max_concurrency}"
            )
        self.filesystem = (
            filesystem if filesystem is not None else AsyncLocalFileSystem()
        )
        self.max_concurrency = max_concurrency

    async def _stat_mode(self, path: StrPath) -> Optional[int]:
        try:
            return (await self.filesystem.stat(path)).st_mode
        except (OSError, ValueError):
            return None

    async def file_exists(self, path: StrPath) -> bool:
        """Return True only for an existing regular file. Never raises."""
        mode = await self._stat_mode(path)
        return mode is not None and stat.S_ISREG(mode)

    async def dir_exists(self, path: StrPath) -> bool:
        """Return True only for an existing directory. Never raises."""
        mode = await self._stat_mode(path)
        return mode is not None and stat.S_ISDIR(mode)

    async def create_file(
        self,
        path: StrPath,
        content: str = "",
        options: Optional[DirectoryOptions] = None,
    ) -> FsResult[str]:
        """Write content to path, creating parent directories first."""
        options = resolve_dir_options(options)
        parent = parent_of(path)

        try:
            await self.filesystem.make_dir(parent, options.mode, options.recursive)
            if parent != os.curdir:
                await self.filesystem.chmod(parent, options.mode)
        except OSError as e:
            return failed(
                "Failed to create parent directory for", path, e, creating_dirs=True
            )

        try:
            await self.filesystem.write_text(path, content, settings.encoding)
        except OSError as e:
            return failed("Failed to write file", path, e)

        logger.info("File written", path=os.fspath(path), length=len(content))
        return FsResult.success(os.fspath(path), os.fspath(path))

    write_file = create_file

    async def read_file(self, path: StrPath) -> FsResult[str]:
        try:
            content = await self.filesystem.read_text(path, settings.encoding)
        except (OSError, UnicodeDecodeError) as e:
            return failed("Failed to read file", path, e)
        return FsResult.success(os.fspath(path), content)

    async def remove_file(self, path: StrPath) -> FsResult[str]:
        if not await self.file_exists(path):
            return missing("Can't remove file", path)

        try:
            await self.filesystem.unlink(path)
        except OSError as e:
            return failed("Failed to remove file", path, e)

        logger.info("File removed", path=os.fspath(path))
        return FsResult.success(os.fspath(path), os.fspath(path))

    async def copy_file(
        self,
        src: StrPath,
        dest: StrPath,
        options: Optional[CopyOptions] = None,
        *,
        transform: Optional[ContentTransform] = None,
        force: Optional[bool] = None,
    ) -> FsResult[str]:
        """Copy a file, optionally rewriting its content on the way.

        The transform may be a plain function or a coroutine function; it is
        called exactly once with the full source text.
        """
        options = resolve_copy_options(options, transform, force)

        if not options.force and await self.file_exists(dest):
            return guarded(dest, "file")

        if options.transform is not None:
            try:
                content = await self.filesystem.read_text(src, settings.encoding)
            except (OSError, UnicodeDecodeError) as e:
                return failed("Failed to read copy source", src, e)

            rewritten = options.transform(content)
            if inspect.isawaitable(rewritten):
                rewritten = await rewritten

            result = await self.create_file(dest, rewritten)
            if result.ok:
                logger.info(
                    "File copied",
                    src=os.fspath(src),
                    dest=os.fspath(dest),
                    transformed=True,
                )
            return result

        try:
            await self.filesystem.make_dir(
                parent_of(dest), settings.default_dir_mode, parents=True
            )
        except OSError as e:
            return failed(
                "Failed to create parent directory for", dest, e, creating_dirs=True
            )

        try:
            await self.filesystem.copy_file(src, dest)
        except OSError as e:
            return failed(f"Failed to copy file to '{os.fspath(dest)}' from", src, e)

        logger.info("File copied", src=os.fspath(src), dest=os.fspath(dest))
        return FsResult.success(os.fspath(dest), os.fspath(dest))

    async def read_dir(
        self, path: StrPath, recursive: bool = True
    ) -> FsResult[list[str]]:
        """List the files below a directory as a flat list of paths.

        Subdirectories are listed concurrently; the result keeps the host's
        enumeration order regardless of completion order.
        """
        limit = asyncio.Semaphore(self.max_concurrency or settings.max_concurrency)
        return await self._read_dir(path, recursive, limit)

    async def _read_dir(
        self, path: StrPath, recursive: bool, limit: asyncio.Semaphore
    ) -> FsResult[list[str]]:
        with tracer.start_as_current_span("micro_fs.read_dir") as span:
            span.set_attribute("micro_fs.path", os.fspath(path))
            try:
                files = await self._walk(path, recursive, limit)
            except OSError as e:
                return failed("Failed to read directory", path, e)
            span.set_attribute("micro_fs.entries", len(files))
            return FsResult.success(os.fspath(path), files)

    async def _walk(
        self, path: StrPath, recursive: bool, limit: asyncio.Semaphore
    ) -> list[str]:
        async with limit:
            entries = await self.filesystem.list_entries(path)

        plan = plan_listing(path, entries, recursive)
        subtrees = await asyncio.gather(
            *(self._walk(child, recursive, limit) for child, descend in plan if descend)
        )

        chunks: list = []
        expanded = iter(subtrees)
        for child, descend in plan:
            chunks.append(next(expanded) if descend else child)
        return flatten(chunks)

    async def create_dir(
        self, path: StrPath, options: Optional[DirectoryOptions] = None
    ) -> FsResult[str]:
        options = resolve_dir_options(options)
        try:
            await self.filesystem.make_dir(path, options.mode, options.recursive)
        except OSError as e:
            return failed("Failed to create directory", path, e, creating_dirs=True)
        return FsResult.success(os.fspath(path), os.fspath(path))

    async def remove_dir(self, path: StrPath) -> FsResult[str]:
        if not await self.dir_exists(path):
            return missing("Can't remove directory", path)

        try:
            await self.filesystem.rmtree(path)
        except OSError as e:
            return failed("Failed to remove directory", path, e)

        logger.info("Directory removed", path=os.fspath(path))
        return FsResult.success(os.fspath(path), os.fspath(path))

    async def copy_dir(
        self,
        src: StrPath,
        dest: StrPath,
        options: Optional[DirectoryCopyOptions] = None,
        *,
        force: Optional[bool] = None,
        max_concurrency: Optional[int] = None,
    ) -> FsResult[DirectoryCopyReport]:
        """Copy every file below src to the same relative path below dest.

        All file copies are scheduled at once and awaited together, with at
        most ``max_concurrency`` running at any moment. A failing file does
        not cancel its siblings and nothing is rolled back.

        Args:
            src: Source directory
            dest: Destination directory
            options: Copy options; keyword arguments override them
            force: Copy even if dest exists, overwriting existing files
            max_concurrency: Cap on concurrent listing and copy calls for
                this call

        Returns:
            Result holding a DirectoryCopyReport
        """
        options = resolve_dir_copy_options(options, force, max_concurrency)
        if options.max_concurrency is None and self.max_concurrency is not None:
            options = resolve_dir_copy_options(
                options, None, self.max_concurrency
            )
        limit = asyncio.Semaphore(concurrency_limit(options))

        with tracer.start_as_current_span("micro_fs.copy_dir") as span:
            span.set_attribute("micro_fs.src", os.fspath(src))
            span.set_attribute("micro_fs.dest", os.fspath(dest))

            if not options.force and await self.dir_exists(dest):
                return guarded(dest, "directory")
            if not await self.dir_exists(src):
                return missing("Can't copy directory", src)

            listing = await self._read_dir(src, True, limit)
            if not listing.ok:
                return FsResult.failure(
                    listing.status, listing.path, listing.error or "listing failed"
                )

            files = listing.value or []
            targets = [destination_for(file, src, dest) for file in files]

            async def copy_one(file: str, target: str) -> FsResult[str]:
                async with limit:
                    return await self.copy_file(file, target, force=options.force)

            results = await asyncio.gather(
                *(copy_one(file, target) for file, target in zip(files, targets))
            )
            span.set_attribute("micro_fs.files", len(files))
            return copy_dir_result(src, dest, zip(files, targets, results))


_operations = AsyncFileOperations()

file_exists = _operations.file_exists
dir_exists = _operations.dir_exists
create_file = _operations.create_file
write_file = _operations.write_file
read_file = _operations.read_file
remove_file = _operations.remove_file
copy_file = _operations.copy_file
read_dir = _operations.read_dir
create_dir = _operations.create_dir
remove_dir = _operations.remove_dir
copy_dir = _operations.copy_dir
