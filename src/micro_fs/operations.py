"""Blocking filesystem operations.

Each call runs to completion on the calling thread; directory copies handle
one file at a time. The non-blocking twins live in ``micro_fs.aio``.
"""

import inspect
import os
import stat
from typing import Optional

from micro_fs.backends import FileSystem, LocalFileSystem, StrPath
from micro_fs.core import get_logger, get_tracer
from micro_fs.core.config import settings
from micro_fs.core.exceptions import ValidationError
from micro_fs.planning import (
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


class FileOperations:
    """File and directory helpers over a blocking FileSystem."""

    def __init__(self, filesystem: Optional[FileSystem] = None):
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()

    def _stat_mode(self, path: StrPath) -> Optional[int]:
        try:
            return self.filesystem.stat(path).st_mode
        except (OSError, ValueError):
            return None

    def file_exists(self, path: StrPath) -> bool:
        """Return True only for an existing regular file. Never raises."""
        mode = self._stat_mode(path)
        return mode is not None and stat.S_ISREG(mode)

    def dir_exists(self, path: StrPath) -> bool:
        """Return True only for an existing directory. Never raises."""
        mode = self._stat_mode(path)
        return mode is not None and stat.S_ISDIR(mode)

    def create_file(
        self,
        path: StrPath,
        content: str = "",
        options: Optional[DirectoryOptions] = None,
    ) -> FsResult[str]:
        """Write content to path, creating parent directories first.

        The parent directory gets ``options.mode`` applied. An existing file
        is overwritten.

        Args:
            path: File to write
            content: Text to write
            options: Directory creation options for the parent chain

        Returns:
            Result holding the written path
        """
        options = resolve_dir_options(options)
        parent = parent_of(path)

        try:
            self.filesystem.make_dir(parent, options.mode, options.recursive)
            # never chmod the working directory for bare file names
            if parent != os.curdir:
                self.filesystem.chmod(parent, options.mode)
        except OSError as e:
            return failed(
                "Failed to create parent directory for", path, e, creating_dirs=True
            )

        try:
            self.filesystem.write_text(path, content, settings.encoding)
        except OSError as e:
            return failed("Failed to write file", path, e)

        logger.info("File written", path=os.fspath(path), length=len(content))
        return FsResult.success(os.fspath(path), os.fspath(path))

    write_file = create_file

    def read_file(self, path: StrPath) -> FsResult[str]:
        """Read and decode a file."""
        try:
            content = self.filesystem.read_text(path, settings.encoding)
        except (OSError, UnicodeDecodeError) as e:
            return failed("Failed to read file", path, e)
        return FsResult.success(os.fspath(path), content)

    def remove_file(self, path: StrPath) -> FsResult[str]:
        """Delete a file; a missing file is reported, not deleted."""
        if not self.file_exists(path):
            return missing("Can't remove file", path)

        try:
            self.filesystem.unlink(path)
        except OSError as e:
            return failed("Failed to remove file", path, e)

        logger.info("File removed", path=os.fspath(path))
        return FsResult.success(os.fspath(path), os.fspath(path))

    def copy_file(
        self,
        src: StrPath,
        dest: StrPath,
        options: Optional[CopyOptions] = None,
        *,
        transform: Optional[ContentTransform] = None,
        force: Optional[bool] = None,
    ) -> FsResult[str]:
        """Copy a file, optionally rewriting its content on the way.

        Without ``force`` an existing destination is left untouched and the
        result is ``already_exists``. With a transform the source is read as
        text, passed to the transform once, and the returned text written to
        dest; otherwise the bytes are copied as-is.

        Args:
            src: File to copy
            dest: Destination file path (not a directory)
            options: Copy options; keyword arguments override them
            transform: Function rewriting the file content
            force: Overwrite an existing destination

        Returns:
            Result holding the destination path

        Raises:
            ValidationError: If the transform returns an awaitable
        """
        options = resolve_copy_options(options, transform, force)

        if not options.force and self.file_exists(dest):
            return guarded(dest, "file")

        if options.transform is not None:
            try:
                content = self.filesystem.read_text(src, settings.encoding)
            except (OSError, UnicodeDecodeError) as e:
                return failed("Failed to read copy source", src, e)

            rewritten = options.transform(content)
            if inspect.isawaitable(rewritten):
                if inspect.iscoroutine(rewritten):
                    rewritten.close()
                raise ValidationError(
                    "Asynchronous transforms need the async copy_file from micro_fs.aio"
                )

            result = self.create_file(dest, rewritten)
            if result.ok:
                logger.info(
                    "File copied",
                    src=os.fspath(src),
                    dest=os.fspath(dest),
                    transformed=True,
                )
            return result

        try:
            self.filesystem.make_dir(
                parent_of(dest), settings.default_dir_mode, parents=True
            )
        except OSError as e:
            return failed(
                "Failed to create parent directory for", dest, e, creating_dirs=True
            )

        try:
            self.filesystem.copy_file(src, dest)
        except OSError as e:
            return failed(f"Failed to copy file to '{os.fspath(dest)}' from", src, e)

        logger.info("File copied", src=os.fspath(src), dest=os.fspath(dest))
        return FsResult.success(os.fspath(dest), os.fspath(dest))

    def read_dir(self, path: StrPath, recursive: bool = True) -> FsResult[list[str]]:
        """List the files below a directory as a flat list of paths.

        With ``recursive`` subdirectories are expanded in place; without it
        they appear as entries of their own. Order follows the host's
        directory enumeration. Symlink cycles are not detected.
        """
        with tracer.start_as_current_span("micro_fs.read_dir") as span:
            span.set_attribute("micro_fs.path", os.fspath(path))
            try:
                files = self._walk(path, recursive)
            except OSError as e:
                return failed("Failed to read directory", path, e)
            span.set_attribute("micro_fs.entries", len(files))
            return FsResult.success(os.fspath(path), files)

    def _walk(self, path: StrPath, recursive: bool) -> list[str]:
        chunks: list = []
        entries = self.filesystem.list_entries(path)
        for child, descend in plan_listing(path, entries, recursive):
            chunks.append(self._walk(child, recursive) if descend else child)
        return flatten(chunks)

    def create_dir(
        self, path: StrPath, options: Optional[DirectoryOptions] = None
    ) -> FsResult[str]:
        """Create a directory chain; an existing directory is fine."""
        options = resolve_dir_options(options)
        try:
            self.filesystem.make_dir(path, options.mode, options.recursive)
        except OSError as e:
            return failed("Failed to create directory", path, e, creating_dirs=True)
        return FsResult.success(os.fspath(path), os.fspath(path))

    def remove_dir(self, path: StrPath) -> FsResult[str]:
        """Delete a directory and everything in it."""
        if not self.dir_exists(path):
            return missing("Can't remove directory", path)

        try:
            self.filesystem.rmtree(path)
        except OSError as e:
            return failed("Failed to remove directory", path, e)

        logger.info("Directory removed", path=os.fspath(path))
        return FsResult.success(os.fspath(path), os.fspath(path))

    def copy_dir(
        self,
        src: StrPath,
        dest: StrPath,
        options: Optional[DirectoryCopyOptions] = None,
        *,
        force: Optional[bool] = None,
    ) -> FsResult[DirectoryCopyReport]:
        """Copy every file below src to the same relative path below dest.

        Files are copied one at a time. Empty directories are not recreated.
        Nothing is rolled back when a file fails.

        Args:
            src: Source directory
            dest: Destination directory
            options: Copy options; keyword arguments override them
            force: Copy even if dest exists, overwriting existing files

        Returns:
            Result holding a DirectoryCopyReport
        """
        options = resolve_dir_copy_options(options, force)

        with tracer.start_as_current_span("micro_fs.copy_dir") as span:
            span.set_attribute("micro_fs.src", os.fspath(src))
            span.set_attribute("micro_fs.dest", os.fspath(dest))

            if not options.force and self.dir_exists(dest):
                return guarded(dest, "directory")
            if not self.dir_exists(src):
                return missing("Can't copy directory", src)

            listing = self.read_dir(src)
            if not listing.ok:
                return FsResult.failure(
                    listing.status, listing.path, listing.error or "listing failed"
                )

            outcomes = []
            for file in listing.value or []:
                target = destination_for(file, src, dest)
                outcomes.append(
                    (file, target, self.copy_file(file, target, force=options.force))
                )
            return copy_dir_result(src, dest, outcomes)


_operations = FileOperations()

file_exists_sync = _operations.file_exists
dir_exists_sync = _operations.dir_exists
create_file_sync = _operations.create_file
write_file_sync = _operations.write_file
read_file_sync = _operations.read_file
remove_file_sync = _operations.remove_file
copy_file_sync = _operations.copy_file
read_dir_sync = _operations.read_dir
create_dir_sync = _operations.create_dir
remove_dir_sync = _operations.remove_dir
copy_dir_sync = _operations.copy_dir
