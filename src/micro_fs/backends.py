"""Filesystem capability interfaces and their local implementations.

The copy and listing logic in ``micro_fs.operations`` and ``micro_fs.aio`` is
written against the small ``FileSystem`` / ``AsyncFileSystem`` protocols
below, so the blocking and non-blocking variants share one contract and test
doubles can stand in for the host filesystem.

Backends raise ``OSError`` (and ``UnicodeDecodeError`` on bad text); turning
those into results is the caller's job.
"""

import asyncio
import os
import shutil
from typing import NamedTuple, Protocol, Union, runtime_checkable

import aiofiles
import aiofiles.os

StrPath = Union[str, os.PathLike]


class Entry(NamedTuple):
    """A directory entry as seen by a listing."""

    name: str
    is_dir: bool


def _scan(path: StrPath) -> list[Entry]:
    with os.scandir(path) as entries:
        return [Entry(entry.name, entry.is_dir()) for entry in entries]


def _make_dir(path: StrPath, mode: int, parents: bool) -> None:
    if parents:
        os.makedirs(path, mode=mode, exist_ok=True)
        return
    try:
        os.mkdir(path, mode)
    except FileExistsError:
        if not os.path.isdir(path):
            raise


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for blocking filesystem access."""

    def stat(self, path: StrPath) -> os.stat_result:
        """Stat a path, following symlinks.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        ...

    def read_text(self, path: StrPath, encoding: str) -> str:
        """Read and decode a whole file."""
        ...

    def write_text(self, path: StrPath, content: str, encoding: str) -> None:
        """Write a whole file, replacing any previous content."""
        ...

    def copy_file(self, src: StrPath, dest: StrPath) -> None:
        """Copy file bytes from src to dest."""
        ...

    def list_entries(self, path: StrPath) -> list[Entry]:
        """List the immediate entries of a directory."""
        ...

    def unlink(self, path: StrPath) -> None:
        """Remove a file."""
        ...

    def rmtree(self, path: StrPath) -> None:
        """Remove a directory and everything below it."""
        ...

    def make_dir(self, path: StrPath, mode: int, parents: bool = True) -> None:
        """Create a directory; an existing directory is not an error."""
        ...

    def chmod(self, path: StrPath, mode: int) -> None:
        """Change permission bits of a path."""
        ...


@runtime_checkable
class AsyncFileSystem(Protocol):
    """Protocol for non-blocking filesystem access.

    Same contract as ``FileSystem`` with every method a coroutine.
    """

    async def stat(self, path: StrPath) -> os.stat_result: ...

    async def read_text(self, path: StrPath, encoding: str) -> str: ...

    async def write_text(self, path: StrPath, content: str, encoding: str) -> None: ...

    async def copy_file(self, src: StrPath, dest: StrPath) -> None: ...

    async def list_entries(self, path: StrPath) -> list[Entry]: ...

    async def unlink(self, path: StrPath) -> None: ...

    async def rmtree(self, path: StrPath) -> None: ...

    async def make_dir(self, path: StrPath, mode: int, parents: bool = True) -> None: ...

    async def chmod(self, path: StrPath, mode: int) -> None: ...


class LocalFileSystem:
    """Host filesystem through ``os`` and ``shutil``.

    Satisfies the FileSystem protocol structurally.
    """

    def stat(self, path: StrPath) -> os.stat_result:
        return os.stat(path)

    def read_text(self, path: StrPath, encoding: str) -> str:
        with open(path, "r", encoding=encoding) as f:
            return f.read()

    def write_text(self, path: StrPath, content: str, encoding: str) -> None:
        with open(path, "w", encoding=encoding) as f:
            f.write(content)

    def copy_file(self, src: StrPath, dest: StrPath) -> None:
        shutil.copyfile(src, dest)

    def list_entries(self, path: StrPath) -> list[Entry]:
        return _scan(path)

    def unlink(self, path: StrPath) -> None:
        os.unlink(path)

    def rmtree(self, path: StrPath) -> None:
        shutil.rmtree(path)

    def make_dir(self, path: StrPath, mode: int, parents: bool = True) -> None:
        _make_dir(path, mode, parents)

    def chmod(self, path: StrPath, mode: int) -> None:
        os.chmod(path, mode)


class AsyncLocalFileSystem:
    """Host filesystem through ``aiofiles``.

    File content goes through aiofiles; calls aiofiles does not wrap
    (tree copy/removal, scandir, chmod) run in a worker thread.
    Satisfies the AsyncFileSystem protocol structurally.
    """

    async def stat(self, path: StrPath) -> os.stat_result:
        return await aiofiles.os.stat(path)

    async def read_text(self, path: StrPath, encoding: str) -> str:
        async with aiofiles.open(path, "r", encoding=encoding) as f:
            return await f.read()

    async def write_text(self, path: StrPath, content: str, encoding: str) -> None:
        async with aiofiles.open(path, "w", encoding=encoding) as f:
            await f.write(content)

    async def copy_file(self, src: StrPath, dest: StrPath) -> None:
        await asyncio.to_thread(shutil.copyfile, src, dest)

    async def list_entries(self, path: StrPath) -> list[Entry]:
        return await asyncio.to_thread(_scan, path)

    async def unlink(self, path: StrPath) -> None:
        await aiofiles.os.remove(path)

    async def rmtree(self, path: StrPath) -> None:
        await asyncio.to_thread(shutil.rmtree, path)

    async def make_dir(self, path: StrPath, mode: int, parents: bool = True) -> None:
        await asyncio.to_thread(_make_dir, path, mode, parents)

    async def chmod(self, path: StrPath, mode: int) -> None:
        await asyncio.to_thread(os.chmod, path, mode)
