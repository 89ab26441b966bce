"""Command-line interface for micro-fs.

This module exposes the blocking operations as shell commands.

Commands:
    - exists: Check whether a file (or directory) exists
    - cat: Print a file
    - write: Create or overwrite a file
    - rm: Remove a file (or directory)
    - mkdir: Create a directory chain
    - ls: List the files below a directory
    - cp: Copy a file
    - cp-dir: Copy a directory tree

Every command exits with status 1 when the operation does not succeed.
"""

from typing import Annotated, Optional, TypeVar

import typer

from . import __version__
from .core.exceptions import MicroFSError
from .core.observability import setup_logging
from .operations import (
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
)
from .results import FsResult

T = TypeVar("T")

app = typer.Typer(
    name="micro-fs",
    help="Small helpers for everyday file and directory work.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"micro-fs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Log level for diagnostics on stderr"),
    ] = None,
) -> None:
    """
    micro-fs: file and directory helpers.
    """
    if log_level:
        setup_logging(log_level)


ForceOption = Annotated[
    bool,
    typer.Option("--force", "-f", help="Overwrite existing destinations"),
]

DirOption = Annotated[
    bool,
    typer.Option("--dir", "-d", help="Operate on a directory instead of a file"),
]


def _unwrap(result: FsResult[T]) -> T:
    """Return the result value or exit with the failure message."""
    try:
        return result.unwrap()
    except MicroFSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("exists")
def exists_cmd(
    path: Annotated[str, typer.Argument(help="Path to check")],
    directory: DirOption = False,
) -> None:
    """
    Print whether a file (or with --dir, a directory) exists.

    Exits with status 1 when it does not.
    """
    found = dir_exists_sync(path) if directory else file_exists_sync(path)
    typer.echo("true" if found else "false")
    if not found:
        raise typer.Exit(1)


@app.command("cat")
def cat_cmd(path: Annotated[str, typer.Argument(help="File to print")]) -> None:
    """Print the content of a file."""
    typer.echo(_unwrap(read_file_sync(path)), nl=False)


@app.command("write")
def write_cmd(
    path: Annotated[str, typer.Argument(help="File to write")],
    content: Annotated[str, typer.Argument(help="Text to write")] = "",
) -> None:
    """
    Create or overwrite a file, creating parent directories.

    Examples:
        micro-fs write build/.gitkeep
        micro-fs write config/app.json '{"debug": true}'
    """
    typer.echo(f"Wrote {_unwrap(create_file_sync(path, content))}")


@app.command("rm")
def rm_cmd(
    path: Annotated[str, typer.Argument(help="Path to remove")],
    directory: DirOption = False,
) -> None:
    """Remove a file, or with --dir a directory and everything in it."""
    result = remove_dir_sync(path) if directory else remove_file_sync(path)
    typer.echo(f"Removed {_unwrap(result)}")


@app.command("mkdir")
def mkdir_cmd(path: Annotated[str, typer.Argument(help="Directory to create")]) -> None:
    """Create a directory and any missing parents."""
    typer.echo(f"Created {_unwrap(create_dir_sync(path))}")


@app.command("ls")
def ls_cmd(
    path: Annotated[str, typer.Argument(help="Directory to list")],
    recursive: Annotated[
        bool,
        typer.Option(
            "--recursive/--no-recursive", help="Expand subdirectories into files"
        ),
    ] = True,
) -> None:
    """List the files below a directory, one path per line."""
    for entry in _unwrap(read_dir_sync(path, recursive=recursive)):
        typer.echo(entry)


@app.command("cp")
def cp_cmd(
    src: Annotated[str, typer.Argument(help="File to copy")],
    dest: Annotated[str, typer.Argument(help="Destination file path")],
    force: ForceOption = False,
) -> None:
    """
    Copy a file. An existing destination is kept unless --force is given.

    Examples:
        micro-fs cp src/index.ts dist/index.ts
    """
    typer.echo(f"Copied {src} -> {_unwrap(copy_file_sync(src, dest, force=force))}")


@app.command("cp-dir")
def cp_dir_cmd(
    src: Annotated[str, typer.Argument(help="Directory to copy")],
    dest: Annotated[str, typer.Argument(help="Destination directory path")],
    force: ForceOption = False,
) -> None:
    """
    Copy every file below a directory. Empty directories are not copied.

    Examples:
        micro-fs cp-dir src/components dist/components
    """
    result = copy_dir_sync(src, dest, force=force)
    if result.value is not None:
        report = result.value
        typer.echo(
            f"Copied {len(report.copied):,} files, skipped {len(report.skipped):,}, "
            f"failed {len(report.failed):,}"
        )
        for source_file, reason in report.failed.items():
            typer.echo(f"  {source_file}: {reason}", err=True)
    _unwrap(result)


if __name__ == "__main__":
    app()
