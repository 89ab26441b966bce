"""Option schemas for micro-fs operations."""

from typing import Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from micro_fs.core import settings

# A transform maps the full decoded text of a source file to the text written
# at the destination. The async operations also accept coroutine functions.
ContentTransform = Callable[[str], Union[str, Awaitable[str]]]


class DirectoryOptions(BaseModel):
    """Options used when creating directories."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    recursive: bool = Field(default=True, description="Create missing parents")
    mode: int = Field(
        default_factory=lambda: settings.default_dir_mode,
        ge=0,
        le=0o7777,
        description="Permission bits applied to created directories",
    )


class CopyOptions(BaseModel):
    """Options for a single-file copy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    transform: Optional[ContentTransform] = Field(
        default=None, description="Rewrite the file content while copying"
    )
    force: bool = Field(
        default=False, description="Overwrite an existing destination file"
    )


class DirectoryCopyOptions(BaseModel):
    """Options for a recursive directory copy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    force: bool = Field(
        default=False, description="Copy into an existing destination directory"
    )
    max_concurrency: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on in-flight file copies (async only)",
    )
