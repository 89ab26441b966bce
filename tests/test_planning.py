"""Tests for the logic shared by the blocking and async operations."""

import errno
import os

import pytest

from micro_fs.backends import Entry
from micro_fs.core.exceptions import ValidationError
from micro_fs.planning import (
    classify,
    copy_dir_result,
    destination_for,
    flatten,
    parent_of,
    plan_listing,
    resolve_copy_options,
    resolve_dir_copy_options,
)
from micro_fs.results import FsResult, Status
from micro_fs.schemas import CopyOptions


class TestDestinationFor:
    """Test mapping source files onto the destination tree."""

    def test_nested_file(self):
        """Test the relative layout is kept."""
        assert destination_for("/src/a/b.txt", "/src", "/dest") == os.path.join(
            "/dest", "a", "b.txt"
        )

    def test_source_name_repeated(self):
        """Test only the root is substituted when its name repeats."""
        assert destination_for("/data/data/data.txt", "/data", "/out") == (
            os.path.join("/out", "data", "data.txt")
        )

    def test_trailing_separator(self):
        """Test a trailing separator on the source root is tolerated."""
        assert destination_for("/src/a.txt", "/src/", "/dest") == os.path.join(
            "/dest", "a.txt"
        )

    def test_file_outside_source(self):
        """Test files outside the source root are rejected."""
        with pytest.raises(ValidationError):
            destination_for("/elsewhere/a.txt", "/src", "/dest")


class TestListingHelpers:
    """Test plan_listing, flatten and parent_of."""

    def test_plan_listing_recursive(self):
        """Test directories are flagged for descent when recursive."""
        entries = [Entry("a.txt", False), Entry("sub", True)]
        assert plan_listing("/root", entries, True) == [
            (os.path.join("/root", "a.txt"), False),
            (os.path.join("/root", "sub"), True),
        ]

    def test_plan_listing_non_recursive(self):
        """Test nothing is flagged without recursion."""
        entries = [Entry("sub", True)]
        assert plan_listing("/root", entries, False) == [
            (os.path.join("/root", "sub"), False)
        ]

    def test_flatten(self):
        """Test nested chunks are spliced in order."""
        assert flatten(["a", ["b", "c"], [], "d"]) == ["a", "b", "c", "d"]

    def test_parent_of(self):
        """Test parents of nested and bare paths."""
        assert parent_of(os.path.join("x", "y.txt")) == "x"
        assert parent_of("y.txt") == os.curdir


class TestClassify:
    """Test mapping host errors to statuses."""

    @pytest.mark.parametrize(
        "exc, status",
        [
            (FileNotFoundError(errno.ENOENT, "missing"), Status.not_found),
            (FileExistsError(errno.EEXIST, "exists"), Status.already_exists),
            (PermissionError(errno.EACCES, "denied"), Status.permission_denied),
            (NotADirectoryError(errno.ENOTDIR, "not dir"), Status.not_found),
            (OSError(errno.ENOSPC, "full"), Status.io_failure),
            (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), Status.io_failure),
        ],
    )
    def test_classify(self, exc, status):
        """Test each error family maps to its status."""
        assert classify(exc) is status

    @pytest.mark.parametrize(
        "exc",
        [
            FileExistsError(errno.EEXIST, "exists"),
            NotADirectoryError(errno.ENOTDIR, "not dir"),
        ],
    )
    def test_file_in_directory_chain(self, exc):
        """Test a file blocking a directory chain is an I/O failure."""
        assert classify(exc, creating_dirs=True) is Status.io_failure

    def test_directory_chain_keeps_other_statuses(self):
        """Test other errors map as usual while building a chain."""
        exc = PermissionError(errno.EACCES, "denied")
        assert classify(exc, creating_dirs=True) is Status.permission_denied


class TestOptionResolution:
    """Test merging keyword arguments over option objects."""

    def test_keywords_override(self):
        """Test keywords win over the options object."""
        options = resolve_copy_options(CopyOptions(force=False), str.upper, True)
        assert options.force is True
        assert options.transform is str.upper

    def test_defaults(self):
        """Test defaults apply when nothing is given."""
        options = resolve_copy_options(None, None, None)
        assert options.force is False
        assert options.transform is None

    def test_invalid_transform(self):
        """Test a non-callable transform is rejected."""
        with pytest.raises(ValidationError):
            resolve_copy_options(None, "not callable", None)

    def test_invalid_concurrency(self):
        """Test a zero concurrency limit is rejected."""
        with pytest.raises(ValidationError):
            resolve_dir_copy_options(None, None, 0)


class TestCopyDirResult:
    """Test folding per-file results into a directory copy result."""

    def test_all_copied(self):
        """Test an all-success fold is ok."""
        result = copy_dir_result(
            "/src",
            "/dest",
            [("/src/a", "/dest/a", FsResult.success("/dest/a", "/dest/a"))],
        )
        assert result.ok
        assert result.value.copied == ["/dest/a"]

    def test_skipped_is_not_failure(self):
        """Test guard hits are reported as skipped without failing."""
        result = copy_dir_result(
            "/src",
            "/dest",
            [
                ("/src/a", "/dest/a", FsResult.success("/dest/a", "/dest/a")),
                (
                    "/src/b",
                    "/dest/b",
                    FsResult.failure(Status.already_exists, "/dest/b", "exists"),
                ),
            ],
        )
        assert result.ok
        assert result.value.skipped == ["/dest/b"]
        assert result.value.file_count == 2

    def test_failure_keeps_report(self):
        """Test a failed file makes the fold fail but keeps the report."""
        result = copy_dir_result(
            "/src",
            "/dest",
            [
                (
                    "/src/a",
                    "/dest/a",
                    FsResult.failure(Status.io_failure, "/src/a", "boom"),
                )
            ],
        )
        assert result.status is Status.io_failure
        assert result.value.failed == {"/src/a": "boom"}
        assert "1 of 1" in result.error

    def test_already_exists_elsewhere_is_failure(self):
        """Test an already_exists result for another path is not a skip."""
        result = copy_dir_result(
            "/src",
            "/dest",
            [
                (
                    "/src/a",
                    "/dest/a",
                    FsResult.failure(Status.already_exists, "/dest", "exists"),
                )
            ],
        )
        assert result.status is Status.io_failure
        assert result.value.skipped == []
        assert result.value.failed == {"/src/a": "exists"}
