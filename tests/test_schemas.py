"""Tests for operation option schemas."""

import pytest
from pydantic import ValidationError

from micro_fs.core.config import Settings, settings
from micro_fs.schemas import CopyOptions, DirectoryCopyOptions, DirectoryOptions


class TestDirectoryOptions:
    """Test directory creation options."""

    def test_defaults(self):
        """Test defaults are recursive with the configured mode."""
        options = DirectoryOptions()
        assert options.recursive is True
        assert options.mode == settings.default_dir_mode == 0o777

    def test_custom_mode(self):
        """Test a custom mode."""
        assert DirectoryOptions(mode=0o755).mode == 0o755

    def test_mode_out_of_range(self):
        """Test permission bits are validated."""
        with pytest.raises(ValidationError):
            DirectoryOptions(mode=0o17777)

    def test_unknown_field(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            DirectoryOptions(parents=True)


class TestCopyOptions:
    """Test single-file copy options."""

    def test_defaults(self):
        """Test no transform and no force by default."""
        options = CopyOptions()
        assert options.transform is None
        assert options.force is False

    def test_transform(self):
        """Test a callable transform is stored as given."""

        def shout(content):
            return content.upper()

        assert CopyOptions(transform=shout).transform is shout

    def test_non_callable_transform(self):
        """Test a non-callable transform is rejected."""
        with pytest.raises(ValidationError):
            CopyOptions(transform="upper")

    def test_frozen(self):
        """Test options are immutable."""
        with pytest.raises(ValidationError):
            CopyOptions().force = True


class TestDirectoryCopyOptions:
    """Test directory copy options."""

    def test_defaults(self):
        """Test defaults."""
        options = DirectoryCopyOptions()
        assert options.force is False
        assert options.max_concurrency is None

    def test_concurrency_minimum(self):
        """Test concurrency must be positive."""
        with pytest.raises(ValidationError):
            DirectoryCopyOptions(max_concurrency=0)


class TestSettings:
    """Test environment-driven settings."""

    def test_env_prefix(self, monkeypatch):
        """Test settings read MICRO_FS_ variables."""
        monkeypatch.setenv("MICRO_FS_MAX_CONCURRENCY", "4")
        monkeypatch.setenv("MICRO_FS_LOG_LEVEL", "debug")

        configured = Settings()

        assert configured.max_concurrency == 4
        assert configured.log_level == "debug"

    def test_invalid_concurrency(self, monkeypatch):
        """Test a zero concurrency setting is rejected."""
        monkeypatch.setenv("MICRO_FS_MAX_CONCURRENCY", "0")
        with pytest.raises(ValidationError):
            Settings()
