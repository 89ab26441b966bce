"""Tests for the micro-fs command line."""

from typer.testing import CliRunner

from micro_fs import __version__
from micro_fs.cli import app

runner = CliRunner()


class TestCli:
    """Test CLI commands against a scratch directory."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_exists(self, temp_dir):
        """Test exists for present and missing files."""
        present = runner.invoke(app, ["exists", str(temp_dir / ".gitkeep")])
        missing = runner.invoke(app, ["exists", str(temp_dir / "nope")])
        directory = runner.invoke(app, ["exists", "--dir", str(temp_dir)])

        assert present.exit_code == 0 and "true" in present.output
        assert missing.exit_code == 1 and "false" in missing.output
        assert directory.exit_code == 0

    def test_write_and_cat(self, temp_dir):
        """Test writing a file and printing it back."""
        path = str(temp_dir / "conf" / "app.json")

        written = runner.invoke(app, ["write", path, '{"debug": true}'])
        shown = runner.invoke(app, ["cat", path])

        assert written.exit_code == 0
        assert shown.exit_code == 0
        assert shown.output == '{"debug": true}'

    def test_cat_missing(self, temp_dir):
        """Test cat on a missing file fails."""
        result = runner.invoke(app, ["cat", str(temp_dir / "missing.txt")])
        assert result.exit_code == 1

    def test_ls(self, sample_tree):
        """Test ls prints one file per line."""
        result = runner.invoke(app, ["ls", str(sample_tree)])

        assert result.exit_code == 0
        assert len(result.output.strip().splitlines()) == 3

    def test_ls_no_recursive(self, sample_tree):
        """Test ls --no-recursive shows directories as entries."""
        result = runner.invoke(app, ["ls", "--no-recursive", str(sample_tree)])

        assert result.exit_code == 0
        assert str(sample_tree / "nested") in result.output.splitlines()

    def test_cp_guard_and_force(self, temp_dir):
        """Test cp refuses to overwrite unless forced."""
        src = temp_dir / "src.txt"
        dest = temp_dir / "dest.txt"
        src.write_text("new")
        dest.write_text("old")

        refused = runner.invoke(app, ["cp", str(src), str(dest)])
        forced = runner.invoke(app, ["cp", "--force", str(src), str(dest)])

        assert refused.exit_code == 1
        assert forced.exit_code == 0
        assert dest.read_text() == "new"

    def test_cp_dir(self, sample_tree, tmp_path):
        """Test cp-dir copies a tree and reports counts."""
        dest = tmp_path / "copy"

        result = runner.invoke(app, ["cp-dir", str(sample_tree), str(dest)])

        assert result.exit_code == 0
        assert "Copied 3 files" in result.output
        assert (dest / "nested" / "b.txt").read_text() == "beta"

    def test_mkdir_and_rm(self, temp_dir):
        """Test mkdir, rm --dir and rm on a missing file."""
        path = temp_dir / "made" / "here"

        assert runner.invoke(app, ["mkdir", str(path)]).exit_code == 0
        assert path.is_dir()
        assert runner.invoke(app, ["rm", "--dir", str(temp_dir / "made")]).exit_code == 0
        assert not path.exists()
        assert runner.invoke(app, ["rm", str(temp_dir / "gone.txt")]).exit_code == 1
