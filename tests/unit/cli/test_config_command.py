"""Unit tests for the config command group."""

from pathlib import Path

from cjsmirror.cli.main import app
from cjsmirror.core.config import MirrorConfig, load_config, save_config
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigInit:
    """Tests for config init."""

    def test_writes_defaults(self, tmp_path: Path) -> None:
        """init writes a default config file."""
        path = tmp_path / "mirror.toml"

        result = runner.invoke(app, ["config", "init", "--config", str(path)])

        assert result.exit_code == 0
        assert load_config(path) == MirrorConfig()

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        """init does not overwrite an existing file without --force."""
        path = tmp_path / "mirror.toml"
        path.write_text('source_package = "foo"\n')

        result = runner.invoke(app, ["config", "init", "--config", str(path)])

        assert result.exit_code == 1
        assert path.read_text() == 'source_package = "foo"\n'

    def test_force_overwrites(self, tmp_path: Path) -> None:
        """init --force replaces an existing file."""
        path = tmp_path / "mirror.toml"
        path.write_text('source_package = "foo"\n')

        result = runner.invoke(app, ["config", "init", "--config", str(path), "--force"])

        assert result.exit_code == 0
        assert load_config(path).source_package == "hyperapp"


class TestConfigShow:
    """Tests for config show."""

    def test_shows_file_values(self, tmp_path: Path) -> None:
        """show prints the loaded configuration as TOML."""
        path = save_config(MirrorConfig(source_package="foo"), tmp_path / "mirror.toml")

        result = runner.invoke(app, ["config", "show", "--config", str(path)])

        assert result.exit_code == 0
        assert 'source_package = "foo"' in result.stdout
        assert str(path) in result.stdout

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """show exits 1 for an explicit path that does not exist."""
        result = runner.invoke(app, ["config", "show", "--config", str(tmp_path / "none.toml")])

        assert result.exit_code == 1
