"""
Tests for the command-line interface.
"""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, Mock, patch

import pytest
from typer.testing import CliRunner

from ignis import Ignis, __version__
from ignis.core.exceptions import InvalidArgumentError
from ignis.main import cli, load_application, run_application


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Importable module defining an app and a factory."""
    (tmp_path / "cli_sample_app.py").write_text(
        "from unittest.mock import Mock\n"
        "from ignis import Ignis\n"
        "\n"
        "app = Ignis(root=Mock())\n"
        "\n"
        "def create():\n"
        "    return Ignis(root=Mock())\n"
        "\n"
        "not_an_app = 42\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_sample_app"


class TestMainCLI:
    """Test cases for CLI commands."""

    def setup_method(self) -> None:
        self.runner = CliRunner()

    def test_version(self) -> None:
        result = self.runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_validate_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test validating a file whose variables are set."""
        monkeypatch.setenv("CLI_DB_HOST", "localhost")
        path = tmp_path / "config.yaml"
        path.write_text("database:\n  host: $CLI_DB_HOST\nname: demo\n")

        result = self.runner.invoke(cli, ["validate-config", str(path)])

        assert result.exit_code == 0
        assert "is valid" in result.output
        assert "database" in result.output

    def test_validate_config_missing_envar(self, tmp_path: Path,
                                           monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that unresolvable variables fail validation."""
        monkeypatch.delenv("CLI_MISSING_VAR", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("secret: $CLI_MISSING_VAR\n")

        result = self.runner.invoke(cli, ["validate-config", str(path)])

        assert result.exit_code == 1
        assert "CLI_MISSING_VAR" in result.output

    def test_validate_config_reports_every_missing_envar(
            self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that all unset variables are listed, not just the first."""
        for name in ("CLI_MISSING_A", "CLI_MISSING_B"):
            monkeypatch.delenv(name, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(
            "database:\n"
            "  user: $CLI_MISSING_A\n"
            "  password: $CLI_MISSING_B\n"
            "hosts: [$CLI_MISSING_A]\n"
        )

        result = self.runner.invoke(cli, ["validate-config", str(path)])

        assert result.exit_code == 1
        assert "CLI_MISSING_A, CLI_MISSING_B" in result.output

    @patch("ignis.main.setup_logging")
    @patch("ignis.main.asyncio.run")
    def test_run(self, mock_run: Mock, mock_setup_logging: Mock, app_module: str) -> None:
        """Test that run loads the app and starts it."""
        mock_run.side_effect = lambda coro: coro.close()

        result = self.runner.invoke(cli, ["run", f"{app_module}:app", "--port", "8123"])

        assert result.exit_code == 0
        mock_setup_logging.assert_called_once()
        mock_run.assert_called_once()

    @patch("ignis.main.setup_logging")
    @patch("ignis.main.asyncio.run")
    def test_run_applies_config_file(self, mock_run: Mock, mock_setup_logging: Mock,
                                     app_module: str, tmp_path: Path) -> None:
        """Test that --config is applied to the app before starting."""
        mock_run.side_effect = lambda coro: coro.close()
        path = tmp_path / "app.json"
        path.write_text('{"feature": {"enabled": true}}')

        result = self.runner.invoke(cli, ["run", f"{app_module}:app", "-c", str(path)])

        assert result.exit_code == 0
        module = __import__(app_module)
        assert module.app.config("feature.enabled") is True

    @patch("ignis.main.setup_logging")
    def test_run_unknown_target(self, mock_setup_logging: Mock, app_module: str) -> None:
        result = self.runner.invoke(cli, ["run", f"{app_module}:not_an_app"])

        assert result.exit_code == 1
        assert "not an Ignis application" in result.output

    @patch("ignis.main.setup_logging")
    @patch("ignis.main.asyncio.run")
    def test_run_startup_failure(self, mock_run: Mock, mock_setup_logging: Mock,
                                 app_module: str) -> None:
        """Test that a failed startup exits non-zero."""
        def fail(coro: Any) -> None:
            coro.close()
            raise RuntimeError("bind failed")

        mock_run.side_effect = fail

        result = self.runner.invoke(cli, ["run", f"{app_module}:app"])

        assert result.exit_code == 1


class TestLoadApplication:
    """Test cases for resolving the run target."""

    def test_instance(self, app_module: str) -> None:
        app = load_application(f"{app_module}:app")
        assert isinstance(app, Ignis)

    def test_default_attribute(self, app_module: str) -> None:
        assert load_application(app_module) is load_application(f"{app_module}:app")

    def test_factory(self, app_module: str) -> None:
        app = load_application(f"{app_module}:create")
        assert isinstance(app, Ignis)

    def test_missing_attribute(self, app_module: str) -> None:
        with pytest.raises(InvalidArgumentError):
            load_application(f"{app_module}:missing")


class TestRunApplication:
    """Test cases for the serve loop."""

    @pytest.mark.asyncio
    async def test_listens_then_waits_for_close(self, app: Ignis) -> None:
        app.root.listen = Mock(side_effect=lambda port, cb: cb(None))
        app.root.wait_closed = AsyncMock()

        await run_application(app, 8080)

        app.root.listen.assert_called_once()
        assert app.root.listen.call_args.args[0] == 8080
        app.root.wait_closed.assert_awaited_once()
