"""Tests for the launcher and the stremio-rewired CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from stremio_rewired.cli import app
from stremio_rewired.launch import inspector_url, launch


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.mark.unit
class TestLaunch:
    def test_inspector_url(self):
        assert inspector_url(3000) == (
            "https://staging.strem.io/#?addonOpen=http%3A%2F%2Flocalhost%3A3000%2Fmanifest.json"
        )

    def test_launch_opens_browser(self):
        with patch("stremio_rewired.launch.webbrowser.open") as mock_open:
            url = launch(7000, "https://web.example")
        mock_open.assert_called_once_with(url)
        assert url.startswith("https://web.example/#?addonOpen=")


@pytest.mark.unit
class TestCli:
    def test_launch_command(self, cli_runner):
        with patch("stremio_rewired.launch.webbrowser.open") as mock_open:
            result = cli_runner.invoke(app, ["launch", "--port", "7000"])
        assert result.exit_code == 0
        assert "localhost%3A7000" in result.output
        mock_open.assert_called_once()

    def test_launch_default_port(self, cli_runner):
        with patch("stremio_rewired.launch.webbrowser.open"):
            result = cli_runner.invoke(app, ["launch"])
        assert "localhost%3A3000" in result.output

    def test_launch_invalid_port(self, cli_runner):
        with patch("stremio_rewired.launch.webbrowser.open") as mock_open:
            result = cli_runner.invoke(app, ["launch", "-p", "abc"])
        assert result.exit_code != 0
        mock_open.assert_not_called()

    def test_unknown_command(self, cli_runner):
        result = cli_runner.invoke(app, ["deploy"])
        assert result.exit_code != 0

    def test_serve(self, cli_runner):
        with (
            patch("stremio_rewired.cli.uvicorn.run") as mock_run,
            patch("stremio_rewired.launch.webbrowser.open") as mock_open,
        ):
            result = cli_runner.invoke(app, ["serve", "unity_addon.main:app", "--port", "7001", "--launch"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args == ("unity_addon.main:app",)
        assert kwargs["port"] == 7001
        mock_open.assert_called_once()
