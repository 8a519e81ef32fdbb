"""
Tests for the command-line interface.
"""

from typer.testing import CliRunner

from storefront_assistant.cli import app

runner = CliRunner()


class TestCLI:
    """Offline CLI commands."""

    def test_commands(self):
        result = runner.invoke(app, ["commands"])
        assert result.exit_code == 0
        assert "show_cart" in result.output
        assert "sort_and_filter" in result.output

    def test_ask_offline(self):
        result = runner.invoke(app, ["ask", "sort by price descending"])
        assert result.exit_code == 0
        assert "Sorting products by price high to low." in result.output
        assert "Sorted by price" in result.output

    def test_ask_unknown(self):
        result = runner.invoke(app, ["ask", "tell me a joke"])
        assert result.exit_code == 0
        assert "I didn't understand" in result.output

    def test_listen_missing_file(self, tmp_path):
        result = runner.invoke(app, ["listen", str(tmp_path / "missing.webm")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "gtts" in result.output
        assert "vosk" in result.output

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "commands"])
        assert result.exit_code == 1

    def test_info_unreachable_server(self):
        result = runner.invoke(app, ["info", "--server", "http://127.0.0.1:9"])
        assert result.exit_code == 1
        assert "Error" in result.output
