"""Tests for the click command line."""

from datetime import datetime

import pytest
from click.testing import CliRunner

from aivsai.cli.main import cli
from aivsai.session.exporter import SessionExporter
from aivsai.session.models import Session
from aivsai.utils.errors import FileAccessError


@pytest.fixture
def runner(monkeypatch):
    """Create a Click test runner with a wide console so tables don't wrap."""
    monkeypatch.setenv("COLUMNS", "200")
    return CliRunner()


class TestVersion:
    def test_version(self, runner, home):
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "AI vs AI" in result.output


class TestConfigCommand:
    def test_shows_providers_without_keys(self, runner, config_file):
        result = runner.invoke(cli, ["--config", str(config_file), "config"])

        assert result.exit_code == 0
        assert "Moonshot AI" in result.output
        assert "DeepSeek AI" in result.output
        assert "not set" in result.output

    def test_masks_keys(self, runner, config_file, monkeypatch):
        monkeypatch.setenv("MOONSHOT_API_KEY", "sk-abcdefghijklmnop")

        result = runner.invoke(cli, ["--config", str(config_file), "config"])

        assert result.exit_code == 0
        assert "sk-abcdefghijklmnop" not in result.output
        assert "sk-a...mnop" in result.output


class TestConversationsCommand:
    def test_empty(self, runner, config_file):
        result = runner.invoke(cli, ["--config", str(config_file), "conversations"])
        assert result.exit_code == 0
        assert "No saved conversations" in result.output

    def test_lists_exports(self, runner, config_file, conversations_dir):
        session = Session(started_at=datetime(2026, 10, 17, 9, 0, 0))
        session.record_turn("hello", "a", "r")
        session.record_turn("again", "a", "r")
        SessionExporter(conversations_dir).save(
            session, "moonshot-v1-8k", "deepseek-chat", now=datetime(2026, 10, 17, 9, 5, 0)
        )

        result = runner.invoke(cli, ["--config", str(config_file), "conversations"])

        assert result.exit_code == 0
        assert "2026-10-17 09:00" in result.output
        assert "moonshot-v1-8k" in result.output


class TestChatCommand:
    def test_empty_key_aborts_startup(self, runner, config_file):
        result = runner.invoke(cli, ["--config", str(config_file), "chat"], input="\n")

        assert result.exit_code == 78
        assert "cannot be empty" in result.output

    def test_default_command_is_chat(self, runner, config_file):
        result = runner.invoke(cli, ["--config", str(config_file)], input="\n")

        assert result.exit_code == 78
        assert "AI Pair: Moonshot AI (Answer) + DeepSeek AI (Review)" in result.output

    def test_invalid_settings_exit_code(self, runner, home):
        bad = home / "bad.yaml"
        bad.write_text("providers: [unclosed")

        result = runner.invoke(cli, ["--config", str(bad), "chat"])

        assert result.exit_code == 78
        assert "not valid YAML" in result.output

    def test_runs_repl(self, runner, config_file, monkeypatch):
        started = []

        async def fake_repl_main(app):
            started.append(app.config_manager.config_path)

        monkeypatch.setattr("aivsai.cli.commands.chat.repl_main", fake_repl_main)

        result = runner.invoke(cli, ["--config", str(config_file), "chat"])

        assert result.exit_code == 0
        assert started == [config_file]


class TestErrorHandling:
    @pytest.fixture
    def failing_repl(self, monkeypatch):
        def install(exc):
            async def fake_repl_main(app):
                raise exc

            monkeypatch.setattr("aivsai.cli.commands.chat.repl_main", fake_repl_main)

        return install

    def test_interrupt_during_turn_exits_130(self, runner, config_file, failing_repl):
        failing_repl(KeyboardInterrupt())

        result = runner.invoke(cli, ["--config", str(config_file), "chat"])

        assert result.exit_code == 130
        assert "Interrupted" in result.output

    def test_unexpected_error_panel(self, runner, config_file, failing_repl):
        failing_repl(RuntimeError("boom"))

        result = runner.invoke(cli, ["--config", str(config_file), "chat"])

        assert result.exit_code == 1
        assert "AI vs AI Error" in result.output
        assert "Unexpected Error" in result.output
        assert "boom" in result.output
        assert "--debug" in result.output

    def test_application_error_uses_its_exit_code_and_hint(self, runner, config_file, failing_repl):
        failing_repl(FileAccessError("Failed to save conversation: disk full", hint="free some space"))

        result = runner.invoke(cli, ["--config", str(config_file), "chat"])

        assert result.exit_code == 66
        assert "disk full" in result.output
        assert "free some space" in result.output

    def test_debug_logs_traceback(self, runner, config_file, failing_repl, caplog):
        failing_repl(RuntimeError("boom"))

        result = runner.invoke(cli, ["--config", str(config_file), "--debug", "chat"])

        assert result.exit_code == 1
        records = [r for r in caplog.records if r.name == "aivsai.cli.core"]
        assert len(records) == 1
        assert records[0].exc_info is not None
        assert "boom" in records[0].getMessage()

    def test_no_traceback_without_debug(self, runner, config_file, failing_repl, caplog):
        failing_repl(RuntimeError("boom"))

        runner.invoke(cli, ["--config", str(config_file), "chat"])

        assert [r for r in caplog.records if r.name == "aivsai.cli.core"] == []
