"""Unit tests for CLI commands."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from allyhub import __version__
from allyhub.cli import cli

FAST_TICKS = {"ALLYHUB_TIMER__TICK_INTERVAL_SECONDS": "0.01"}


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


class TestMainGroup:
    """Tests for the top-level group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("timer", "tasks", "notify", "config"):
            assert command in result.output

    def test_config_option_loads_file(self, runner, tmp_path):
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("timer:\n  total_duration_seconds: 90\n")

        result = runner.invoke(cli, ["--config", str(config_path), "config", "show"])

        assert result.exit_code == 0
        assert "00:01:30" in result.output


class TestTimerCommands:
    """Tests for timer commands."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [("3661", "01:01:01"), ("61", "00:01:01"), ("0", "00:00:00"), ("-5", "00:00:00")],
    )
    def test_format(self, runner, seconds, expected):
        result = runner.invoke(cli, ["timer", "format", "--", seconds])

        assert result.exit_code == 0
        assert expected in result.output

    def test_run_counts_down_to_completion(self, runner):
        with patch("allyhub.app.NotificationService") as mock_service_class:
            result = runner.invoke(cli, ["timer", "run", "--duration", "2"], env=FAST_TICKS)

        assert result.exit_code == 0, result.output
        assert "Timer completed" in result.output
        mock_service_class.return_value.notify_timer_completed.assert_called_once()

    def test_run_no_notify_disables_alerts(self, runner):
        with patch("allyhub.app.NotificationService") as mock_service_class:
            result = runner.invoke(
                cli, ["timer", "run", "--duration", "1", "--no-notify"], env=FAST_TICKS
            )

        assert result.exit_code == 0, result.output
        notification_config = mock_service_class.call_args[0][0]
        assert notification_config.enabled is False

    def test_run_rejects_zero_duration(self, runner):
        result = runner.invoke(cli, ["timer", "run", "--duration", "0"])

        assert result.exit_code != 0


class TestTaskCommands:
    """Tests for task commands."""

    def test_list_shows_seed(self, runner):
        result = runner.invoke(cli, ["tasks", "list"])

        assert result.exit_code == 0
        for title in ("Email triage", "Spec doc review", "Prototype create", "Break"):
            assert title in result.output
        assert "Email triage (0/4 done)" in result.output

    def test_list_empty_seed(self, runner, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("tasks:\n  seed_titles: []\n")

        result = runner.invoke(cli, ["--config", str(config_path), "tasks", "list"])

        assert result.exit_code == 0
        assert "No tasks available" in result.output


class TestNotifyCommand:
    """Tests for the notify command."""

    def test_notify_sent(self, runner):
        with patch("allyhub.services.notification_service.NotificationService.send", return_value=True):
            result = runner.invoke(cli, ["notify", "Hello"])

        assert result.exit_code == 0
        assert "Notification sent" in result.output

    def test_notify_sends_info_with_title(self, runner):
        with patch(
            "allyhub.services.notification_service.NotificationService.notify_info",
            return_value=True,
        ) as mock_notify:
            result = runner.invoke(cli, ["notify", "Stretch", "--title", "Break"])

        assert result.exit_code == 0
        mock_notify.assert_called_once_with("Break", "Stretch")

    def test_notify_not_sent(self, runner):
        with patch("allyhub.services.notification_service.NotificationService.send", return_value=False):
            result = runner.invoke(cli, ["notify", "Hello", "--title", "Test"])

        assert result.exit_code == 0
        assert "not sent" in result.output


class TestConfigCommands:
    """Tests for config commands."""

    def test_show(self, runner):
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "Timer" in result.output
        assert "01:00:00" in result.output

    def test_path_without_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "path"])

        assert result.exit_code == 0
        assert "No config.yaml found" in result.output

    def test_init_creates_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "init"])
            assert result.exit_code == 0

            result = runner.invoke(cli, ["config", "show"])
            assert "Email triage" in result.output

            result = runner.invoke(cli, ["config", "init"])
            assert "already exists" in result.output

            result = runner.invoke(cli, ["config", "init", "--force"])
            assert "Created" in result.output
