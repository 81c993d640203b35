"""
Tests for the setup wizard command line entry point.
"""

import logging
from unittest.mock import patch

import pytest
import requests
from requests.exceptions import ConnectionError

from setup_wizard.main import STEPS, main, run, split_argv


class TestSplitArgv:
    """Test cases for split_argv."""

    def test_split_at_separator(self):
        assert split_argv(["--step", "telegram-auth", "--", "--token", "x"]) == (
            ["--step", "telegram-auth"],
            ["--token", "x"],
        )

    def test_only_first_separator_splits(self):
        assert split_argv(["--step", "s", "--", "a", "--", "b"]) == (
            ["--step", "s"],
            ["a", "--", "b"],
        )

    def test_without_separator(self):
        assert split_argv(["--step", "s"]) == (["--step", "s"], [])


@pytest.mark.usefixtures("restore_logging_manager")
class TestRun:
    """Test cases for run()."""

    def test_registered_steps(self):
        assert "telegram-auth" in STEPS

    def test_success(self, project_root, reporter, make_response, bot_payload):
        with patch.object(requests.Session, "get", return_value=make_response(bot_payload)):
            code = run(
                ["--step", "telegram-auth", "--project-root", str(project_root), "--", "--token", "1:abc"],
                reporter=reporter,
            )

        assert code == 0
        assert reporter.last.fields["BOT_USERNAME"] == "mybot"
        assert (project_root / ".env").read_text(encoding="utf-8") == (
            "TELEGRAM_BOT_TOKEN=1:abc\nTELEGRAM_ONLY=true\n"
        )
        assert (project_root / "data" / "env" / "env").exists()

    def test_missing_token_exit_code(self, project_root, reporter):
        with patch.object(requests.Session, "get") as mock_get:
            code = run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        assert code == 1
        assert reporter.last.error == "No --token provided"
        mock_get.assert_not_called()

    def test_network_failure_exit_code(self, project_root, reporter):
        with patch.object(requests.Session, "get", side_effect=ConnectionError("down")):
            code = run(
                ["--step", "telegram-auth", "--project-root", str(project_root), "--", "--token", "1:abc"],
                reporter=reporter,
            )

        assert code == 1
        assert reporter.last.error == "Cannot reach Telegram API: down"

    def test_step_args_without_separator(self, project_root, reporter, make_response, bot_payload):
        with patch.object(requests.Session, "get", return_value=make_response(bot_payload)):
            code = run(
                [
                    "--step", "telegram-auth",
                    "--project-root", str(project_root),
                    "--token", "1:abc",
                    "--no-telegram-only",
                ],
                reporter=reporter,
            )

        assert code == 0
        assert reporter.last.fields["TELEGRAM_ONLY"] is False

    def test_settings_file_is_used(self, project_root, reporter, make_response, bot_payload):
        (project_root / "setup.yaml").write_text(
            "telegram:\n  api_base_url: http://127.0.0.1:8081\n  request_timeout: 2\n",
            encoding="utf-8",
        )

        with patch.object(requests.Session, "get", return_value=make_response(bot_payload)) as mock_get:
            run(
                ["--step", "telegram-auth", "--project-root", str(project_root), "--", "--token", "t"],
                reporter=reporter,
            )

        mock_get.assert_called_once_with("http://127.0.0.1:8081/bott/getMe", timeout=2.0)

    def test_configuration_error(self, project_root, reporter, capsys):
        (project_root / "setup.yaml").write_text("telegram: [broken", encoding="utf-8")

        code = run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        assert code == 1
        assert reporter.results == []
        assert "Configuration error" in capsys.readouterr().err

    def test_failed_run_leaves_project_root_untouched(self, project_root, reporter):
        run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        assert reporter.last.error == "No --token provided"
        assert list(project_root.iterdir()) == []

    def test_successful_run_writes_no_log_files_by_default(
        self, project_root, reporter, make_response, bot_payload
    ):
        with patch.object(requests.Session, "get", return_value=make_response(bot_payload)):
            run(
                ["--step", "telegram-auth", "--project-root", str(project_root), "--", "--token", "1:abc"],
                reporter=reporter,
            )

        assert sorted(p.name for p in project_root.iterdir()) == [".env", "data"]

    def test_configured_log_dir_receives_logs(self, project_root, reporter):
        (project_root / "setup.yaml").write_text("logging:\n  dir: var/log\n", encoding="utf-8")

        run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        assert (project_root / "var" / "log" / "setup_wizard.log").exists()

    def test_empty_log_dir_setting_means_console_only(self, project_root, reporter):
        (project_root / "setup.yaml").write_text("logging:\n  dir:\n", encoding="utf-8")

        code = run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        assert code == 1
        assert reporter.last.error == "No --token provided"
        assert [p.name for p in project_root.iterdir()] == ["setup.yaml"]

    def test_configured_log_level_applies_to_console(self, project_root, reporter):
        (project_root / "setup.yaml").write_text("logging:\n  level: warning\n", encoding="utf-8")

        run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        root_logger = logging.getLogger("setup_wizard")
        assert root_logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in root_logger.handlers)

    @pytest.mark.parametrize(
        "settings",
        [
            "telegram: x\n",
            "logging:\n  dir: 5\n",
            "env:\n  file:\n",
        ],
    )
    def test_bad_settings_return_configuration_error(self, project_root, reporter, capsys, settings):
        (project_root / "setup.yaml").write_text(settings, encoding="utf-8")

        code = run(["--step", "telegram-auth", "--project-root", str(project_root)], reporter=reporter)

        assert code == 1
        assert reporter.results == []
        assert "Configuration error" in capsys.readouterr().err

    def test_file_error_exit_code(self, project_root, reporter, make_response, bot_payload):
        (project_root / ".env").mkdir()

        with patch.object(requests.Session, "get", return_value=make_response(bot_payload)):
            code = run(
                ["--step", "telegram-auth", "--project-root", str(project_root), "--", "--token", "t"],
                reporter=reporter,
            )

        assert code == 1
        assert reporter.results == []

    def test_unknown_step(self, project_root):
        with pytest.raises(SystemExit) as exc_info:
            run(["--step", "nope", "--project-root", str(project_root)])

        assert exc_info.value.code == 2


def test_main_exits_with_step_code(project_root, capsys, restore_logging_manager):
    argv = ["setup-wizard", "--step", "telegram-auth", "--project-root", str(project_root)]

    with patch("sys.argv", argv), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "=== SETUP: AUTH_TELEGRAM ===" in out
    assert "STATUS: failed" in out
    assert "ERROR: No --token provided" in out
