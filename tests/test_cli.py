from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from core.config import APP_VERSION

from conftest import RecordingRunner

cli = CliRunner()


@pytest.fixture
def host(monkeypatch, tmp_path):
    """Point the log at tmp_path and swap the host command runner for a recorder."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SYSREBOOT_LOG_DIR", str(tmp_path))
    monkeypatch.delenv("SYSREBOOT_DRY_RUN", raising=False)
    recorder = RecordingRunner()
    monkeypatch.setattr(cli_main, "_build_runner", lambda dry_run: recorder)
    monkeypatch.setattr(cli_main, "_host_platform", lambda: "linux")
    recorder.log_file = tmp_path / "sysreboot.log"
    return recorder


def _log(host) -> str:
    return host.log_file.read_text(encoding="utf-8")


def test_version(host):
    result = cli.invoke(cli_main.app, ["--version"])
    assert result.exit_code == 0
    assert f"sysreboot version {APP_VERSION}" in result.stdout
    assert host.calls == []


def test_default_action_is_reboot(host):
    result = cli.invoke(cli_main.app, [])
    assert result.exit_code == 0
    assert host.calls == [["systemctl", "reboot"]]
    assert "reboot action executed successfully." in _log(host)


@pytest.mark.parametrize("args", [["--halt", "--poweroff"], ["-h", "-p"], ["-h", "-s", "-r"]])
def test_halt_precedence(host, args):
    result = cli.invoke(cli_main.app, args)
    assert result.exit_code == 0
    assert host.calls == [["systemctl", "halt"]]


@pytest.mark.parametrize("args", [["--shutdown"], ["-s"], ["--poweroff"], ["-p"]])
def test_poweroff_spellings(host, args):
    cli.invoke(cli_main.app, args)
    assert host.calls == [["systemctl", "poweroff"]]


def test_unknown_option_is_usage_error(host):
    result = cli.invoke(cli_main.app, ["--bogus"])
    assert result.exit_code != 0
    assert host.calls == []


def test_invalid_time_exits_non_zero(host):
    result = cli.invoke(cli_main.app, ["--time", "25:61", "--message", "bye"])
    assert result.exit_code == 1
    assert host.calls == []
    assert "Error scheduling action" in _log(host)


def test_negative_delay_rejected(host):
    result = cli.invoke(cli_main.app, ["--delay", "-1"])
    assert result.exit_code != 0
    assert host.calls == []


def test_confirm_denied(host):
    result = cli.invoke(cli_main.app, ["--reboot", "--confirm", "--message", "bye"], input="n\n")
    assert result.exit_code == 0
    assert "Are you sure you want to proceed with the action? (y/n)" in result.stdout
    assert "Action cancelled." in result.stdout
    assert host.calls == []
    assert "Action cancelled by user." in _log(host)


def test_confirm_timeout_short_form(host):
    result = cli.invoke(cli_main.app, ["--poweroff", "-c", "-ct", "1"])
    assert result.exit_code == 0
    assert "Confirmation timer expired, proceeding with action." in result.stdout
    assert host.calls == [["systemctl", "poweroff"]]


def test_message_is_broadcast_first(host):
    result = cli.invoke(cli_main.app, ["-m", "bye"])
    assert result.exit_code == 0
    assert host.calls == [["wall", "bye"], ["systemctl", "reboot"]]


def test_verbose_logs_detail(host):
    cli.invoke(cli_main.app, ["-vb"])
    assert "Executing reboot action." in _log(host)


def test_quiet_run_skips_detail(host):
    cli.invoke(cli_main.app, [])
    assert "Executing reboot action." not in _log(host)


def test_failed_command_keeps_exit_zero(host):
    host.fail_on = "systemctl"
    result = cli.invoke(cli_main.app, [])
    assert result.exit_code == 0
    assert "Failed to execute reboot" in _log(host)


def test_unusable_log_dir_is_fatal(monkeypatch, tmp_path, host):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("SYSREBOOT_LOG_DIR", str(blocker))
    result = cli.invoke(cli_main.app, [])
    assert result.exit_code == 1
    assert host.calls == []


def test_dry_run_never_touches_host(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SYSREBOOT_LOG_DIR", str(tmp_path))
    monkeypatch.setattr(cli_main, "_host_platform", lambda: "linux")

    def _forbidden():
        raise AssertionError("real runner used in dry-run mode")

    monkeypatch.setattr(cli_main, "SubprocessRunner", _forbidden)
    result = cli.invoke(cli_main.app, ["--dry-run", "--poweroff"])
    assert result.exit_code == 0
    log = (tmp_path / "sysreboot.log").read_text(encoding="utf-8")
    assert "[dry-run] would run: systemctl poweroff" in log


def test_malformed_environment_setting_is_reported(host, monkeypatch):
    monkeypatch.setenv("SYSREBOOT_CONFIRM_TIMEOUT_SECONDS", "abc")
    result = cli.invoke(cli_main.app, ["--confirm"])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert host.calls == []


def test_unsupported_broadcast_logged_only_when_verbose(host, monkeypatch):
    monkeypatch.setattr(cli_main, "_host_platform", lambda: "win32")
    cli.invoke(cli_main.app, ["-m", "bye"])
    assert "Wall message feature is not supported on this OS." not in _log(host)

    cli.invoke(cli_main.app, ["-m", "bye", "--verbose"])
    assert "Wall message feature is not supported on this OS." in _log(host)
    assert host.calls == [["shutdown", "/r", "/t", "0"], ["shutdown", "/r", "/t", "0"]]


def test_log_is_appended_across_runs(host):
    cli.invoke(cli_main.app, [])
    cli.invoke(cli_main.app, ["--poweroff"])
    log = _log(host)
    assert log.count("action executed successfully.") == 2
    assert log.index("reboot action executed") < log.index("poweroff action executed")


def test_dev_entrypoint_runs_cli(monkeypatch):
    root_main = Path(__file__).resolve().parents[1] / "main.py"
    spec = importlib.util.spec_from_file_location("sysreboot_dev_main", root_main)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    monkeypatch.setattr(sys, "argv", ["sysreboot", "--version"])
    with pytest.raises(SystemExit) as excinfo:
        module.main()
    assert excinfo.value.code == 0
