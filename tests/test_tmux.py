"""
Tests for tmux-run.
"""

import subprocess
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from shellkit.cli.tmux_cli import app
from shellkit.core.shell import ToolNotFoundError
from shellkit.tools.tmux import TmuxError, inside_tmux, run_in_window, window_command

runner = CliRunner()

TMUX_ENV = {"TMUX": "/tmp/tmux-1000/default,1234,0"}


def _done(stdout=""):
    return subprocess.CompletedProcess([], 0, stdout=stdout, stderr="")


def _argvs(run):
    return [call.args[0] for call in run.call_args_list]


@pytest.fixture
def in_tmux(monkeypatch):
    monkeypatch.setenv("TMUX", TMUX_ENV["TMUX"])
    monkeypatch.delenv("SHELLKIT_TMUX_COMMAND", raising=False)


@pytest.fixture
def tmux_calls():
    """Every tool is installed; new-window answers with window @7."""
    with patch("shellkit.core.shell.which", return_value="/usr/bin/tool"), \
            patch("shellkit.core.shell.subprocess.run", return_value=_done("@7\n")) as run:
        yield run


def test_inside_tmux():
    assert inside_tmux(TMUX_ENV)
    assert not inside_tmux({})
    assert not inside_tmux({"TMUX": ""})


def test_window_command_defaults():
    assert window_command(["/usr/bin/htop", "-d", "5"], cwd="/srv") == [
        "tmux", "new-window", "-d", "-P", "-F", "#{window_id}",
        "-n", "htop", "-c", "/srv", "--", "/usr/bin/htop", "-d", "5",
    ]


def test_window_command_name():
    cmd = window_command(["make", "test"], name="build", cwd="/src")
    assert cmd[cmd.index("-n") + 1] == "build"


def test_run_selects_new_window(tmux_calls):
    window_id = run_in_window(["make", "test"], env=TMUX_ENV)

    assert window_id == "@7"
    argvs = _argvs(tmux_calls)
    assert argvs[0][:2] == ["tmux", "new-window"]
    assert argvs[1:] == [["tmux", "select-window", "-t", "@7"]]


def test_run_detach_and_hold_target_new_window(tmux_calls):
    """remain-on-exit is set on the new window even when it is not current."""
    run_in_window(["make", "test"], detach=True, hold=True, env=TMUX_ENV)

    argvs = _argvs(tmux_calls)
    assert len(argvs) == 2
    assert argvs[1] == ["tmux", "set-option", "-w", "-t", "@7", "remain-on-exit", "on"]


def test_run_hold_then_select(tmux_calls):
    run_in_window(["make"], hold=True, env=TMUX_ENV)

    argvs = _argvs(tmux_calls)
    assert argvs[1] == ["tmux", "set-option", "-w", "-t", "@7", "remain-on-exit", "on"]
    assert argvs[2] == ["tmux", "select-window", "-t", "@7"]


def test_run_outside_tmux():
    with pytest.raises(TmuxError, match="not inside"):
        run_in_window(["ls"], env={})


def test_run_unknown_command():
    with patch("shellkit.core.shell.which", return_value=None):
        with pytest.raises(TmuxError, match="command not found"):
            run_in_window(["no-such-program"], env=TMUX_ENV)


def test_run_without_tmux_installed():
    with patch("shellkit.core.shell.which", side_effect=lambda tool: None if tool == "tmux" else "/bin/ls"):
        with pytest.raises(ToolNotFoundError, match="tmux"):
            run_in_window(["ls"], env=TMUX_ENV)


def test_run_tmux_failure():
    failed = subprocess.CompletedProcess([], 1, stdout="", stderr="no server running")
    with patch("shellkit.core.shell.which", return_value="/bin/ls"), \
            patch("shellkit.core.shell.subprocess.run", return_value=failed):
        with pytest.raises(TmuxError, match="no server running") as excinfo:
            run_in_window(["ls"], env=TMUX_ENV)
    assert excinfo.value.exit_code == 1


def test_cli_missing_command_exits_one():
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "Usage" in result.output


def test_cli_outside_tmux_exits_one(monkeypatch):
    monkeypatch.delenv("TMUX", raising=False)
    result = runner.invoke(app, ["ls"])
    assert result.exit_code == 1
    assert "not inside a tmux session" in result.output


def test_cli_passes_command_options_through(in_tmux, tmux_calls):
    """Options after COMMAND belong to COMMAND, not to tmux-run."""
    result = runner.invoke(app, ["-n", "logs", "tail", "-n", "50", "-f", "app.log"])

    assert result.exit_code == 0
    argv = _argvs(tmux_calls)[0]
    assert argv[argv.index("-n") + 1] == "logs"
    assert argv[argv.index("--") + 1:] == ["tail", "-n", "50", "-f", "app.log"]


def test_cli_detach_hold(in_tmux, tmux_calls):
    result = runner.invoke(app, ["--detach", "--hold", "top"])

    assert result.exit_code == 0
    argvs = _argvs(tmux_calls)
    assert ["tmux", "select-window", "-t", "@7"] not in argvs
    assert argvs[-1][-5:] == ["-t", "@7", "remain-on-exit", "on"]
