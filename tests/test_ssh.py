"""
Tests for ssh-wait polling.
"""

import subprocess
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from shellkit.cli.ssh_cli import app
from shellkit.tools.ssh import WaitTimeoutError, probe, wait_for_host

runner = CliRunner()


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


def test_wait_returns_on_first_success():
    sleeps = []
    attempts = wait_for_host("box", interval=1, check=lambda h, p: True, sleep=sleeps.append)
    assert attempts == 1
    assert sleeps == []


def test_wait_retries_until_reachable():
    """The host is polled at the configured interval until it answers."""
    answers = iter([False, False, True])
    clock = FakeClock()
    seen = []

    attempts = wait_for_host(
        "box",
        interval=2,
        check=lambda h, p: next(answers),
        sleep=clock.sleep,
        clock=clock,
        on_attempt=seen.append,
    )

    assert attempts == 3
    assert seen == [1, 2, 3]
    assert clock.now == 4


def test_wait_times_out():
    clock = FakeClock()
    with pytest.raises(WaitTimeoutError) as excinfo:
        wait_for_host(
            "box",
            interval=1,
            timeout=3,
            check=lambda h, p: False,
            sleep=clock.sleep,
            clock=clock,
        )
    assert excinfo.value.exit_code == 1
    assert clock.now <= 3


def test_probe_uses_batch_mode():
    completed = subprocess.CompletedProcess([], 255, stdout="", stderr="refused")
    with patch("shellkit.core.shell.subprocess.run", return_value=completed) as run:
        assert probe("user@box", port=2222) is False

    argv = run.call_args.args[0]
    assert argv[0] == "ssh"
    assert "BatchMode=yes" in argv
    assert argv[-2:] == ["user@box", "true"]
    assert "2222" in argv


def test_probe_success():
    completed = subprocess.CompletedProcess([], 0, stdout="", stderr="")
    with patch("shellkit.core.shell.subprocess.run", return_value=completed):
        assert probe("box") is True


def test_cli_missing_host_exits_one():
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "Usage" in result.output


def test_cli_reports_reachable():
    with patch("shellkit.cli.ssh_cli.wait_for_host", return_value=2) as wait:
        result = runner.invoke(app, ["box", "--interval", "0.5"])

    assert result.exit_code == 0
    assert "box is up" in result.output
    assert wait.call_args.kwargs["interval"] == 0.5
    assert wait.call_args.kwargs["timeout"] == 0


def test_cli_timeout_exits_one():
    with patch("shellkit.cli.ssh_cli.wait_for_host", side_effect=WaitTimeoutError("box not reachable after 5s")):
        result = runner.invoke(app, ["box", "-t", "5"])
    assert result.exit_code == 1
    assert "not reachable" in result.output


def test_cli_connect_execs_ssh():
    with patch("shellkit.cli.ssh_cli.wait_for_host", return_value=1), \
            patch("shellkit.tools.ssh.os.execvp") as execvp:
        result = runner.invoke(app, ["box", "--connect", "-p", "2200"])

    assert result.exit_code == 0
    execvp.assert_called_once_with("ssh", ["ssh", "-p", "2200", "box"])


def test_cli_interrupt_exits_130():
    with patch("shellkit.cli.ssh_cli.wait_for_host", side_effect=KeyboardInterrupt):
        result = runner.invoke(app, ["box"])
    assert result.exit_code == 130
    assert "is up" not in result.output
