"""Tests for shell command runners."""
import logging

import pytest

from cached_externals.api.exceptions import CommandError
from cached_externals.core.runner import LocalRunner, SSHRunner


class TestLocalRunner:
    """Commands run through the local shell."""

    def test_capture_returns_stripped_stdout(self):
        assert LocalRunner().capture("echo '  hello  '") == "hello"

    def test_succeeds(self):
        runner = LocalRunner()
        assert runner.succeeds("true") is True
        assert runner.succeeds("exit 3") is False

    def test_failed_command_output_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="cached_externals.core.runner"):
            assert LocalRunner().succeeds("echo progress; echo denied >&2; exit 3") is False

        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert "denied" in errors
        assert any("exit code 3" in message for message in errors)
        debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert "progress" in debug

    def test_run_raises_on_failure(self):
        with pytest.raises(CommandError) as exc_info:
            LocalRunner().run("echo boom >&2; exit 3")

        assert exc_info.value.returncode == 3
        assert "boom" in str(exc_info.value)

    def test_runs_in_cwd(self, tmp_path):
        (tmp_path / "marker").write_text("x")
        assert LocalRunner(cwd=tmp_path).capture("ls") == "marker"


class TestSSHRunner:
    """Commands wrapped in an ssh invocation."""

    def test_wrap_quotes_command(self):
        runner = SSHRunner("app1")
        assert runner.wrap("rm -rf /tmp/x && ls") == "ssh app1 'rm -rf /tmp/x && ls'"

    def test_wrap_with_user_and_port(self):
        runner = SSHRunner("app1", user="deploy", port=2222)
        assert runner.wrap("ls") == "ssh -p 2222 deploy@app1 ls"

    def test_execute_goes_through_local_runner(self, recording_runner):
        runner = SSHRunner("app1", user="deploy", local=recording_runner)
        runner.run("mkdir -p /srv/x")
        assert recording_runner.commands == ["ssh deploy@app1 'mkdir -p /srv/x'"]
