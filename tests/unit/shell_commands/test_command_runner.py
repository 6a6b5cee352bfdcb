"""Tests for CommandRunner."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from oci_publish.shell_commands.runner import CommandRunner


@pytest.fixture
def runner():
    """Create a CommandRunner rooted at a test project."""
    return CommandRunner(Path("/test/project"))


@patch("subprocess.run")
def test_run_returns_structured_result(mock_run, runner):
    """Test that run() maps the completed process to a CommandResult."""
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=2, stdout="out", stderr="err"
    )

    result = runner.run(["helm", "version"])

    assert not result.success
    assert (result.stdout, result.stderr, result.returncode) == ("out", "err", 2)
    assert mock_run.call_args.kwargs["cwd"] == Path("/test/project")
    assert mock_run.call_args.kwargs["env"] is None


@patch("subprocess.run")
def test_run_layers_env_over_process_environment(mock_run, runner, monkeypatch):
    """Test that extra env values are merged into os.environ."""
    monkeypatch.setenv("EXISTING", "1")
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=0, stdout="", stderr=""
    )

    runner.run(["docker", "buildx", "build"], env={"TOKEN": "x"})

    env = mock_run.call_args.kwargs["env"]
    assert env["TOKEN"] == "x"
    assert env["EXISTING"] == "1"


@patch("subprocess.run")
def test_run_logs_only_program_and_subcommand(mock_run, runner):
    """Test that arguments after the subcommand never reach the log."""
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=0, stdout="", stderr=""
    )

    with patch("oci_publish.shell_commands.runner.logger") as mock_logger:
        runner.run(["git", "commit", "-m", "secret-message"])

    logged = " ".join(str(c) for c in mock_logger.debug.call_args_list)
    assert "git commit" in logged
    assert "secret-message" not in logged


@patch("subprocess.Popen")
def test_run_streaming_forwards_lines(mock_popen, runner):
    """Test that run_streaming() hands each non-empty line to the callback."""
    process = MagicMock()
    process.stdout.readline.side_effect = ["step 1\n", "\n", "step 2\n", ""]
    process.returncode = 0
    mock_popen.return_value = process
    seen = []

    result = runner.run_streaming(["docker", "buildx"], on_output=seen.append)

    assert seen == ["step 1", "step 2"]
    assert result.success
    assert result.stdout == "step 1\nstep 2"
    assert result.stderr == ""


@patch("subprocess.run")
def test_run_missing_binary_is_a_failed_result(mock_run, runner):
    """Test that a tool missing from PATH is reported, not raised."""
    mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "docker")

    result = runner.run(["docker", "buildx", "build"])

    assert not result.success
    assert result.returncode == 127
    assert "No such file or directory" in result.stderr


@patch("subprocess.Popen")
def test_run_streaming_missing_binary_is_a_failed_result(mock_popen, runner):
    """Test that run_streaming() reports a tool that cannot start."""
    mock_popen.side_effect = PermissionError(13, "Permission denied", "helm")
    seen = []

    result = runner.run_streaming(["helm", "push"], on_output=seen.append)

    assert not result.success
    assert result.returncode == 127
    assert seen == []
