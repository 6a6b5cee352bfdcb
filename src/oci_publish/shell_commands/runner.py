"""Subprocess execution shared by the docker, helm and git wrappers."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult


class CommandRunner:
    """Runs external tools from the project root.

    Only the program name and subcommand are logged. Later arguments and
    the extra environment may carry credentials.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the command runner.

        Args:
            project_root: Default working directory for every command
        """
        self.project_root = project_root

    @staticmethod
    def _environment(env: Mapping[str, str] | None) -> dict[str, str] | None:
        if not env:
            return None
        merged = os.environ.copy()
        merged.update(env)
        return merged

    @staticmethod
    def _not_started(cmd: Sequence[str], error: OSError) -> CommandResult:
        # missing binary or unusable working directory
        logger.warning(f"Could not start {cmd[0]}: {error.strerror or error}")
        return CommandResult(success=False, stderr=str(error), returncode=127)

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        check: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run ``cmd`` to completion.

        Args:
            cmd: Program and arguments
            cwd: Working directory override
            capture_output: Collect stdout/stderr into the result
            check: Raise when the exit status is non-zero
            env: Variables added on top of the current environment

        Returns:
            CommandResult for the finished process; a command that cannot
            be started yields a failure with return code 127

        Raises:
            subprocess.CalledProcessError: If ``check`` is set and the command fails
        """
        logger.debug(f"Running {' '.join(cmd[:2])}")
        try:
            completed = subprocess.run(
                list(cmd),
                cwd=cwd or self.project_root,
                capture_output=capture_output,
                text=True,
                check=check,
                env=self._environment(env),
            )
        except OSError as e:
            return self._not_started(cmd, e)
        return CommandResult(
            success=completed.returncode == 0,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        on_output: Callable[[str], None] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run ``cmd`` and hand each output line to ``on_output`` as it arrives.

        stderr is merged into stdout. On failure the merged output is also
        returned as ``stderr`` so callers can report it.
        """
        logger.debug(f"Streaming {' '.join(cmd[:2])}")
        try:
            process = subprocess.Popen(
                list(cmd),
                cwd=cwd or self.project_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                env=self._environment(env),
            )
        except OSError as e:
            return self._not_started(cmd, e)

        lines: list[str] = []
        if process.stdout:
            for raw in iter(process.stdout.readline, ""):
                line = raw.rstrip("\n")
                if not line:
                    continue
                lines.append(line)
                if on_output:
                    on_output(line)

        process.wait()

        output = "\n".join(lines)
        return CommandResult(
            success=process.returncode == 0,
            stdout=output,
            stderr="" if process.returncode == 0 else output,
            returncode=process.returncode or 0,
        )
