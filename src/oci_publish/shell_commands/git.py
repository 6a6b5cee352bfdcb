"""Git command abstractions.

This module provides the status check and authenticated push used to
publish repository changes made during a run.
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from loguru import logger

from .types import CommandResult, GitStatus

if TYPE_CHECKING:
    from .runner import CommandRunner

DEFAULT_COMMIT_MESSAGE = "chore: publish release artifacts"


class GitCommands:
    """Git-related shell commands.

    Provides operations for:
    - Repository status detection
    - Committing and pushing pending changes
    """

    def __init__(
        self,
        runner: CommandRunner,
        server_url: str = "https://github.com",
    ) -> None:
        """Initialize Git commands.

        Args:
            runner: Command runner for executing shell commands
            server_url: Git server base URL the token authenticates against
        """
        self._runner = runner
        self._server_url = server_url.rstrip("/")

    def get_status(self) -> GitStatus:
        """Get the current git repository status.

        Returns:
            GitStatus with repository state information

        Example:
            >>> status = git.get_status()
            >>> if status.is_clean:
            ...     print(f"Clean repo at {status.short_sha}")
        """
        status_result = self._runner.run(["git", "status", "--porcelain"])
        if not status_result.success:
            return GitStatus(is_git_repo=False, is_clean=False, short_sha=None)

        is_clean = not bool(status_result.stdout.strip())

        sha_result = self._runner.run(["git", "rev-parse", "--short=7", "HEAD"])
        short_sha = sha_result.stdout.strip() if sha_result.success else None

        return GitStatus(is_git_repo=True, is_clean=is_clean, short_sha=short_sha)

    def _auth_env(self, token: str) -> dict[str, str]:
        # Same mechanism actions/checkout uses; keeps the token out of argv
        basic = base64.b64encode(f"x-access-token:{token}".encode()).decode()
        return {
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": f"http.{self._server_url}/.extraheader",
            "GIT_CONFIG_VALUE_0": f"AUTHORIZATION: basic {basic}",
        }

    def push_changes(
        self,
        token: str,
        *,
        ref: str | None = None,
        message: str = DEFAULT_COMMIT_MESSAGE,
    ) -> CommandResult:
        """Commit pending changes (if any) and push HEAD.

        A clean working tree is not an error; nothing is committed and the
        push still runs so earlier local commits reach the remote.

        Args:
            token: Token authorized to push to the repository
            ref: Remote branch to push to (defaults to the upstream of HEAD)
            message: Commit message for pending changes

        Returns:
            CommandResult of the failing step, or of the push
        """
        status = self.get_status()
        if not status.is_git_repo:
            return CommandResult(
                success=False, stderr="Not a git repository", returncode=128
            )

        if not status.is_clean:
            add_result = self._runner.run(["git", "add", "--all"])
            if not add_result.success:
                return add_result
            commit_result = self._runner.run(["git", "commit", "-m", message])
            if not commit_result.success:
                return commit_result
        else:
            logger.info("Working tree clean, nothing to commit")

        target = f"HEAD:{ref}" if ref else "HEAD"
        return self._runner.run(
            ["git", "push", "origin", target], env=self._auth_env(token)
        )
