"""Shell command abstractions for image and chart publishing.

This package provides a small, typed interface over the tools a publish
run shells out to:

- docker: multi-platform image build and push
- helm: chart dependency build, package and push
- git: status and authenticated push of repository changes
- github: package visibility through the REST API

Usage:
    from oci_publish.shell_commands import ShellCommands

    commands = ShellCommands(project_root=Path("."))
    result = commands.helm.push(Path("api-1.2.3.tgz"), "oci://ghcr.io/acme")
"""

from pathlib import Path

from .docker import CacheConfig, DockerCommands
from .git import GitCommands
from .github import GitHubPackages
from .helm import HelmCommands
from .runner import CommandRunner
from .types import CommandResult, GitStatus


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        docker: Docker-related commands
        helm: Helm-related commands
        git: Git repository commands
        github: GitHub package API calls
    """

    def __init__(
        self,
        project_root: Path,
        *,
        github_api_url: str | None = None,
        github_server_url: str | None = None,
    ) -> None:
        """Initialize the shell commands executor.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
            github_api_url: GitHub API base URL override
            github_server_url: GitHub server URL override (for git push auth)
        """
        self._project_root = Path(project_root)
        self._runner = CommandRunner(self._project_root)

        self.docker = DockerCommands(self._runner)
        self.helm = HelmCommands(self._runner)
        self.git = (
            GitCommands(self._runner, github_server_url)
            if github_server_url
            else GitCommands(self._runner)
        )
        self.github = (
            GitHubPackages(github_api_url) if github_api_url else GitHubPackages()
        )

    @property
    def project_root(self) -> Path:
        """Get the project root path."""
        return self._project_root


__all__ = [
    "ShellCommands",
    "CacheConfig",
    "CommandResult",
    "GitStatus",
    "DockerCommands",
    "HelmCommands",
    "GitCommands",
    "GitHubPackages",
    "CommandRunner",
]
