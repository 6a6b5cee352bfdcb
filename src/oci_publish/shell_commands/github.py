"""GitHub package visibility calls.

Packages pushed to ghcr.io start out private. This module flips a package
to public through the GitHub REST API.
"""

from __future__ import annotations

import requests
from loguru import logger
from requests import RequestException

from .types import CommandResult

DEFAULT_API_URL = "https://api.github.com"


class GitHubPackages:
    """Container package operations against the GitHub REST API."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the package client.

        Args:
            api_url: GitHub API base URL
            session: Optional requests session (injected in tests)
            timeout: Request timeout in seconds
        """
        self._api_url = api_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def package_url(self, url_encoded_path: str) -> str:
        return f"{self._api_url}/user/packages/container/{url_encoded_path}"

    def make_public(self, url_encoded_path: str, token: str) -> CommandResult:
        """Set a container package's visibility to public.

        Already-public packages are accepted by the API, so the call is
        safe to repeat.

        Args:
            url_encoded_path: Package path with ``/`` encoded as ``%2F``
            token: Token with ``write:packages`` scope

        Returns:
            CommandResult; ``stderr`` holds the API error message on failure
        """
        url = self.package_url(url_encoded_path)
        logger.debug(f"PATCH visibility for package {url_encoded_path}")
        try:
            response = self._session.patch(
                url,
                json={"visibility": "public"},
                headers={
                    "Accept": "application/vnd.github+json",
                    "Authorization": f"Bearer {token}",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self._timeout,
            )
        except RequestException as e:
            return CommandResult(success=False, stderr=str(e), returncode=1)

        if response.ok:
            return CommandResult(success=True, returncode=0)

        return CommandResult(
            success=False,
            stdout=response.text,
            stderr=f"HTTP {response.status_code}: {response.reason}",
            returncode=response.status_code,
        )
