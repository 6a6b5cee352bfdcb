"""Tests for GitHubPackages."""

from unittest.mock import Mock

import requests

from oci_publish.shell_commands.github import GitHubPackages


def _response(ok, status_code=200, reason="OK", text=""):
    response = Mock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.text = text
    return response


def test_package_url():
    """Test that the package path is appended verbatim."""
    client = GitHubPackages("https://api.example.com/", session=Mock())

    assert (
        client.package_url("charts%2Fapi")
        == "https://api.example.com/user/packages/container/charts%2Fapi"
    )


def test_make_public_patches_visibility():
    """Test that make_public() sends the visibility PATCH with the token."""
    session = Mock()
    session.patch.return_value = _response(ok=True)

    result = GitHubPackages(session=session).make_public("api", "tok")

    assert result.success
    call = session.patch.call_args
    assert call.args[0] == "https://api.github.com/user/packages/container/api"
    assert call.kwargs["json"] == {"visibility": "public"}
    assert call.kwargs["headers"]["Authorization"] == "Bearer tok"


def test_make_public_http_error():
    """Test that a non-2xx response becomes a failed result."""
    session = Mock()
    session.patch.return_value = _response(
        ok=False, status_code=404, reason="Not Found", text='{"message": "x"}'
    )

    result = GitHubPackages(session=session).make_public("api", "tok")

    assert not result.success
    assert result.stderr == "HTTP 404: Not Found"
    assert result.returncode == 404


def test_make_public_connection_error():
    """Test that transport errors are reported, not raised."""
    session = Mock()
    session.patch.side_effect = requests.ConnectionError("unreachable")

    result = GitHubPackages(session=session).make_public("api", "tok")

    assert not result.success
    assert "unreachable" in result.stderr
