"""Shared HTTP client for GitHub requests."""

import httpx

from git_focus import __version__
from git_focus.config import get_verify_ssl

# GitHub rejects API requests without a User-Agent
USER_AGENT = f"git-focus/{__version__}"

_http_client: httpx.Client | None = None
_http_client_verify_ssl: bool | None = None


def _get_http_client() -> httpx.Client:
    """Return the pooled client, rebuilding it when the SSL setting changed."""
    global _http_client, _http_client_verify_ssl
    verify_ssl = get_verify_ssl()

    if (
        _http_client is not None
        and not _http_client.is_closed
        and _http_client_verify_ssl == verify_ssl
    ):
        return _http_client

    close_http_client()
    _http_client = httpx.Client(
        verify=verify_ssl,
        timeout=httpx.Timeout(10.0, connect=5.0),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
        limits=httpx.Limits(max_connections=4, max_keepalive_connections=4),
    )
    _http_client_verify_ssl = verify_ssl
    return _http_client


def close_http_client():
    """Close the pooled client. The next request opens a new one."""
    global _http_client, _http_client_verify_ssl
    if _http_client is not None and not _http_client.is_closed:
        _http_client.close()
    _http_client = None
    _http_client_verify_ssl = None
