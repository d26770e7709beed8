"""
HTTP GET helper for the REST API app.

Requests optionally go through a dev-server proxy endpoint that takes the
target as an encoded `url` query parameter. JSON responses are
pretty-printed; anything else is returned verbatim.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import aiohttp

__all__ = ["FetchResult", "proxyUrl_build", "body_format", "text_fetch"]

_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class FetchResult:
    """Status line and display-ready body of one GET"""
    status_line: str
    body: str


def proxyUrl_build(url: str, proxy_url: Optional[str]) -> str:
    """
    Build the request URL, routed through the proxy when configured.

    Args:
        url: Target URL.
        proxy_url: Proxy endpoint, or None for direct requests.

    Returns:
        URL to request.
    """
    if not proxy_url:
        return url
    return f"{proxy_url}?url={quote(url, safe=_URI_COMPONENT_SAFE)}"


def body_format(text: str, content_type: str) -> str:
    """Pretty-print JSON bodies; return others unchanged."""
    if "application/json" not in content_type:
        return text
    try:
        return json.dumps(json.loads(text), indent=2)
    except ValueError:
        return text


async def text_fetch(
    url: str,
    proxy_url: Optional[str] = None,
    timeout_seconds: float = 10.0,
    session: Optional[aiohttp.ClientSession] = None,
) -> FetchResult:
    """
    GET a URL and return its status line and formatted body.

    Args:
        url: Target URL.
        proxy_url: Optional proxy endpoint.
        timeout_seconds: Total request timeout when a session is created here.
        session: Optional caller-owned session.

    Returns:
        Fetch result.

    Raises:
        aiohttp.ClientError: On connection or protocol failure.
        asyncio.TimeoutError: When the request exceeds the timeout.
    """
    target: str = proxyUrl_build(url, proxy_url)
    if session is not None:
        return await _response_read(session, target)

    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as owned_session:
        return await _response_read(owned_session, target)


async def _response_read(session: aiohttp.ClientSession, target: str) -> FetchResult:
    async with session.get(target) as response:
        content_type: str = response.headers.get("content-type", "")
        text: str = await response.text()
        return FetchResult(
            status_line=f"{response.status} {response.reason or ''}".strip(),
            body=body_format(text, content_type),
        )
