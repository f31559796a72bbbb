#!/usr/bin/env python3
"""
Upstream HTTP - Single outbound GET with status and body handling

Every external call made by a tool goes through fetch_json(), which turns
non-success statuses, transport failures and non-JSON bodies into
UpstreamError. Nothing here retries.
"""
import json
import logging
from base64 import b64encode
from typing import Any, Dict, List, Optional, Union

import aiohttp
from yarl import URL

from base_tool import UpstreamError

logger = logging.getLogger("upstream")

USER_AGENT = "mcp-streamable-http/1.0"


def basic_auth_header(login: str, secret: str) -> str:
    """Build an ``Authorization: Basic`` header value"""
    credentials = b64encode(f"{login}:{secret}".encode()).decode()
    return f"Basic {credentials}"


async def fetch_json(
    session: aiohttp.ClientSession,
    url: Union[str, URL],
    *,
    service: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, str]] = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Args:
        session: Shared client session
        url: Target URL; pass a yarl.URL built with encoded=True to send it as-is
        service: Human-readable upstream name used in error messages
        headers: Extra request headers
        params: Query parameters encoded by the client

    Raises:
        UpstreamError: non-2xx status (carrying the raw body), invalid JSON or
            a transport failure
    """
    request_headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
    if headers:
        request_headers.update(headers)

    try:
        async with session.get(url, headers=request_headers, params=params) as response:
            logger.debug(f"{service} responded with HTTP {response.status}")
            body = await response.text(errors="replace")

            if not 200 <= response.status < 300:
                raise UpstreamError(service, body, status=response.status)

            try:
                return json.loads(body)
            except json.JSONDecodeError as e:
                raise UpstreamError(service, f"invalid JSON response: {e}", status=response.status) from e

    except aiohttp.ClientError as e:
        raise UpstreamError(service, f"request failed: {e}") from e


def expect_list(payload: Any, key: Optional[str], service: str) -> List[Any]:
    """Return ``payload[key]`` (or ``payload`` itself) if it is a list"""
    try:
        value = payload if key is None else payload[key]
    except (KeyError, TypeError, IndexError):
        raise UpstreamError(service, f"unexpected response shape: missing '{key}'") from None

    if not isinstance(value, list):
        raise UpstreamError(service, f"unexpected response shape: '{key or 'body'}' is not a list")
    return value


def expect_field(payload: Any, *path: str, service: str) -> str:
    """Walk ``path`` through nested objects and return the string found there"""
    value = payload
    for key in path:
        if not isinstance(value, dict) or key not in value:
            raise UpstreamError(service, f"unexpected response shape: missing '{'.'.join(path)}'")
        value = value[key]

    if value is None:
        return ""
    if not isinstance(value, (str, int, float)):
        raise UpstreamError(service, f"unexpected response shape: '{'.'.join(path)}' is not text")
    return str(value)
