"""Shared fixtures: canned upstream responses and sample settings."""
import json

import pytest

from config import Settings


class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside ``async with session.get(...)``"""

    def __init__(self, payload=None, status=200, body=None):
        self.status = status
        self._body = body if body is not None else json.dumps(payload)

    async def text(self, encoding="utf-8", errors="strict"):
        if isinstance(self._body, bytes):
            return self._body.decode(encoding, errors)
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records every GET and replays queued responses in order"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append({"url": str(url), **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def settings():
    return Settings(
        jira_domain="example.atlassian.net",
        jira_email="bot@example.com",
        jira_api_token="jira-token",
        sn_instance="prod1",
        sn_username="admin",
        sn_password="sn-secret",
    )
