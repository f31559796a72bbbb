"""Tests for the joke, Jira and ServiceNow tool handlers."""
import pytest

from base_tool import UpstreamError, ValidationError
from conftest import FakeResponse, FakeSession
from tools import build_tools
from tools.jira import NO_ISSUES, JiraIssuesTool
from tools.jokes import (
    CHUCK_CATEGORIES_URL,
    CHUCK_RANDOM_URL,
    DAD_JOKE_URL,
    ChuckCategoriesTool,
    ChuckJokeByCategoryTool,
    ChuckJokeTool,
    DadJokeTool,
    YoMommaJokeTool,
)
from tools.servicenow import NO_INCIDENTS, ServiceNowIncidentsTool
from upstream import basic_auth_header

JIRA_AUTH = basic_auth_header("bot@example.com", "jira-token")
SN_AUTH = basic_auth_header("admin", "sn-secret")


def jira_issue(key, summary, status):
    return {"key": key, "fields": {"summary": summary, "status": {"name": status}}}


class TestJokeTools:

    @pytest.mark.asyncio
    async def test_chuck_joke(self):
        session = FakeSession(FakeResponse({"value": "Chuck counted to infinity. Twice."}))

        result = await ChuckJokeTool(session).execute()

        assert result.to_dict() == {"content": [{"type": "text", "text": "Chuck counted to infinity. Twice."}]}
        assert session.calls[0]["url"] == CHUCK_RANDOM_URL

    @pytest.mark.asyncio
    async def test_chuck_joke_by_category_passes_category(self):
        session = FakeSession(FakeResponse({"value": "dev joke"}))

        result = await ChuckJokeByCategoryTool(session).execute(category="dev")

        assert result.content[0]["text"] == "dev joke"
        assert session.calls[0]["params"] == {"category": "dev"}

    @pytest.mark.asyncio
    async def test_chuck_categories_joined(self):
        session = FakeSession(FakeResponse(["animal", "career", "dev"]))

        result = await ChuckCategoriesTool(session).execute()

        assert result.content[0]["text"] == "animal, career, dev"
        assert session.calls[0]["url"] == CHUCK_CATEGORIES_URL

    @pytest.mark.asyncio
    async def test_dad_joke(self):
        session = FakeSession(FakeResponse({"id": "x", "joke": "I'm reading a book on anti-gravity.", "status": 200}))

        result = await DadJokeTool(session).execute()

        assert result.content[0]["text"] == "I'm reading a book on anti-gravity."
        assert session.calls[0]["url"] == DAD_JOKE_URL

    @pytest.mark.asyncio
    async def test_yo_momma_joke_is_category_tagged(self):
        session = FakeSession(FakeResponse({"joke": "so old...", "category": "old"}))

        result = await YoMommaJokeTool(session).execute()

        assert result.content[0]["text"] == "Category: old\nJoke: so old..."

    @pytest.mark.asyncio
    async def test_upstream_failure_raises(self):
        session = FakeSession(FakeResponse(status=503, body="Service Unavailable"))

        with pytest.raises(UpstreamError, match="Service Unavailable"):
            await YoMommaJokeTool(session).execute()

    @pytest.mark.asyncio
    async def test_missing_field_is_upstream_error(self):
        session = FakeSession(FakeResponse({"unexpected": True}))

        with pytest.raises(UpstreamError, match="unexpected response shape"):
            await ChuckJokeTool(session).execute()


class TestJiraIssuesTool:

    @pytest.mark.asyncio
    async def test_formats_issues_and_builds_request(self):
        session = FakeSession(FakeResponse({
            "issues": [
                jira_issue("MCP-1", "Set up server", "Done"),
                jira_issue("MCP-2", "Add Jira tool", "Done"),
            ]
        }))
        tool = JiraIssuesTool(session, "example.atlassian.net", JIRA_AUTH)

        result = await tool.execute(project="MCP", status="Done", assignee="jane")

        assert result.content[0]["text"] == "#MCP-1: Set up server [Done]\n#MCP-2: Add Jira tool [Done]"
        call = session.calls[0]
        assert call["url"] == (
            "https://example.atlassian.net/rest/api/3/search"
            "?jql=project%3DMCP%20AND%20status%3D%22Done%22%20AND%20assignee%3D%22jane%22&maxResults=5"
        )
        assert call["headers"]["Authorization"] == JIRA_AUTH

    @pytest.mark.asyncio
    async def test_empty_result_returns_sentinel(self):
        session = FakeSession(FakeResponse({"issues": []}))
        tool = JiraIssuesTool(session, "example.atlassian.net", JIRA_AUTH)

        result = await tool.execute(project="MCP", limit=3)

        assert result.content[0]["text"] == NO_ISSUES
        assert session.calls[0]["url"].endswith("&maxResults=3")

    @pytest.mark.asyncio
    async def test_unauthorized_surfaces_body_without_retry(self):
        session = FakeSession(
            FakeResponse(status=401, body='{"errorMessages":["Client must be authenticated"]}'),
            FakeResponse({"issues": []}),
        )
        tool = JiraIssuesTool(session, "example.atlassian.net", JIRA_AUTH)

        with pytest.raises(UpstreamError) as exc_info:
            await tool.execute(project="MCP")

        assert "Client must be authenticated" in exc_info.value.message
        assert exc_info.value.status == 401
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_invalid_limit_fails_before_network(self):
        session = FakeSession()
        tool = JiraIssuesTool(session, "example.atlassian.net", JIRA_AUTH)

        with pytest.raises(ValidationError):
            await tool.execute(project="MCP", limit=0)

        assert session.calls == []

    @pytest.mark.asyncio
    async def test_blank_project_fails_before_network(self):
        session = FakeSession()
        tool = JiraIssuesTool(session, "example.atlassian.net", JIRA_AUTH)

        with pytest.raises(ValidationError):
            await tool.execute(project="  ")

        assert session.calls == []

    @pytest.mark.asyncio
    async def test_malformed_issue_is_upstream_error(self):
        session = FakeSession(FakeResponse({"issues": [{"key": "MCP-1", "fields": {}}]}))
        tool = JiraIssuesTool(session, "example.atlassian.net", JIRA_AUTH)

        with pytest.raises(UpstreamError, match="fields.summary"):
            await tool.execute(project="MCP")


class TestServiceNowIncidentsTool:

    @pytest.mark.asyncio
    async def test_formats_incidents_and_builds_request(self):
        session = FakeSession(FakeResponse({
            "result": [
                {"number": "INC0010001", "short_description": "Disk full on db01"},
                {"number": "INC0010002", "short_description": "Disk full on db02"},
            ]
        }))
        tool = ServiceNowIncidentsTool(session, "prod1", SN_AUTH)

        result = await tool.execute(assigned_to="bob", short_description="disk full")

        assert result.content[0]["text"] == "#INC0010001: Disk full on db01\n#INC0010002: Disk full on db02"
        call = session.calls[0]
        assert call["url"] == (
            "https://prod1.service-now.com/api/now/table/incident"
            "?sysparm_limit=5&sysparm_query=assigned_to%3Dbob%5Eshort_descriptionLIKEdisk%20full"
        )
        assert call["headers"]["Authorization"] == SN_AUTH

    @pytest.mark.asyncio
    async def test_priority_is_included_in_query(self):
        session = FakeSession(FakeResponse({"result": []}))
        tool = ServiceNowIncidentsTool(session, "prod1", SN_AUTH)

        await tool.execute(priority="1")

        assert session.calls[0]["url"].endswith("sysparm_query=priority%3D1")

    @pytest.mark.asyncio
    async def test_empty_result_returns_sentinel(self):
        session = FakeSession(FakeResponse({"result": []}))
        tool = ServiceNowIncidentsTool(session, "prod1", SN_AUTH)

        result = await tool.execute()

        assert result.content[0]["text"] == NO_INCIDENTS
        assert session.calls[0]["url"].endswith("?sysparm_limit=5&sysparm_query=")

    @pytest.mark.asyncio
    async def test_missing_result_key_is_upstream_error(self):
        session = FakeSession(FakeResponse({"error": {"message": "nope"}}))
        tool = ServiceNowIncidentsTool(session, "prod1", SN_AUTH)

        with pytest.raises(UpstreamError, match="result"):
            await tool.execute()


def test_build_tools_registers_full_catalogue(settings):
    tools = build_tools(settings, FakeSession())

    assert [tool.name for tool in tools] == [
        "get-chuck-joke",
        "get-chuck-joke-by-category",
        "get-chuck-categories",
        "get-dad-joke",
        "get-yo-momma-joke",
        "get-jira-issues",
        "get-servicenow-incidents",
    ]
    jira = tools[5]
    assert jira.domain == "example.atlassian.net"
    assert jira.auth_header == JIRA_AUTH
    assert tools[6].instance == "prod1"
