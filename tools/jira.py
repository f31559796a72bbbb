#!/usr/bin/env python3
"""
Jira Tool - Issue search via the Jira Cloud REST API

Builds a JQL query from the call arguments and issues a single search
request authenticated with an email/API-token Basic header.
"""
from typing import Any, Optional

import aiohttp
from yarl import URL

from base_tool import BaseTool, ToolResult
from filters import build_filter
from query_translators import jira_search_url
from upstream import expect_field, expect_list, fetch_json

SERVICE = "Jira"
NO_ISSUES = "No matching issues found."


def format_issue(issue: Any) -> str:
    key = expect_field(issue, "key", service=SERVICE)
    summary = expect_field(issue, "fields", "summary", service=SERVICE)
    status = expect_field(issue, "fields", "status", "name", service=SERVICE)
    return f"#{key}: {summary} [{status}]"


class JiraIssuesTool(BaseTool):
    name = "get-jira-issues"
    description = "Retrieve Jira issues using filters like project, status, summary, label, assignee, or issueType"

    def __init__(self, session: aiohttp.ClientSession, domain: str, auth_header: str):
        self.session = session
        self.domain = domain
        self.auth_header = auth_header

    async def execute(
        self,
        project: str,
        status: Optional[str] = None,
        summary: Optional[str] = None,
        label: Optional[str] = None,
        assignee: Optional[str] = None,
        issueType: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> ToolResult:
        """
        Search Jira issues.

        Args:
            project: Jira project key (e.g., MCP)
            status: Issue status (e.g., Done, In Progress)
            summary: Text to match in summary
            label: Label to filter issues by (e.g., bug, urgent)
            assignee: User the issue is assigned to
            issueType: Type of issue (e.g., Task, Epic, Bug)
            limit: Max number of issues to retrieve
        """
        search = build_filter(
            project,
            status=status,
            text_match=summary,
            label=label,
            assignee=assignee,
            issue_type=issueType,
            limit=limit,
        )

        url = URL(jira_search_url(self.domain, search), encoded=True)
        data = await fetch_json(
            self.session,
            url,
            service=SERVICE,
            headers={"Authorization": self.auth_header},
        )

        issues = expect_list(data, "issues", SERVICE)
        lines = [format_issue(issue) for issue in issues]
        return ToolResult.text("\n".join(lines) if lines else NO_ISSUES)
