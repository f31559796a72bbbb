#!/usr/bin/env python3
"""
ServiceNow Tool - Incident lookup via the Table API
"""
from typing import Any, Optional

import aiohttp
from yarl import URL

from base_tool import BaseTool, ToolResult
from filters import build_filter
from query_translators import servicenow_incidents_url
from upstream import expect_field, expect_list, fetch_json

SERVICE = "ServiceNow"
NO_INCIDENTS = "No incidents found."


def format_incident(incident: Any) -> str:
    number = expect_field(incident, "number", service=SERVICE)
    short_description = expect_field(incident, "short_description", service=SERVICE)
    return f"#{number}: {short_description}"


class ServiceNowIncidentsTool(BaseTool):
    name = "get-servicenow-incidents"
    description = "Retrieve ServiceNow incidents using filters like assigned_to, state, priority, or keywords"

    def __init__(self, session: aiohttp.ClientSession, instance: str, auth_header: str):
        self.session = session
        self.instance = instance
        self.auth_header = auth_header

    async def execute(
        self,
        assigned_to: Optional[str] = None,
        state: Optional[str] = None,
        priority: Optional[str] = None,
        short_description: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> ToolResult:
        """
        Args:
            assigned_to: User ID or name to filter by assigned user
            state: State of the incident (e.g., 1 for New, 2 for In Progress)
            priority: Priority level (1, 2, 3, etc.)
            short_description: Text to match in short description
            limit: Number of incidents to retrieve (default is 5)
        """
        search = build_filter(
            self.instance,
            assignee=assigned_to,
            status=state,
            priority=priority,
            text_match=short_description,
            limit=limit,
        )

        url = URL(servicenow_incidents_url(search), encoded=True)
        data = await fetch_json(
            self.session,
            url,
            service=SERVICE,
            headers={"Authorization": self.auth_header},
        )

        incidents = expect_list(data, "result", SERVICE)
        lines = [format_incident(incident) for incident in incidents]
        return ToolResult.text("\n".join(lines) if lines else NO_INCIDENTS)
