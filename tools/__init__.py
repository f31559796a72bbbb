"""
Tool catalogue - every tool the server exposes, built once at startup
"""
from typing import List

import aiohttp

from base_tool import BaseTool
from config import Settings
from tools.jira import JiraIssuesTool
from tools.jokes import (
    ChuckCategoriesTool,
    ChuckJokeByCategoryTool,
    ChuckJokeTool,
    DadJokeTool,
    YoMommaJokeTool,
)
from tools.servicenow import ServiceNowIncidentsTool
from upstream import basic_auth_header


def build_tools(settings: Settings, session: aiohttp.ClientSession) -> List[BaseTool]:
    """Instantiate all tools; Basic auth headers are encoded here, once"""
    jira_auth = basic_auth_header(settings.jira_email, settings.jira_api_token)
    servicenow_auth = basic_auth_header(settings.sn_username, settings.sn_password)

    return [
        ChuckJokeTool(session),
        ChuckJokeByCategoryTool(session),
        ChuckCategoriesTool(session),
        DadJokeTool(session),
        YoMommaJokeTool(session),
        JiraIssuesTool(session, settings.jira_domain, jira_auth),
        ServiceNowIncidentsTool(session, settings.sn_instance, servicenow_auth),
    ]
