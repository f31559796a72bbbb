#!/usr/bin/env python3
"""
Query Translators - SearchFilter to backend query strings

Two dialects express "AND of optional predicates":
- Jira JQL: quoted clauses joined with " AND ", project clause first
- ServiceNow encoded query: operator-suffixed clauses joined with "^"

All functions here are pure; they never touch the network.
"""
from typing import List
from urllib.parse import quote

from filters import SearchFilter

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a whole query component (space becomes %20)"""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _jql_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_jql(search: SearchFilter) -> str:
    """
    Translate a filter into JQL.

    Clause order is fixed: project, status, summary, labels, assignee, issuetype.
    """
    clauses: List[str] = [f"project={search.scope}"]

    if search.status:
        clauses.append(f"status={_jql_quote(search.status)}")
    if search.text_match:
        clauses.append(f"summary~{_jql_quote(search.text_match)}")
    if search.label:
        clauses.append(f"labels={_jql_quote(search.label)}")
    if search.assignee:
        clauses.append(f"assignee={_jql_quote(search.assignee)}")
    if search.issue_type:
        clauses.append(f"issuetype={_jql_quote(search.issue_type)}")

    return " AND ".join(clauses)


def _sn_escape(value: str) -> str:
    # A literal caret is written as ^^ in an encoded query
    return value.replace("^", "^^")


def to_servicenow_query(search: SearchFilter) -> str:
    """
    Translate a filter into a ServiceNow encoded query.

    The scope (instance) is part of the URL, not the query; a filter with no
    optional fields yields an empty string.
    """
    clauses: List[str] = []

    if search.assignee:
        clauses.append(f"assigned_to={_sn_escape(search.assignee)}")
    if search.status:
        clauses.append(f"state={_sn_escape(search.status)}")
    if search.priority:
        clauses.append(f"priority={_sn_escape(search.priority)}")
    if search.text_match:
        clauses.append(f"short_descriptionLIKE{_sn_escape(search.text_match)}")

    return "^".join(clauses)


def jira_search_url(domain: str, search: SearchFilter) -> str:
    jql = encode_uri_component(to_jql(search))
    return f"https://{domain}/rest/api/3/search?jql={jql}&maxResults={search.limit}"


def servicenow_incidents_url(search: SearchFilter) -> str:
    query = encode_uri_component(to_servicenow_query(search))
    return (
        f"https://{search.scope}.service-now.com/api/now/table/incident"
        f"?sysparm_limit={search.limit}&sysparm_query={query}"
    )
