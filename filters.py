#!/usr/bin/env python3
"""
Search Filters - Backend-agnostic issue/incident search request

A SearchFilter is built once per tool call from already type-checked
arguments and handed, read-only, to the query translators.
"""
from dataclasses import dataclass
from typing import Any, Optional

from base_tool import ValidationError

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class SearchFilter:
    """Immutable search request; optional fields are None when absent or blank"""

    scope: str
    status: Optional[str] = None
    assignee: Optional[str] = None
    label: Optional[str] = None
    text_match: Optional[str] = None
    issue_type: Optional[str] = None
    priority: Optional[str] = None
    limit: int = DEFAULT_LIMIT


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _coerce_limit(limit: Any) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"limit must be a positive integer, got {limit!r}")
    if limit <= 0:
        raise ValidationError(f"limit must be a positive integer, got {limit}")
    return limit


def build_filter(
    scope: Optional[str],
    *,
    status: Optional[str] = None,
    assignee: Optional[str] = None,
    label: Optional[str] = None,
    text_match: Optional[str] = None,
    issue_type: Optional[str] = None,
    priority: Optional[str] = None,
    limit: Any = None,
) -> SearchFilter:
    """
    Build a SearchFilter from raw argument values.

    Args:
        scope: Project key (Jira) or instance name (ServiceNow); required
        limit: Maximum number of results, defaults to 5

    Raises:
        ValidationError: scope is missing/blank or limit is not a positive integer
    """
    cleaned_scope = _clean(scope)
    if cleaned_scope is None:
        raise ValidationError("scope is required and must not be blank")

    return SearchFilter(
        scope=cleaned_scope,
        status=_clean(status),
        assignee=_clean(assignee),
        label=_clean(label),
        text_match=_clean(text_match),
        issue_type=_clean(issue_type),
        priority=_clean(priority),
        limit=_coerce_limit(limit),
    )
