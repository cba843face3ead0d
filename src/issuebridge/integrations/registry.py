"""Lookup of integration classes by route name or stored type name."""

from __future__ import annotations

from issuebridge.integrations.base import IssueTrackerService
from issuebridge.integrations.exceptions import UnknownServiceError
from issuebridge.integrations.jira import JiraService

SERVICES: dict[str, type[IssueTrackerService]] = {
    "jira": JiraService,
}


def service_class(name: str) -> type[IssueTrackerService]:
    """Resolve "jira" or "JiraService" to the integration class.

    Raises:
        UnknownServiceError: If nothing is registered under name
    """
    if name in SERVICES:
        return SERVICES[name]
    for cls in SERVICES.values():
        if cls.type_name() == name:
            return cls
    raise UnknownServiceError(f"Unknown service '{name}'. Available: {sorted(SERVICES)}")


def service_param(type_name: str) -> str:
    """Route name for a stored type name ("JiraService" -> "jira")."""
    for param, cls in SERVICES.items():
        if cls.type_name() == type_name:
            return param
    raise UnknownServiceError(f"Unknown service type '{type_name}'")
