"""Issue tracker integrations - Forward host events to external trackers."""

from issuebridge.integrations.base import IssueTrackerService
from issuebridge.integrations.exceptions import (
    IntegrationError,
    InvalidURLError,
    ServiceValidationError,
    UnknownServiceError,
)
from issuebridge.integrations.jira import JiraDispatcher, JiraService
from issuebridge.integrations.models import (
    Commit,
    ExternalIssue,
    Issue,
    MergeRequest,
    Namespace,
    Project,
    Snippet,
    User,
)
from issuebridge.integrations.registry import SERVICES, service_class, service_param

__all__ = [
    "SERVICES",
    "Commit",
    "ExternalIssue",
    "IntegrationError",
    "InvalidURLError",
    "Issue",
    "IssueTrackerService",
    "JiraDispatcher",
    "JiraService",
    "MergeRequest",
    "Namespace",
    "Project",
    "ServiceValidationError",
    "Snippet",
    "UnknownServiceError",
    "User",
    "service_class",
    "service_param",
]
