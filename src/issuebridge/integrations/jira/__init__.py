"""JIRA integration - Payloads, URLs and dispatch for the JIRA REST API."""

from issuebridge.integrations.jira.dispatcher import DispatchOutcome, JiraDispatcher, classify_status
from issuebridge.integrations.jira.payloads import (
    CrossReferenceData,
    LinkRef,
    build_cross_reference_data,
    close_issue_payload,
    cross_reference_payload,
)
from issuebridge.integrations.jira.service import JiraService

__all__ = [
    "CrossReferenceData",
    "DispatchOutcome",
    "JiraDispatcher",
    "JiraService",
    "LinkRef",
    "build_cross_reference_data",
    "classify_status",
    "close_issue_payload",
    "cross_reference_payload",
]
