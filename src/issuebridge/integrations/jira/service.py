"""JiraService - Closes and comments on JIRA issues in response to host events."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from issuebridge.integrations.base import IssueTrackerService, prop
from issuebridge.integrations.exceptions import IntegrationError, InvalidURLError
from issuebridge.integrations.jira import payloads, urls
from issuebridge.integrations.jira.dispatcher import JiraDispatcher
from issuebridge.integrations.models import (
    Commit,
    ExternalIssue,
    Issue,
    Noteable,
    Project,
    User,
)
from issuebridge.logging import get_logger

logger = get_logger("integrations.jira")

DEFAULT_API_VERSION = "2"
DEFAULT_TRANSITION_ID = "2"

INTEGRATION_DOC_PATH = "/help/integration/external-issue-tracker"


class JiraService(IssueTrackerService):
    """JIRA issue tracker integration."""

    username = prop()
    password = prop()
    api_version = prop()
    jira_issue_transition_id = prop()

    def __init__(
        self,
        properties: dict[str, Any] | None = None,
        project: Project | None = None,
        active: bool = False,
        gitlab_url: str = "http://localhost",
        dispatcher: JiraDispatcher | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(properties, project=project, active=active, gitlab_url=gitlab_url)
        self.timeout = timeout
        self.transport = transport
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> JiraDispatcher:
        """Get or create the dispatcher bound to the configured credentials."""
        if self._dispatcher is None:
            self._dispatcher = JiraDispatcher(
                self.username,
                self.password,
                service_name=self.type_name(),
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._dispatcher

    def close(self) -> None:
        if self._dispatcher is not None:
            self._dispatcher.close()

    @property
    def title(self) -> str:
        return self._property_or("title", "JIRA")

    @title.setter
    def title(self, value: str | None) -> None:
        self._set_property("title", value)

    @property
    def description(self) -> str:
        return self._property_or("description", "Jira issue tracker")

    @description.setter
    def description(self, value: str | None) -> None:
        self._set_property("description", value)

    def to_param(self) -> str:
        return "jira"

    def help(self) -> str:
        issue_tracker_link = urls.resource_url(self.gitlab_url, INTEGRATION_DOC_PATH)
        line1 = (
            "Setting `project_url`, `issues_url` and `new_issue_url` will "
            "allow a user to easily navigate to the Jira issue tracker. "
            f"See the [integration doc]({issue_tracker_link}) for details."
        )
        line2 = (
            "Referencing a Jira issue key in a commit, issue or merge request "
            "posts a link back to it, and `Closes PROJ-1` in a commit message "
            "moves the issue through the configured transition."
        )
        return "\n\n".join([line1, line2])

    def fields(self) -> list[dict[str, str]]:
        return [
            *super().fields(),
            {"type": "text", "name": "username", "placeholder": ""},
            {"type": "password", "name": "password", "placeholder": ""},
            {"type": "text", "name": "api_version", "placeholder": DEFAULT_API_VERSION},
            {"type": "text", "name": "jira_issue_transition_id", "placeholder": DEFAULT_TRANSITION_ID},
        ]

    def before_validation(self) -> None:
        if not self.api_version:
            self.api_version = DEFAULT_API_VERSION
        if not self.jira_issue_transition_id:
            self.jira_issue_transition_id = DEFAULT_TRANSITION_ID

    def execute(self, push: Commit, issue: Issue | None = None) -> str | None:
        """Close issue with push, if an issue is given."""
        if issue is None:
            return None
        return self.close_issue(push, issue)

    def close_issue(self, commit: Commit, issue: Issue) -> str:
        logger.info("Closing JIRA issue %s with commit %s", issue.iid, commit.id)
        commit_url = self._build_entity_url("commit", commit.id)
        message = payloads.close_issue_payload(
            commit.id, commit_url, str(self.jira_issue_transition_id)
        )
        return self._send(urls.close_issue_url, issue.iid, message)

    def create_cross_reference_note(
        self, mentioned: ExternalIssue, noteable: Noteable, author: User
    ) -> str:
        project = self._require_project()
        data = payloads.build_cross_reference_data(
            author=author,
            author_url=urls.resource_url(self.gitlab_url, urls.user_path(author)),
            project=project,
            project_url=urls.resource_url(self.gitlab_url, urls.project_path(project)),
            noteable=noteable,
            entity_url=urls.resource_url(self.gitlab_url, urls.noteable_path(project, noteable)),
        )
        return self.add_comment(data, mentioned.id)

    def add_comment(self, data: payloads.CrossReferenceData, issue_name: str) -> str:
        logger.info("Adding cross reference note to JIRA issue %s", issue_name)
        return self._send(urls.add_comment_url, issue_name, payloads.cross_reference_payload(data))

    def _send(
        self,
        url_for: Callable[[str, str, str | int], str],
        issue_name: str | int,
        payload: dict[str, Any],
    ) -> str:
        try:
            server = urls.server_url(self.project_url or "")
        except InvalidURLError as e:
            return self.dispatcher.report_invalid_url(str(e), str(self.project_url))
        url = url_for(server, self.api_version, issue_name)
        return self.dispatcher.send(url, payloads.to_json(payload))

    def _build_entity_url(self, entity_name: str, entity_id: str | int) -> str:
        project = self._require_project()
        return urls.resource_url(self.gitlab_url, urls.entity_path(project, entity_name, entity_id))

    def _require_project(self) -> Project:
        if self.project is None:
            raise IntegrationError(f"{self.type_name()} is not attached to a project")
        return self.project
