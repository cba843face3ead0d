"""IssueTrackerService - Contract shared by external issue tracker integrations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, overload
from urllib.parse import urlsplit

from issuebridge.integrations.exceptions import ServiceValidationError
from issuebridge.integrations.models import Commit, ExternalIssue, Issue, Noteable, Project, User


class prop:  # noqa: N801 - used like a field declaration
    """Attribute stored in the owning service's `properties` mapping."""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type) -> prop: ...

    @overload
    def __get__(self, instance: IssueTrackerService, owner: type) -> Any: ...

    def __get__(self, instance: IssueTrackerService | None, owner: type) -> Any:
        if instance is None:
            return self
        return instance.properties.get(self.name)

    def __set__(self, instance: IssueTrackerService, value: Any) -> None:
        if value is None:
            instance.properties.pop(self.name, None)
        else:
            instance.properties[self.name] = value


def _is_http_url(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class IssueTrackerService(ABC):
    """Base class for integrations that forward host events to an external tracker.

    Configuration lives in a flat `properties` mapping, exposed through `prop`
    attributes. Subclasses add their own properties and implement the two
    event hooks.
    """

    URL_PROPERTIES: ClassVar[tuple[str, ...]] = ("project_url", "issues_url", "new_issue_url")

    project_url = prop()
    issues_url = prop()
    new_issue_url = prop()

    def __init__(
        self,
        properties: dict[str, Any] | None = None,
        project: Project | None = None,
        active: bool = False,
        gitlab_url: str = "http://localhost",
    ) -> None:
        """Initialize the service.

        Args:
            properties: Stored configuration values
            project: Host project the service is attached to
            active: Whether the service receives events
            gitlab_url: Public base URL of the host application
        """
        self.properties: dict[str, Any] = dict(properties or {})
        self.project = project
        self.active = active
        self.gitlab_url = gitlab_url

    @property
    def title(self) -> str:
        return self._property_or("title", "Issue tracker")

    @title.setter
    def title(self, value: str | None) -> None:
        self._set_property("title", value)

    @property
    def description(self) -> str:
        return self._property_or("description", "Issue tracker")

    @description.setter
    def description(self, value: str | None) -> None:
        self._set_property("description", value)

    def _property_or(self, name: str, default: str) -> str:
        value = self.properties.get(name)
        if isinstance(value, str) and value.strip():
            return value
        return default

    def _set_property(self, name: str, value: Any) -> None:
        if value is None:
            self.properties.pop(name, None)
        else:
            self.properties[name] = value

    def close(self) -> None:
        """Release any client held by the service."""

    @classmethod
    def type_name(cls) -> str:
        """Name stored in the service record's `type` column."""
        return cls.__name__

    @abstractmethod
    def to_param(self) -> str:
        """Short name used in routes, e.g. "jira"."""

    def help(self) -> str:
        return ""

    def fields(self) -> list[dict[str, str]]:
        """Form fields describing the service's editable configuration."""
        return [
            {"type": "text", "name": "description", "placeholder": self.description},
            {"type": "text", "name": "project_url", "placeholder": "Project url"},
            {"type": "text", "name": "issues_url", "placeholder": "Issue url"},
            {"type": "text", "name": "new_issue_url", "placeholder": "New Issue url"},
        ]

    def issue_url(self, iid: str | int) -> str:
        """External tracker link for an issue, from the `:id` issues URL template."""
        return (self.issues_url or "").replace(":id", str(iid))

    def before_validation(self) -> None:
        """Hook for filling defaults before validation."""

    def validate(self) -> None:
        """Fill defaults, then check URL properties of an active service.

        Raises:
            ServiceValidationError: Listing every failed check
        """
        self.before_validation()
        if not self.active:
            return

        errors = []
        for name in self.URL_PROPERTIES:
            value = self.properties.get(name)
            if not value:
                errors.append(f"{name} can't be blank")
            elif not _is_http_url(str(value)):
                errors.append(f"{name} is not a valid http(s) URL")
        if errors:
            raise ServiceValidationError(errors)

    @abstractmethod
    def execute(self, push: Commit, issue: Issue | None = None) -> str | None:
        """React to a pushed commit, optionally closing an issue."""

    @abstractmethod
    def create_cross_reference_note(
        self, mentioned: ExternalIssue, noteable: Noteable, author: User
    ) -> str:
        """Tell the tracker that a host entity mentioned one of its issues."""
