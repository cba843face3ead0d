"""Host records passed into issue tracker integrations.

These are read-only views of the host application's records. Integrations
never persist them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass
class User:
    """A host application user."""

    id: int
    name: str
    username: str


@dataclass
class Namespace:
    """A group or user namespace owning projects."""

    id: int
    path: str


@dataclass
class Project:
    """A host application project."""

    id: int
    path: str
    namespace: Namespace

    @property
    def path_with_namespace(self) -> str:
        return f"{self.namespace.path}/{self.path}"


@dataclass
class Commit:
    """A pushed commit, identified by its SHA."""

    id: str
    message: str = ""

    @property
    def url_id(self) -> str:
        return self.id


@dataclass
class Issue:
    """An issue. `iid` is the project-scoped number used in URLs."""

    id: int
    iid: int
    title: str = ""

    @property
    def url_id(self) -> int:
        return self.iid


@dataclass
class MergeRequest:
    """A merge request."""

    id: int
    iid: int
    title: str = ""

    @property
    def url_id(self) -> int:
        return self.iid


@dataclass
class Snippet:
    """A project snippet. Snippets have no iid and are addressed by id."""

    id: int
    title: str = ""

    @property
    def url_id(self) -> int:
        return self.id


@dataclass
class ExternalIssue:
    """An issue living in the external tracker, e.g. JIRA key "PROJ-42"."""

    id: str


Noteable = Commit | Issue | MergeRequest | Snippet


def noteable_name(noteable: Noteable) -> str:
    """Underscored type name of a noteable ("MergeRequest" -> "merge_request")."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(noteable).__name__).lower()


def humanize(name: str) -> str:
    """Turn an underscored name into lower-case words ("merge_request" -> "merge request")."""
    return name.replace("_", " ").strip().lower()
