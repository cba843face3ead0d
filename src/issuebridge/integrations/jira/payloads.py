"""Request bodies for the JIRA REST API."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any

from issuebridge.integrations.models import Noteable, Project, User, humanize, noteable_name


@dataclass
class LinkRef:
    """A named link embedded in JIRA wiki markup as [name|url]."""

    name: str
    url: str


@dataclass
class CrossReferenceData:
    """Who mentioned the external issue, where, and in what."""

    user: LinkRef
    project: LinkRef
    entity: LinkRef

    def to_dict(self) -> dict[str, dict[str, str]]:
        return asdict(self)


def close_issue_payload(commit_id: str, commit_url: str, transition_id: str) -> dict[str, Any]:
    """Comment + transition body used when a commit closes an issue."""
    return {
        "update": {
            "comment": [
                {
                    "add": {
                        "body": f"Issue solved with [{commit_id}|{commit_url}].",
                    }
                }
            ]
        },
        "transition": {"id": transition_id},
    }


def cross_reference_payload(data: CrossReferenceData) -> dict[str, Any]:
    """Comment body noting that a host entity mentioned the issue."""
    return {
        "body": (
            f"[{data.user.name}|{data.user.url}] mentioned this issue in "
            f"[a {data.entity.name} of {data.project.name}|{data.entity.url}]."
        )
    }


def build_cross_reference_data(
    author: User,
    author_url: str,
    project: Project,
    project_url: str,
    noteable: Noteable,
    entity_url: str,
) -> CrossReferenceData:
    return CrossReferenceData(
        user=LinkRef(name=author.name, url=author_url),
        project=LinkRef(name=project.path_with_namespace, url=project_url),
        entity=LinkRef(name=humanize(noteable_name(noteable)), url=entity_url),
    )


def to_json(payload: dict[str, Any]) -> str:
    """Serialize a payload the way it goes on the wire."""
    return json.dumps(payload)
