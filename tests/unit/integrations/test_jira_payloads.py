"""Unit tests for JIRA request payloads."""

import json

import pytest

from issuebridge.integrations import Commit, Issue, MergeRequest, Project, Snippet, User
from issuebridge.integrations.jira import (
    CrossReferenceData,
    LinkRef,
    build_cross_reference_data,
    close_issue_payload,
    cross_reference_payload,
)
from issuebridge.integrations.jira.payloads import to_json


@pytest.mark.unit
class TestClosePayload:
    """Tests for close_issue_payload."""

    def test_comment_links_commit(self) -> None:
        payload = close_issue_payload("b83d6e39", "http://gitlab.example.com/a/b/commit/b83d6e39", "2")

        comment = payload["update"]["comment"][0]["add"]["body"]
        assert comment == (
            "Issue solved with [b83d6e39|http://gitlab.example.com/a/b/commit/b83d6e39]."
        )

    def test_transition_id(self) -> None:
        payload = close_issue_payload("sha", "url", "31")

        assert payload["transition"] == {"id": "31"}

    def test_serializes_to_json(self) -> None:
        body = to_json(close_issue_payload("sha", "url", "2"))

        assert json.loads(body)["transition"]["id"] == "2"


@pytest.mark.unit
class TestCrossReferencePayload:
    """Tests for cross_reference_payload."""

    def test_body_format(self) -> None:
        data = CrossReferenceData(
            user=LinkRef("Ada Lovelace", "http://gl/ada"),
            project=LinkRef("gitlab-org/gitlab-ce", "http://gl/gitlab-org/gitlab-ce"),
            entity=LinkRef("merge request", "http://gl/gitlab-org/gitlab-ce/merge_requests/4"),
        )

        assert cross_reference_payload(data) == {
            "body": (
                "[Ada Lovelace|http://gl/ada] mentioned this issue in "
                "[a merge request of gitlab-org/gitlab-ce|"
                "http://gl/gitlab-org/gitlab-ce/merge_requests/4]."
            )
        }

    def test_unescaped_input_still_valid_json(self) -> None:
        data = CrossReferenceData(
            user=LinkRef('Bobby "Tables"', "http://gl/bobby"),
            project=LinkRef("a/b", "http://gl/a/b"),
            entity=LinkRef("issue", "http://gl/a/b/issues/1"),
        )

        decoded = json.loads(to_json(cross_reference_payload(data)))

        assert decoded["body"].startswith('[Bobby "Tables"|')


@pytest.mark.unit
class TestBuildCrossReferenceData:
    """Tests for build_cross_reference_data."""

    @pytest.mark.parametrize(
        ("noteable", "expected"),
        [
            (Commit(id="abc"), "commit"),
            (Issue(id=10, iid=1), "issue"),
            (MergeRequest(id=11, iid=2), "merge request"),
            (Snippet(id=12), "snippet"),
        ],
    )
    def test_entity_name_is_humanized(self, project: Project, author: User, noteable, expected) -> None:
        data = build_cross_reference_data(author, "u", project, "p", noteable, "e")

        assert data.entity.name == expected

    def test_project_name_includes_namespace(self, project: Project, author: User) -> None:
        data = build_cross_reference_data(author, "u", project, "p", Commit(id="abc"), "e")

        assert data.to_dict() == {
            "user": {"name": "Ada Lovelace", "url": "u"},
            "project": {"name": "gitlab-org/gitlab-ce", "url": "p"},
            "entity": {"name": "commit", "url": "e"},
        }
