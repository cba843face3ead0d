"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, Literal, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from issuebridge.boards import BoardList, ListIssue, ListLabel, ListUser
from issuebridge.integrations import (
    Commit,
    ExternalIssue,
    Issue,
    IssueTrackerService,
    MergeRequest,
    Namespace,
    Project,
    Snippet,
    User,
)
from issuebridge.integrations.models import Noteable

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Service models


class ServiceUpdate(BaseModel):
    """Request model for configuring a service (partial update).

    A null property value removes the stored key.
    """

    title: str | None = Field(default=None, max_length=255)
    active: bool | None = None
    properties: dict[str, str | None] | None = None


class ServiceResponse(BaseModel):
    """Response model for a configured service. Password fields are never returned."""

    id: int
    service: str
    type: str
    project_id: int | None
    title: str
    description: str
    active: bool
    properties: dict[str, Any]
    created_at: datetime
    updated_at: datetime


def service_to_response(record: Any, service: IssueTrackerService) -> ServiceResponse:
    """Combine a stored record with its live service into a ServiceResponse."""
    secret = {f["name"] for f in service.fields() if f["type"] == "password"}
    return ServiceResponse(
        id=record.id,
        service=service.to_param(),
        type=record.type,
        project_id=record.project_id,
        title=record.title or service.title,
        description=service.description,
        active=record.active,
        properties={k: v for k, v in record.properties_dict.items() if k not in secret},
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class FieldSpec(BaseModel):
    """One form field of a service's configuration."""

    type: str
    name: str
    placeholder: str = ""


class ServiceFieldsResponse(BaseModel):
    """Form description and help text for a service."""

    service: str
    title: str
    description: str
    help: str
    fields: list[FieldSpec]


# Host event models


class UserIn(BaseModel):
    id: int
    name: str
    username: str

    def to_model(self) -> User:
        return User(id=self.id, name=self.name, username=self.username)


class NamespaceIn(BaseModel):
    id: int
    path: str = Field(..., min_length=1)


class ProjectIn(BaseModel):
    """Project path information; the id comes from the URL."""

    path: str = Field(..., min_length=1)
    namespace: NamespaceIn

    def to_model(self, project_id: int) -> Project:
        return Project(
            id=project_id,
            path=self.path,
            namespace=Namespace(id=self.namespace.id, path=self.namespace.path),
        )


class CommitIn(BaseModel):
    id: str = Field(..., min_length=1)
    message: str = ""

    def to_model(self) -> Commit:
        return Commit(id=self.id, message=self.message)


class IssueIn(BaseModel):
    id: int
    iid: int
    title: str = ""

    def to_model(self) -> Issue:
        return Issue(id=self.id, iid=self.iid, title=self.title)


class NoteableIn(BaseModel):
    """The host entity that mentioned an external issue."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: Literal["commit", "issue", "merge_request", "snippet"]
    id: str
    iid: int | None = None
    title: str = ""

    @model_validator(mode="after")
    def check_numeric_id(self) -> Self:
        """Only commits are identified by a non-numeric id (the SHA)."""
        if self.type != "commit" and not self.id.isdecimal():
            raise ValueError(f"{self.type} id must be numeric, got {self.id!r}")
        return self

    def to_model(self) -> Noteable:
        if self.type == "commit":
            return Commit(id=self.id)
        if self.type == "snippet":
            return Snippet(id=int(self.id), title=self.title)
        iid = self.iid if self.iid is not None else int(self.id)
        if self.type == "issue":
            return Issue(id=int(self.id), iid=iid, title=self.title)
        return MergeRequest(id=int(self.id), iid=iid, title=self.title)


class PushEvent(BaseModel):
    """A pushed commit, optionally closing an external issue."""

    project: ProjectIn
    commit: CommitIn
    issue: IssueIn | None = None


class MentionEvent(BaseModel):
    """A host entity mentioning an external issue key."""

    project: ProjectIn
    mentioned: str = Field(..., min_length=1)
    noteable: NoteableIn
    author: UserIn

    def mentioned_issue(self) -> ExternalIssue:
        return ExternalIssue(id=self.mentioned)


class DispatchResponse(BaseModel):
    """Outcome of forwarding an event to the tracker."""

    executed: bool
    message: str | None = None


# Board models


class BoardUserIn(BaseModel):
    id: int
    name: str
    username: str
    avatar: str = ""

    def to_model(self) -> ListUser:
        return ListUser(id=self.id, name=self.name, username=self.username, avatar=self.avatar)


class LabelIn(BaseModel):
    id: int
    title: str
    color: str = ""
    text_color: str = ""
    description: str = ""

    def to_model(self) -> ListLabel:
        return ListLabel(
            id=self.id,
            title=self.title,
            color=self.color,
            text_color=self.text_color,
            description=self.description,
        )


class CardIssueIn(BaseModel):
    title: str
    iid: int
    confidential: bool = False
    labels: list[LabelIn] = Field(default_factory=list)
    assignees: list[BoardUserIn] = Field(default_factory=list)

    def to_model(self) -> ListIssue:
        return ListIssue(
            title=self.title,
            iid=self.iid,
            confidential=self.confidential,
            labels=[label.to_model() for label in self.labels],
            assignees=[user.to_model() for user in self.assignees],
        )


class BoardListIn(BaseModel):
    id: int
    title: str
    type: str = "label"
    label: LabelIn | None = None

    def to_model(self) -> BoardList:
        return BoardList(
            id=self.id,
            title=self.title,
            type=self.type,
            label=self.label.to_model() if self.label else None,
        )


class CardRenderRequest(BaseModel):
    """Request model for rendering one issue card."""

    model_config = ConfigDict(populate_by_name=True)

    issue: CardIssueIn
    board_list: BoardListIn | None = Field(default=None, alias="list")
    issue_link_base: str
    root_path: str = "/"
