"""Issue board models."""

from __future__ import annotations

from collections.abc import Iterable

from issuebridge.boards.reactive import Reactive


class ListUser(Reactive):
    """An assignee shown on a card."""

    def __init__(self, id: int, name: str, username: str, avatar: str = "") -> None:
        super().__init__()
        self.id = id
        self.name = name
        self.username = username
        self.avatar = avatar

    def __repr__(self) -> str:
        return f"<ListUser(id={self.id!r}, username={self.username!r})>"


class ListLabel(Reactive):
    """A label chip on a card."""

    def __init__(
        self,
        id: int,
        title: str,
        color: str = "",
        text_color: str = "",
        description: str = "",
    ) -> None:
        super().__init__()
        self.id = id
        self.title = title
        self.color = color
        self.text_color = text_color
        self.description = description

    def __repr__(self) -> str:
        return f"<ListLabel(id={self.id!r}, title={self.title!r})>"


class ListIssue(Reactive):
    """An issue as displayed on a board. `id` is the project-scoped iid."""

    def __init__(
        self,
        title: str,
        iid: int,
        confidential: bool = False,
        labels: Iterable[ListLabel] = (),
        assignees: Iterable[ListUser] = (),
    ) -> None:
        super().__init__()
        self.title = title
        self.iid = iid
        self.confidential = confidential
        self.labels = list(labels)
        self.assignees = list(assignees)

    @property
    def id(self) -> int:
        return self.iid

    def find_label(self, label: ListLabel) -> ListLabel | None:
        return next((lbl for lbl in self.labels if lbl.title == label.title), None)

    def add_label(self, label: ListLabel) -> None:
        if self.find_label(label) is None:
            self.labels.append(label)

    def remove_label(self, label: ListLabel) -> None:
        found = self.find_label(label)
        if found is not None:
            self.labels.remove(found)

    def remove_labels(self, labels: Iterable[ListLabel]) -> None:
        for label in labels:
            self.remove_label(label)

    def find_assignee(self, user: ListUser) -> ListUser | None:
        return next((u for u in self.assignees if u.id == user.id), None)

    def add_assignee(self, user: ListUser) -> None:
        if self.find_assignee(user) is None:
            self.assignees.append(user)

    def remove_assignee(self, user: ListUser) -> None:
        found = self.find_assignee(user)
        if found is not None:
            self.assignees.remove(found)

    def remove_all_assignees(self) -> None:
        self.assignees.clear()

    def __repr__(self) -> str:
        return f"<ListIssue(iid={self.iid!r}, title={self.title!r})>"


class BoardList(Reactive):
    """A board column. Label lists carry the label that defines them."""

    def __init__(
        self,
        id: int,
        title: str,
        type: str = "label",
        label: ListLabel | None = None,
    ) -> None:
        super().__init__()
        self.id = id
        self.title = title
        self.type = type
        self.label = label
