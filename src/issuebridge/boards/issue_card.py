"""IssueCardInner - Renders the body of an issue board card."""

from __future__ import annotations

from issuebridge.boards.dom import Element
from issuebridge.boards.models import BoardList, ListIssue, ListLabel, ListUser
from issuebridge.boards.reactive import RenderQueue

# Up to MAX_RENDER avatars are shown as-is; past that, LIMIT_BEFORE_COUNTER
# avatars plus a counter capped at MAX_COUNTER.
LIMIT_BEFORE_COUNTER = 3
MAX_RENDER = 4
MAX_COUNTER = 99


def assignee_counter_label(count: int) -> str | None:
    """Counter text for `count` assignees, or None when all avatars fit."""
    if count <= MAX_RENDER:
        return None
    over_limit = count - LIMIT_BEFORE_COUNTER
    if over_limit > MAX_COUNTER:
        return f"{MAX_COUNTER}+"
    return f"+{over_limit}"


class IssueCardInner:
    """Card view bound to an issue and the list it sits in.

    Changes to the issue or list schedule a re-render on `queue`; the card's
    element tree is replaced on the next tick.
    """

    def __init__(
        self,
        issue: ListIssue,
        list: BoardList | None,
        issue_link_base: str,
        root_path: str,
        queue: RenderQueue | None = None,
    ) -> None:
        self.issue = issue
        self.list = list
        self.issue_link_base = issue_link_base
        self.root_path = root_path
        self.queue = queue or RenderQueue()
        self.el = self.render()

        issue.subscribe(self._invalidate)
        if list is not None:
            list.subscribe(self._invalidate)

    def _invalidate(self) -> None:
        self.queue.schedule(self)

    def update(self) -> None:
        self.el = self.render()

    def destroy(self) -> None:
        self.issue.unsubscribe(self._invalidate)
        if self.list is not None:
            self.list.unsubscribe(self._invalidate)

    @property
    def card_url(self) -> str:
        return f"{self.issue_link_base}/{self.issue.id}"

    def assignee_url(self, assignee: ListUser) -> str:
        return f"{self.root_path}{assignee.username}"

    def show_label(self, label: ListLabel) -> bool:
        if self.list is None or self.list.label is None:
            return True
        return label.id != self.list.label.id

    def visible_assignees(self) -> list[ListUser]:
        assignees = self.issue.assignees
        if len(assignees) > MAX_RENDER:
            return assignees[:LIMIT_BEFORE_COUNTER]
        return assignees[:]

    def render(self) -> Element:
        return Element(
            "div",
            classes=["card-inner"],
            children=[self._render_header(), self._render_footer()],
        )

    def to_html(self) -> str:
        return self.el.to_html()

    def _render_header(self) -> Element:
        title = Element("h4", classes=["card-title"])
        if self.issue.confidential:
            title.children.append(
                Element(
                    "i",
                    classes=["fa", "fa-eye-slash", "confidential-icon"],
                    attrs={"aria-hidden": "true"},
                )
            )
        title.children.append(
            Element(
                "a",
                classes=["js-no-trigger"],
                attrs={"href": self.card_url, "title": self.issue.title},
                text=self.issue.title,
            )
        )
        title.children.append(
            Element("span", classes=["card-number"], text=f"#{self.issue.id}")
        )

        assignee = Element("div", classes=["card-assignee"])
        for user in self.visible_assignees():
            assignee.children.append(
                Element(
                    "a",
                    classes=["user-avatar-link", "js-no-trigger"],
                    attrs={
                        "href": self.assignee_url(user),
                        "title": f"Assigned to {user.name}",
                    },
                    children=[
                        Element(
                            "img",
                            classes=["avatar", "avatar-inline", "s20"],
                            attrs={"src": user.avatar, "alt": f"Avatar for {user.name}"},
                        )
                    ],
                )
            )

        counter = assignee_counter_label(len(self.issue.assignees))
        if counter is not None:
            assignee.children.append(
                Element(
                    "span",
                    classes=["avatar-counter"],
                    attrs={"title": f"{counter} more"},
                    text=counter,
                )
            )

        return Element("div", classes=["card-header"], children=[title, assignee])

    def _render_footer(self) -> Element:
        footer = Element("div", classes=["card-footer"])
        for label in self.issue.labels:
            if not self.show_label(label):
                continue
            footer.children.append(
                Element(
                    "button",
                    classes=["label", "color-label", "has-tooltip"],
                    attrs={
                        "type": "button",
                        "title": label.description,
                        "style": f"background-color: {label.color}; color: {label.text_color};",
                    },
                    text=label.title,
                )
            )
        return footer
