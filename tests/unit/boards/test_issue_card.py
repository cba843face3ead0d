"""Unit tests for the issue card component."""

import pytest

from issuebridge.boards import (
    BoardList,
    IssueCardInner,
    ListIssue,
    ListLabel,
    ListUser,
    RenderQueue,
    assignee_counter_label,
)


@pytest.fixture
def user() -> ListUser:
    return ListUser(id=1, name="testing 123", username="test", avatar="test_image")


@pytest.fixture
def label1() -> ListLabel:
    return ListLabel(id=3, title="testing 123", color="blue", text_color="white", description="test")


@pytest.fixture
def board_list() -> BoardList:
    """A label list whose own label is already on the issue."""
    return BoardList(
        id=1,
        title="Test",
        type="label",
        label=ListLabel(id=5, title="Testing", color="red", description="testing;"),
    )


@pytest.fixture
def issue(board_list: BoardList) -> ListIssue:
    return ListIssue(
        title="Testing",
        iid=1,
        confidential=False,
        labels=[board_list.label],
        assignees=[],
    )


@pytest.fixture
def queue() -> RenderQueue:
    return RenderQueue()


@pytest.fixture
def component(issue: ListIssue, board_list: BoardList, queue: RenderQueue) -> IssueCardInner:
    return IssueCardInner(
        issue=issue,
        list=board_list,
        issue_link_base="/test",
        root_path="/",
        queue=queue,
    )


def _make_users(start: int, stop: int) -> list[ListUser]:
    return [ListUser(id=i, name=f"user{i}", username=f"user{i}", avatar="test_image") for i in range(start, stop)]


@pytest.mark.unit
class TestTitle:
    """Tests for the card title."""

    def test_renders_issue_title(self, component: IssueCardInner, issue: ListIssue) -> None:
        assert issue.title in component.el.select_one(".card-title").text_content

    def test_includes_issue_base_in_link(self, component: IssueCardInner) -> None:
        assert "/test" in component.el.select_one(".card-title a").get_attribute("href")

    def test_link_points_to_issue(self, component: IssueCardInner) -> None:
        assert component.el.select_one(".card-title a").get_attribute("href") == "/test/1"

    def test_includes_issue_title_on_link(self, component: IssueCardInner, issue: ListIssue) -> None:
        assert component.el.select_one(".card-title a").get_attribute("title") == issue.title

    def test_does_not_render_confidential_icon(self, component: IssueCardInner) -> None:
        assert component.el.select_one(".confidential-icon") is None

    def test_renders_confidential_icon(self, component: IssueCardInner, queue: RenderQueue) -> None:
        component.issue.confidential = True

        queue.next_tick()

        icon = component.el.select_one(".confidential-icon")
        assert icon is not None
        assert "fa-eye-slash" in icon.classes

    def test_renders_issue_id_with_hash(self, component: IssueCardInner, issue: ListIssue) -> None:
        assert f"#{issue.id}" in component.el.select_one(".card-number").text_content


@pytest.mark.unit
class TestAssignee:
    """Tests for a single assignee."""

    def test_does_not_render_assignee(self, component: IssueCardInner) -> None:
        assert component.el.select_one(".card-assignee .avatar") is None

    def test_renders_assignee(
        self, component: IssueCardInner, queue: RenderQueue, user: ListUser
    ) -> None:
        component.issue.assignees = [user]
        queue.next_tick()

        assert component.el.select_one(".card-assignee .avatar") is not None
        assert component.el.select_one(".card-assignee img") is not None

    def test_sets_title(self, component: IssueCardInner, queue: RenderQueue, user: ListUser) -> None:
        component.issue.assignees = [user]
        queue.next_tick()

        title = component.el.select_one(".card-assignee a").get_attribute("title")
        assert f"Assigned to {user.name}" in title

    def test_sets_users_path(
        self, component: IssueCardInner, queue: RenderQueue, user: ListUser
    ) -> None:
        component.issue.assignees = [user]
        queue.next_tick()

        assert component.el.select_one(".card-assignee a").get_attribute("href") == "/test"


@pytest.mark.unit
class TestMultipleAssignees:
    """Tests for avatar overflow."""

    def test_renders_all_four_assignees(
        self, component: IssueCardInner, queue: RenderQueue, user: ListUser
    ) -> None:
        component.issue.assignees = [user, *_make_users(2, 5)]
        queue.next_tick()

        assert len(component.el.select(".card-assignee .avatar")) == 4
        assert component.el.select_one(".card-assignee .avatar-counter") is None

    def test_more_than_four_renders_counter(
        self, component: IssueCardInner, queue: RenderQueue, user: ListUser
    ) -> None:
        component.issue.assignees = [user, *_make_users(2, 5)]
        queue.next_tick()
        component.issue.assignees.append(ListUser(id=5, name="user5", username="user5"))
        queue.next_tick()

        assert component.el.select_one(".card-assignee .avatar-counter").text_content == "+2"
        assert len(component.el.select(".card-assignee .avatar")) == 3

    def test_counter_caps_at_99_plus(
        self, component: IssueCardInner, queue: RenderQueue, user: ListUser
    ) -> None:
        component.issue.assignees = [user, *_make_users(2, 6)]
        queue.next_tick()
        for u in _make_users(6, 105):
            component.issue.assignees.append(u)
        queue.next_tick()

        assert component.el.select_one(".card-assignee .avatar-counter").text_content == "99+"

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, None), (4, None), (5, "+2"), (102, "+99"), (103, "99+"), (500, "99+")],
    )
    def test_counter_label(self, count: int, expected: str | None) -> None:
        assert assignee_counter_label(count) == expected


@pytest.mark.unit
class TestLabels:
    """Tests for label chips."""

    def test_does_not_render_list_label(self, component: IssueCardInner) -> None:
        assert component.el.select_one(".label") is None

    def test_renders_added_label(
        self, component: IssueCardInner, queue: RenderQueue, label1: ListLabel
    ) -> None:
        component.issue.add_label(label1)
        queue.next_tick()

        labels = component.el.select(".label")
        assert len(labels) == 1
        assert label1.title in labels[0].text_content

    def test_sets_label_description_as_title(
        self, component: IssueCardInner, queue: RenderQueue, label1: ListLabel
    ) -> None:
        component.issue.add_label(label1)
        queue.next_tick()

        assert label1.description in component.el.select_one(".label").get_attribute("title")

    def test_sets_background_color(
        self, component: IssueCardInner, queue: RenderQueue, label1: ListLabel
    ) -> None:
        component.issue.add_label(label1)
        queue.next_tick()

        style = component.el.select_one(".label").get_attribute("style")
        assert f"background-color: {label1.color};" in style
        assert f"color: {label1.text_color};" in style

    def test_all_labels_shown_without_list(self, issue: ListIssue, label1: ListLabel) -> None:
        issue.add_label(label1)

        card = IssueCardInner(issue=issue, list=None, issue_link_base="/test", root_path="/")

        assert len(card.el.select(".label")) == 2


@pytest.mark.unit
class TestRendering:
    """Tests for render scheduling and HTML output."""

    def test_changes_wait_for_next_tick(self, component: IssueCardInner, queue: RenderQueue) -> None:
        component.issue.title = "Renamed"

        assert component.el.select_one(".card-title a").text_content == "Testing"
        assert queue.pending == 1

    def test_last_write_before_tick_wins(
        self, component: IssueCardInner, queue: RenderQueue
    ) -> None:
        component.issue.title = "First"
        component.issue.title = "Second"
        queue.next_tick()

        assert component.el.select_one(".card-title a").text_content == "Second"
        assert queue.pending == 0

    def test_nested_model_change_rerenders(
        self, component: IssueCardInner, queue: RenderQueue, user: ListUser
    ) -> None:
        component.issue.assignees = [user]
        queue.next_tick()

        user.name = "Renamed User"
        queue.next_tick()

        assert component.el.select_one(".card-assignee a").get_attribute("title") == (
            "Assigned to Renamed User"
        )

    def test_destroyed_card_stops_updating(
        self, component: IssueCardInner, queue: RenderQueue
    ) -> None:
        component.destroy()
        component.issue.title = "Renamed"

        assert queue.pending == 0

    def test_to_html_escapes_text(self, queue: RenderQueue) -> None:
        issue = ListIssue(title="<script>alert(1)</script>", iid=9)
        card = IssueCardInner(issue=issue, list=None, issue_link_base="/b", root_path="/", queue=queue)

        html = card.to_html()

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert '<a class="js-no-trigger" href="/b/9"' in html
