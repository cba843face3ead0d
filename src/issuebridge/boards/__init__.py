"""Issue boards - Reactive board models and the issue card renderer."""

from issuebridge.boards.dom import Element
from issuebridge.boards.issue_card import (
    LIMIT_BEFORE_COUNTER,
    MAX_COUNTER,
    MAX_RENDER,
    IssueCardInner,
    assignee_counter_label,
)
from issuebridge.boards.models import BoardList, ListIssue, ListLabel, ListUser
from issuebridge.boards.reactive import Reactive, ReactiveList, RenderQueue

__all__ = [
    "LIMIT_BEFORE_COUNTER",
    "MAX_COUNTER",
    "MAX_RENDER",
    "BoardList",
    "Element",
    "IssueCardInner",
    "ListIssue",
    "ListLabel",
    "ListUser",
    "Reactive",
    "ReactiveList",
    "RenderQueue",
    "assignee_counter_label",
]
