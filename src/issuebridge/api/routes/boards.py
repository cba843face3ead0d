"""Issue board card rendering endpoint."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from issuebridge.api.models import CardRenderRequest
from issuebridge.boards import IssueCardInner

router = APIRouter(prefix="/boards", tags=["boards"])


@router.post("/cards", response_class=HTMLResponse)
def render_card(request: CardRenderRequest) -> HTMLResponse:
    """Render the inner markup of one issue card."""
    card = IssueCardInner(
        issue=request.issue.to_model(),
        list=request.board_list.to_model() if request.board_list else None,
        issue_link_base=request.issue_link_base,
        root_path=request.root_path,
    )
    return HTMLResponse(card.to_html())
