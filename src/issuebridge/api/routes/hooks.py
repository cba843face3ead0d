"""Event endpoints that forward host activity to the JIRA integration."""

from fastapi import APIRouter

from issuebridge.api.dependencies import ServiceFactoryDep, ServiceStoreDep
from issuebridge.api.models import APIResponse, DispatchResponse, MentionEvent, PushEvent
from issuebridge.integrations import JiraService
from issuebridge.logging import get_logger

logger = get_logger("api")

router = APIRouter(prefix="/projects/{project_id}/services/jira", tags=["hooks"])


@router.post("/push", response_model=APIResponse[DispatchResponse])
def push(
    project_id: int, event: PushEvent, store: ServiceStoreDep, factory: ServiceFactoryDep
) -> APIResponse[DispatchResponse]:
    """Handle a pushed commit; closes the issue when one is given."""
    record = store.get_project_service(project_id, JiraService.type_name())
    if not record.active:
        logger.info("JIRA service inactive for project %s, skipping push", project_id)
        return APIResponse(data=DispatchResponse(executed=False))

    service = factory.build(record, event.project.to_model(project_id))
    try:
        message = service.execute(
            event.commit.to_model(),
            event.issue.to_model() if event.issue else None,
        )
    finally:
        service.close()
    return APIResponse(data=DispatchResponse(executed=message is not None, message=message))


@router.post("/mentions", response_model=APIResponse[DispatchResponse])
def mention(
    project_id: int, event: MentionEvent, store: ServiceStoreDep, factory: ServiceFactoryDep
) -> APIResponse[DispatchResponse]:
    """Post a cross reference note on the mentioned JIRA issue."""
    record = store.get_project_service(project_id, JiraService.type_name())
    if not record.active:
        logger.info("JIRA service inactive for project %s, skipping mention", project_id)
        return APIResponse(data=DispatchResponse(executed=False))

    service = factory.build(record, event.project.to_model(project_id))
    try:
        message = service.create_cross_reference_note(
            event.mentioned_issue(),
            event.noteable.to_model(),
            event.author.to_model(),
        )
    finally:
        service.close()
    return APIResponse(data=DispatchResponse(executed=True, message=message))
