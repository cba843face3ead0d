"""Service configuration endpoints."""

from fastapi import APIRouter, status

from issuebridge.api.dependencies import ServiceFactoryDep, ServiceStoreDep
from issuebridge.api.models import (
    APIResponse,
    FieldSpec,
    ServiceFieldsResponse,
    ServiceResponse,
    ServiceUpdate,
    service_to_response,
)
from issuebridge.integrations import service_class
from issuebridge.service_store import ServiceNotFoundError, merge_properties

router = APIRouter(prefix="/projects/{project_id}/services", tags=["services"])


@router.get("", response_model=APIResponse[list[ServiceResponse]])
def list_services(
    project_id: int, store: ServiceStoreDep, factory: ServiceFactoryDep
) -> APIResponse[list[ServiceResponse]]:
    """List the services configured on a project."""
    records = store.list_services(project_id)
    return APIResponse(data=[service_to_response(r, factory.build(r)) for r in records])


@router.get("/{service}", response_model=APIResponse[ServiceResponse])
def get_service(
    project_id: int, service: str, store: ServiceStoreDep, factory: ServiceFactoryDep
) -> APIResponse[ServiceResponse]:
    """Get a project's service configuration."""
    record = store.get_project_service(project_id, service_class(service).type_name())
    return APIResponse(data=service_to_response(record, factory.build(record)))


@router.put("/{service}", response_model=APIResponse[ServiceResponse])
def update_service(
    project_id: int,
    service: str,
    update: ServiceUpdate,
    store: ServiceStoreDep,
    factory: ServiceFactoryDep,
) -> APIResponse[ServiceResponse]:
    """Create or update a project's service. Defaults are filled and the result validated."""
    cls = service_class(service)
    try:
        record = store.get_project_service(project_id, cls.type_name())
    except ServiceNotFoundError:
        record = None

    current = record.properties_dict if record is not None else {}
    active = update.active if update.active is not None else bool(record and record.active)
    instance = cls(
        properties=merge_properties(current, update.properties or {}),
        active=active,
        gitlab_url=factory.config.gitlab_url,
    )
    if update.title is not None:
        instance.title = update.title
    instance.validate()

    if record is None:
        record = store.create_service(
            project_id,
            cls.type_name(),
            title=instance.title,
            active=active,
            properties=instance.properties,
        )
    else:
        changes: dict[str, object] = {k: None for k in current if k not in instance.properties}
        changes.update(instance.properties)
        record = store.update_service(
            record.id, title=instance.title, active=active, properties=changes
        )
    return APIResponse(data=service_to_response(record, instance))


@router.delete("/{service}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(project_id: int, service: str, store: ServiceStoreDep) -> None:
    """Remove a project's service."""
    record = store.get_project_service(project_id, service_class(service).type_name())
    store.delete_service(record.id)


@router.get("/{service}/fields", response_model=APIResponse[ServiceFieldsResponse])
def get_service_fields(
    project_id: int, service: str, factory: ServiceFactoryDep
) -> APIResponse[ServiceFieldsResponse]:
    """Describe the configuration form of a service."""
    instance = service_class(service)(gitlab_url=factory.config.gitlab_url)
    return APIResponse(
        data=ServiceFieldsResponse(
            service=instance.to_param(),
            title=instance.title,
            description=instance.description,
            help=instance.help(),
            fields=[FieldSpec(**f) for f in instance.fields()],
        )
    )
