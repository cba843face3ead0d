"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from issuebridge.config import AppConfig
from issuebridge.integrations import IssueTrackerService, JiraService, service_class
from issuebridge.service_store import ServiceStore

if TYPE_CHECKING:
    import httpx

    from issuebridge.integrations import Project
    from issuebridge.service_store import ServiceRecord


class ServiceFactory:
    """Builds live integration objects from stored service records."""

    def __init__(self, config: AppConfig, transport: httpx.BaseTransport | None = None) -> None:
        """Initialize the factory.

        Args:
            config: Application config (host URL, HTTP timeout)
            transport: Custom httpx transport for tracker calls (for testing)
        """
        self.config = config
        self.transport = transport

    def build(
        self,
        record: ServiceRecord,
        project: Project | None = None,
    ) -> IssueTrackerService:
        """Instantiate the record's service with defaults filled in.

        Applies to records that never went through the PUT route, e.g. ones
        built from a template.
        """
        cls = service_class(record.type)
        service: IssueTrackerService
        if issubclass(cls, JiraService):
            service = cls(
                properties=record.properties_dict,
                project=project,
                active=record.active,
                gitlab_url=self.config.gitlab_url,
                timeout=self.config.http.timeout,
                transport=self.transport,
            )
        else:
            service = cls(
                properties=record.properties_dict,
                project=project,
                active=record.active,
                gitlab_url=self.config.gitlab_url,
            )
        service.before_validation()
        return service


# Global ServiceStore instance (initialized on app startup)
_service_store: ServiceStore | None = None


def init_service_store(db_path: str = "issuebridge.db") -> ServiceStore:
    """Initialize the global ServiceStore instance."""
    global _service_store  # noqa: PLW0603
    _service_store = ServiceStore(db_path)
    return _service_store


def close_service_store() -> None:
    """Close the global ServiceStore instance."""
    global _service_store  # noqa: PLW0603
    if _service_store is not None:
        _service_store.close()
        _service_store = None


def get_service_store() -> Generator[ServiceStore, None, None]:
    """Dependency that provides the ServiceStore instance."""
    if _service_store is None:
        raise RuntimeError("ServiceStore not initialized. Call init_service_store() first.")
    yield _service_store


ServiceStoreDep = Annotated[ServiceStore, Depends(get_service_store)]

# Global ServiceFactory instance (initialized on app startup)
_service_factory: ServiceFactory | None = None


def init_service_factory(
    config: AppConfig, transport: httpx.BaseTransport | None = None
) -> ServiceFactory:
    """Initialize the global ServiceFactory instance."""
    global _service_factory  # noqa: PLW0603
    _service_factory = ServiceFactory(config, transport=transport)
    return _service_factory


def close_service_factory() -> None:
    global _service_factory  # noqa: PLW0603
    _service_factory = None


def get_service_factory() -> Generator[ServiceFactory, None, None]:
    """Dependency that provides the ServiceFactory instance."""
    if _service_factory is None:
        raise RuntimeError("ServiceFactory not initialized. Call init_service_factory() first.")
    yield _service_factory


ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
