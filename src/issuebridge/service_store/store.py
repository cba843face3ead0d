"""ServiceStore - Main API for persisted integration configuration."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from issuebridge.service_store.database import Database
from issuebridge.service_store.exceptions import ServiceExistsError, ServiceNotFoundError
from issuebridge.service_store.models import ServiceRecord
from issuebridge.logging import get_logger

logger = get_logger("service_store")


class ServiceStore:
    """CRUD for service records and their templates."""

    def __init__(self, db_path: str = "issuebridge.db") -> None:
        """Initialize Service Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Project services ---

    def create_service(
        self,
        project_id: int,
        type: str,
        title: str | None = None,
        active: bool = False,
        properties: dict[str, Any] | None = None,
    ) -> ServiceRecord:
        """Configure a service on a project.

        Raises:
            ServiceExistsError: If the project already has a service of this type
        """
        try:
            with self._db.session() as session:
                record = ServiceRecord(
                    type=type,
                    project_id=project_id,
                    title=title,
                    active=active,
                    properties=properties,
                )
                session.add(record)
                session.flush()
                session.refresh(record)
        except IntegrityError as e:
            raise ServiceExistsError(
                f"Project {project_id} already has a {type} service"
            ) from e
        logger.info("Created %s for project %s (id=%s)", type, project_id, record.id)
        return record

    def get_service(self, service_id: int) -> ServiceRecord:
        """Get service by ID.

        Raises:
            ServiceNotFoundError: If service doesn't exist
        """
        with self._db.session() as session:
            record = session.get(ServiceRecord, service_id)
            if record is None:
                raise ServiceNotFoundError(f"Service with id '{service_id}' not found")
            return record

    def get_project_service(self, project_id: int, type: str) -> ServiceRecord:
        """Get a project's service of the given type.

        Raises:
            ServiceNotFoundError: If the project has no such service
        """
        with self._db.session() as session:
            stmt = select(ServiceRecord).where(
                ServiceRecord.project_id == project_id,
                ServiceRecord.type == type,
                ServiceRecord.template.is_(False),
            )
            record = session.execute(stmt).scalar_one_or_none()
            if record is None:
                raise ServiceNotFoundError(f"Project {project_id} has no {type} service")
            return record

    def list_services(self, project_id: int | None = None) -> list[ServiceRecord]:
        """List project services, optionally for one project, ordered by type."""
        with self._db.session() as session:
            stmt = select(ServiceRecord).where(ServiceRecord.template.is_(False))
            if project_id is not None:
                stmt = stmt.where(ServiceRecord.project_id == project_id)
            stmt = stmt.order_by(ServiceRecord.project_id, ServiceRecord.type)
            return list(session.execute(stmt).scalars().all())

    def update_service(
        self,
        service_id: int,
        title: str | None = None,
        active: bool | None = None,
        properties: dict[str, Any] | None = None,
    ) -> ServiceRecord:
        """Update a service. Only provided fields are changed.

        `properties` is merged into the stored mapping; a None value removes
        that key.

        Raises:
            ServiceNotFoundError: If service doesn't exist
        """
        with self._db.session() as session:
            record = session.get(ServiceRecord, service_id)
            if record is None:
                raise ServiceNotFoundError(f"Service with id '{service_id}' not found")

            if title is not None:
                record.title = title
            if active is not None:
                record.active = active
            if properties is not None:
                record.properties_dict = merge_properties(record.properties_dict, properties)

            session.flush()
            session.refresh(record)
            return record

    def delete_service(self, service_id: int) -> None:
        """Delete a service.

        Raises:
            ServiceNotFoundError: If service doesn't exist
        """
        with self._db.session() as session:
            record = session.get(ServiceRecord, service_id)
            if record is None:
                raise ServiceNotFoundError(f"Service with id '{service_id}' not found")
            session.delete(record)
        logger.info("Deleted service %s", service_id)

    # --- Templates ---

    def create_template(
        self,
        type: str,
        title: str | None = None,
        active: bool = False,
        properties: dict[str, Any] | None = None,
    ) -> ServiceRecord:
        """Store the instance-wide default configuration for a service type.

        Raises:
            ServiceExistsError: If a template for this type already exists
        """
        with self._db.session() as session:
            existing = session.execute(
                select(ServiceRecord.id).where(
                    ServiceRecord.type == type, ServiceRecord.template.is_(True)
                )
            ).first()
            if existing is not None:
                raise ServiceExistsError(f"A {type} template already exists")

            record = ServiceRecord(
                type=type, title=title, active=active, properties=properties, template=True
            )
            session.add(record)
            session.flush()
            session.refresh(record)
            return record

    def get_template(self, type: str) -> ServiceRecord:
        """Get the template for a service type.

        Raises:
            ServiceNotFoundError: If no template exists
        """
        with self._db.session() as session:
            stmt = select(ServiceRecord).where(
                ServiceRecord.type == type, ServiceRecord.template.is_(True)
            )
            record = session.execute(stmt).scalar_one_or_none()
            if record is None:
                raise ServiceNotFoundError(f"No {type} template")
            return record

    def build_from_template(self, project_id: int, type: str) -> ServiceRecord:
        """Create a project service copying the template's title, state and properties.

        Raises:
            ServiceNotFoundError: If no template exists
            ServiceExistsError: If the project already has this service
        """
        template = self.get_template(type)
        return self.create_service(
            project_id,
            type,
            title=template.title,
            active=template.active,
            properties=template.properties_dict,
        )


def merge_properties(current: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Shallow-merge changes into current; None deletes a key."""
    merged = dict(current)
    for key, value in changes.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged
