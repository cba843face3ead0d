"""SQLAlchemy models for Service Store."""

from __future__ import annotations

import json
from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class ServiceRecord(Base):
    """Service model - one integration configured on a project, or a template.

    Configuration values are kept as a JSON object in `properties`.
    """

    __tablename__ = "services"
    __table_args__ = (UniqueConstraint("project_id", "type", name="uq_services_project_type"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    properties: Mapped[str | None] = mapped_column(Text, nullable=True)
    template: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __init__(
        self,
        type: str,
        project_id: int | None = None,
        title: str | None = None,
        active: bool = False,
        properties: dict[str, Any] | None = None,
        template: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.type = type
        self.project_id = project_id
        self.title = title
        self.active = active
        self.properties = json.dumps(properties or {})
        self.template = template

    @property
    def properties_dict(self) -> dict[str, Any]:
        """Decoded properties; an empty or null column reads as {}."""
        if not self.properties:
            return {}
        data: dict[str, Any] = json.loads(self.properties)
        return data

    @properties_dict.setter
    def properties_dict(self, value: dict[str, Any]) -> None:
        self.properties = json.dumps(value)

    def __repr__(self) -> str:
        return (
            f"<ServiceRecord(id={self.id!r}, type={self.type!r}, "
            f"project_id={self.project_id!r}, template={self.template!r})>"
        )
