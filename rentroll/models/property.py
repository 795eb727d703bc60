"""Property database model."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentroll.core.database import Base
from rentroll.models.enums import (
    MaintenancePriority,
    MaintenanceStatus,
    PropertyStatus,
    PropertyType,
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Property(Base):
    """Property entity that tenants occupy units of."""

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), index=True)
    address: Mapped[str] = mapped_column(String(255))
    type: Mapped[PropertyType] = mapped_column(
        String(20), index=True, default=PropertyType.APARTMENT
    )
    units: Mapped[int]
    rent: Mapped[float] = mapped_column(Float, index=True)
    status: Mapped[PropertyStatus] = mapped_column(
        String(20), index=True, default=PropertyStatus.AVAILABLE
    )
    amenities: Mapped[list[str]] = mapped_column(JSON, default=list)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Owner contact details
    owner_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    owner_contact: Mapped[str | None] = mapped_column(String(100), nullable=True)
    owner_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Maintained by the occupancy service, never by property edits
    occupied_units: Mapped[int] = mapped_column(default=0)

    created_at: Mapped[datetime] = mapped_column(default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=_utcnow, onupdate=_utcnow)

    # Relationships
    maintenance_requests: Mapped[list["PropertyMaintenanceRequest"]] = relationship(
        back_populates="parent_property",
        cascade="all, delete-orphan",
        order_by="PropertyMaintenanceRequest.created_at",
    )

    @property
    def occupancy_rate(self) -> float:
        """Percentage of units occupied, rounded to 2 decimals."""
        if not self.units:
            return 0.0
        return round(self.occupied_units / self.units * 100, 2)

    @property
    def available_units(self) -> int:
        return self.units - self.occupied_units

    @property
    def owner(self) -> dict[str, str | None]:
        return {
            "name": self.owner_name,
            "contact": self.owner_contact,
            "email": self.owner_email,
        }


class PropertyMaintenanceRequest(Base):
    """Maintenance request filed against a property."""

    __tablename__ = "property_maintenance_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    property_id: Mapped[str] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[MaintenancePriority] = mapped_column(
        String(20), default=MaintenancePriority.MEDIUM
    )
    status: Mapped[MaintenanceStatus] = mapped_column(
        String(20), default=MaintenanceStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(default=_utcnow)

    parent_property: Mapped["Property"] = relationship(back_populates="maintenance_requests")
