"""Tenant database model."""

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import Date, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentroll.core.database import Base
from rentroll.models.enums import (
    DocumentType,
    LeaseStatus,
    MaintenancePriority,
    MaintenanceStatus,
    PaymentMethod,
    PaymentStatus,
    TenantStatus,
)
from rentroll.models.property import Property


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Tenant(Base):
    """Tenant entity bound to one unit of one property.

    ``property_id`` is a plain column rather than a foreign key: deleting a
    property leaves its tenants in place with a dangling reference.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    first_name: Mapped[str] = mapped_column(String(50))
    last_name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(10))
    property_id: Mapped[str] = mapped_column(String(36), index=True)
    unit_number: Mapped[str] = mapped_column(String(50))

    # Lease details
    lease_start_date: Mapped[date] = mapped_column(Date)
    lease_end_date: Mapped[date] = mapped_column(Date, index=True)
    monthly_rent: Mapped[float] = mapped_column(Float)
    security_deposit: Mapped[float] = mapped_column(Float)
    payment_day: Mapped[int] = mapped_column(default=1)

    status: Mapped[TenantStatus] = mapped_column(
        String(20), index=True, default=TenantStatus.ACTIVE
    )

    # Emergency contact
    emergency_contact_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    emergency_contact_relationship: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    emergency_contact_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(default=_utcnow, onupdate=_utcnow)

    # Relationships
    parent_property: Mapped[Property | None] = relationship(
        primaryjoin="foreign(Tenant.property_id) == Property.id",
        viewonly=True,
    )
    documents: Mapped[list["TenantDocument"]] = relationship(
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    payment_history: Mapped[list["TenantPayment"]] = relationship(
        back_populates="tenant",
        cascade="all, delete-orphan",
    )
    maintenance_requests: Mapped[list["TenantMaintenanceRequest"]] = relationship(
        back_populates="tenant",
        cascade="all, delete-orphan",
        order_by="TenantMaintenanceRequest.created_at",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE

    def get_lease_status(self, today: date | None = None) -> LeaseStatus:
        """Classify today against the lease interval."""
        today = today or date.today()
        if self.lease_end_date < today:
            return LeaseStatus.EXPIRED
        if self.lease_start_date > today:
            return LeaseStatus.FUTURE
        return LeaseStatus.ACTIVE

    def get_days_until_lease_end(self, today: date | None = None) -> int:
        """Whole days from today to the lease end date (negative once expired)."""
        today = today or date.today()
        return (self.lease_end_date - today).days

    @property
    def lease_status(self) -> LeaseStatus:
        return self.get_lease_status()

    @property
    def days_until_lease_end(self) -> int:
        return self.get_days_until_lease_end()

    @property
    def lease_details(self) -> dict:
        return {
            "start_date": self.lease_start_date,
            "end_date": self.lease_end_date,
            "monthly_rent": self.monthly_rent,
            "security_deposit": self.security_deposit,
            "payment_day": self.payment_day,
        }

    @property
    def emergency_contact(self) -> dict[str, str | None]:
        return {
            "name": self.emergency_contact_name,
            "relationship": self.emergency_contact_relationship,
            "phone": self.emergency_contact_phone,
        }


class TenantDocument(Base):
    """Metadata for a document on file for a tenant."""

    __tablename__ = "tenant_documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    tenant_id: Mapped[str] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True)
    type: Mapped[DocumentType | None] = mapped_column(String(30), nullable=True)
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(default=_utcnow)

    tenant: Mapped["Tenant"] = relationship(back_populates="documents")


class TenantPayment(Base):
    """A single rent payment record."""

    __tablename__ = "tenant_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    tenant_id: Mapped[str] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_method: Mapped[PaymentMethod | None] = mapped_column(String(20), nullable=True)
    status: Mapped[PaymentStatus] = mapped_column(String(20), default=PaymentStatus.PENDING)
    month: Mapped[str | None] = mapped_column(String(20), nullable=True)
    year: Mapped[int | None] = mapped_column(nullable=True)
    transaction_id: Mapped[str | None] = mapped_column(String(100), nullable=True)

    tenant: Mapped["Tenant"] = relationship(back_populates="payment_history")


class TenantMaintenanceRequest(Base):
    """Maintenance request raised by a tenant."""

    __tablename__ = "tenant_maintenance_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    tenant_id: Mapped[str] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[MaintenancePriority] = mapped_column(
        String(20), default=MaintenancePriority.MEDIUM
    )
    status: Mapped[MaintenanceStatus] = mapped_column(
        String(20), default=MaintenanceStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(default=_utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    tenant: Mapped["Tenant"] = relationship(back_populates="maintenance_requests")
