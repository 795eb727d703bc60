"""Tenant Pydantic schemas for request/response validation."""

import re
from datetime import date, datetime

from pydantic import AliasChoices, Field, field_validator, model_validator

from rentroll.models.enums import (
    DocumentType,
    LeaseStatus,
    MaintenancePriority,
    MaintenanceStatus,
    PaymentMethod,
    PaymentStatus,
    TenantStatus,
)
from rentroll.schemas.base import CamelModel
from rentroll.schemas.property import PropertyResponse, PropertySummary

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


class LeaseDetails(CamelModel):
    """Lease interval and money terms."""

    start_date: date
    end_date: date
    monthly_rent: float = Field(ge=0)
    security_deposit: float = Field(ge=0)
    payment_day: int = Field(default=1, ge=1, le=31)

    @model_validator(mode="after")
    def check_dates(self) -> "LeaseDetails":
        """Ensure the lease ends after it starts."""
        if self.end_date <= self.start_date:
            raise ValueError("Lease end date must be after start date")
        return self


class LeaseDetailsUpdate(CamelModel):
    """Partial lease update, merged over the stored lease before validation."""

    start_date: date | None = None
    end_date: date | None = None
    monthly_rent: float | None = None
    security_deposit: float | None = None
    payment_day: int | None = None


class EmergencyContact(CamelModel):
    name: str | None = None
    relationship: str | None = None
    phone: str | None = None


class DocumentCreate(CamelModel):
    type: DocumentType | None = None
    file_name: str | None = None
    uploaded_at: datetime | None = None


class PaymentCreate(CamelModel):
    """Schema for recording a rent payment."""

    amount: float | None = Field(default=None, ge=0)
    payment_date: date | None = None
    payment_method: PaymentMethod | None = None
    status: PaymentStatus = PaymentStatus.PENDING
    month: str | None = None
    year: int | None = None
    transaction_id: str | None = None


class TenantMaintenanceCreate(CamelModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    status: MaintenanceStatus = MaintenanceStatus.PENDING


class TenantMaintenanceStatusUpdate(CamelModel):
    status: MaintenanceStatus


class TenantCreate(CamelModel):
    """Schema for creating a new tenant.

    Also used to re-validate the merged record on update.
    """

    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: str = Field(max_length=254)
    phone: str
    property_id: str = Field(alias="property", min_length=1)
    unit_number: str = Field(min_length=1, max_length=50)
    lease_details: LeaseDetails
    status: TenantStatus = TenantStatus.ACTIVE
    emergency_contact: EmergencyContact | None = None
    documents: list[DocumentCreate] = Field(default_factory=list)
    payment_history: list[PaymentCreate] = Field(default_factory=list)
    maintenance_requests: list[TenantMaintenanceCreate] = Field(default_factory=list)
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Lowercase and check the address shape."""
        v = v.lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please provide a valid email")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        if not PHONE_PATTERN.match(v):
            raise ValueError("Please provide a valid 10-digit phone number")
        return v


class TenantUpdate(CamelModel):
    """Schema for updating a tenant. Omitted fields keep their values.

    Supplying ``documents``, ``paymentHistory`` or ``maintenanceRequests``
    replaces the stored list.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = Field(default=None, max_length=254)
    phone: str | None = None
    property_id: str | None = Field(default=None, alias="property")
    unit_number: str | None = None
    lease_details: LeaseDetailsUpdate | None = None
    status: TenantStatus | None = None
    emergency_contact: EmergencyContact | None = None
    documents: list[DocumentCreate] | None = None
    payment_history: list[PaymentCreate] | None = None
    maintenance_requests: list[TenantMaintenanceCreate] | None = None
    notes: str | None = None


class DocumentResponse(CamelModel):
    id: str
    type: DocumentType | None
    file_name: str | None
    uploaded_at: datetime


class PaymentResponse(CamelModel):
    id: str
    amount: float | None
    payment_date: date | None
    payment_method: PaymentMethod | None
    status: PaymentStatus
    month: str | None
    year: int | None
    transaction_id: str | None


class TenantMaintenanceResponse(CamelModel):
    id: str
    title: str | None
    description: str | None
    priority: MaintenancePriority
    status: MaintenanceStatus
    created_at: datetime
    completed_at: datetime | None


class LeaseDetailsResponse(CamelModel):
    start_date: date
    end_date: date
    monthly_rent: float
    security_deposit: float
    payment_day: int


class TenantResponse(CamelModel):
    """Schema for tenant response with a property summary."""

    id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    property_id: str
    property: PropertySummary | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_property", "property"),
        serialization_alias="property",
    )
    unit_number: str
    lease_details: LeaseDetailsResponse
    lease_status: LeaseStatus
    days_until_lease_end: int
    status: TenantStatus
    emergency_contact: EmergencyContact
    documents: list[DocumentResponse]
    payment_history: list[PaymentResponse]
    maintenance_requests: list[TenantMaintenanceResponse]
    notes: str | None
    created_at: datetime
    updated_at: datetime


class TenantDetailResponse(TenantResponse):
    """Tenant response with the full property expanded."""

    property: PropertyResponse | None = Field(
        default=None,
        validation_alias=AliasChoices("parent_property", "property"),
        serialization_alias="property",
    )


class TenantList(CamelModel):
    """Paginated tenant listing."""

    tenants: list[TenantResponse]
    current_page: int
    total_pages: int
    total_tenants: int


class TenantMutationResponse(CamelModel):
    message: str
    tenant: TenantDetailResponse


class TenantDeleteResponse(CamelModel):
    message: str
    deleted_tenant: TenantResponse


class TenantStats(CamelModel):
    """Aggregate figures across all tenants."""

    total_tenants: int
    active_tenants: int
    inactive_tenants: int
    pending_tenants: int
    evicted_tenants: int
    average_rent: int
    total_monthly_revenue: float
