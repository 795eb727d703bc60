"""Tenant service for business logic."""

import logging
import math
from datetime import UTC, datetime

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rentroll.core.exceptions import ConflictError, NotFoundError, ValidationError
from rentroll.core.ids import parse_id
from rentroll.models.enums import MaintenanceStatus, TenantStatus
from rentroll.models.tenant import (
    Tenant,
    TenantDocument,
    TenantMaintenanceRequest,
    TenantPayment,
)
from rentroll.schemas.tenant import (
    DocumentCreate,
    PaymentCreate,
    TenantCreate,
    TenantMaintenanceCreate,
    TenantMaintenanceStatusUpdate,
    TenantResponse,
    TenantStats,
    TenantUpdate,
)
from rentroll.services import occupancy
from rentroll.services.property import round_half_up

logger = logging.getLogger(__name__)

SUB_RECORD_FIELDS = {"documents", "payment_history", "maintenance_requests"}


def _build_documents(documents: list[DocumentCreate]) -> list[TenantDocument]:
    built = []
    for doc in documents:
        record = TenantDocument(type=doc.type, file_name=doc.file_name)
        if doc.uploaded_at:
            record.uploaded_at = doc.uploaded_at
        built.append(record)
    return built


def _build_payment(payment: PaymentCreate) -> TenantPayment:
    return TenantPayment(**payment.model_dump())


def _build_maintenance(request: TenantMaintenanceCreate) -> TenantMaintenanceRequest:
    record = TenantMaintenanceRequest(**request.model_dump())
    if request.status == MaintenanceStatus.COMPLETED:
        record.completed_at = datetime.now(UTC)
    return record


def _apply_fields(tenant: Tenant, tenant_data: TenantCreate) -> None:
    tenant.first_name = tenant_data.first_name
    tenant.last_name = tenant_data.last_name
    tenant.email = tenant_data.email
    tenant.phone = tenant_data.phone
    tenant.property_id = tenant_data.property_id
    tenant.unit_number = tenant_data.unit_number
    tenant.status = tenant_data.status

    lease = tenant_data.lease_details
    tenant.lease_start_date = lease.start_date
    tenant.lease_end_date = lease.end_date
    tenant.monthly_rent = lease.monthly_rent
    tenant.security_deposit = lease.security_deposit
    tenant.payment_day = lease.payment_day

    contact = tenant_data.emergency_contact
    tenant.emergency_contact_name = contact.name if contact else None
    tenant.emergency_contact_relationship = contact.relationship if contact else None
    tenant.emergency_contact_phone = contact.phone if contact else None
    tenant.notes = tenant_data.notes


def _editable_fields(tenant: Tenant) -> dict:
    """Current values of every scalar field a client may edit."""
    return {
        "first_name": tenant.first_name,
        "last_name": tenant.last_name,
        "email": tenant.email,
        "phone": tenant.phone,
        "property_id": tenant.property_id,
        "unit_number": tenant.unit_number,
        "lease_details": tenant.lease_details,
        "status": tenant.status,
        "emergency_contact": tenant.emergency_contact,
        "notes": tenant.notes,
    }


def _ensure_email_free(db: Session, email: str, exclude_tenant_id: str | None = None) -> None:
    query = db.query(Tenant).filter(Tenant.email == email)
    if exclude_tenant_id:
        query = query.filter(Tenant.id != exclude_tenant_id)
    if query.first():
        raise ConflictError("Email already exists")


def _commit(db: Session) -> None:
    """Commit, turning a unique-constraint race into a conflict."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Email already exists") from exc


def create_tenant(db: Session, tenant_data: TenantCreate) -> Tenant:
    """Create a tenant and take their unit on the referenced property."""
    property_id = parse_id(tenant_data.property_id, "property")
    tenant_data = tenant_data.model_copy(update={"property_id": property_id})

    tenant = Tenant()
    _apply_fields(tenant, tenant_data)
    tenant.documents = _build_documents(tenant_data.documents)
    tenant.payment_history = [_build_payment(p) for p in tenant_data.payment_history]
    tenant.maintenance_requests = [
        _build_maintenance(r) for r in tenant_data.maintenance_requests
    ]

    db_property = occupancy.check_new_tenant(db, tenant)
    _ensure_email_free(db, tenant.email)
    occupancy.on_tenant_created(db, tenant, db_property)
    _commit(db)
    db.refresh(tenant)
    logger.info(
        "Created tenant %s (%s) in unit %s of property %s",
        tenant.id,
        tenant.full_name,
        tenant.unit_number,
        tenant.property_id,
    )
    return tenant


def get_tenant(db: Session, tenant_id: str) -> Tenant:
    """Get a tenant by ID."""
    tenant_id = parse_id(tenant_id, "tenant")
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise NotFoundError("Tenant not found")
    return tenant


def get_tenants(
    db: Session,
    status: TenantStatus | None = None,
    property_id: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Tenant], int]:
    """Get tenants matching the filters, newest first, with the total count."""
    query = db.query(Tenant)
    if status:
        query = query.filter(Tenant.status == status.value)
    if property_id:
        query = query.filter(Tenant.property_id == parse_id(property_id, "property"))
    if search:
        query = query.filter(
            or_(
                Tenant.first_name.icontains(search, autoescape=True),
                Tenant.last_name.icontains(search, autoescape=True),
                Tenant.email.icontains(search, autoescape=True),
                Tenant.unit_number.icontains(search, autoescape=True),
            )
        )

    total = query.count()
    tenants = (
        query.order_by(Tenant.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    )
    return tenants, total


def count_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def get_tenants_by_property(db: Session, property_id: str) -> list[Tenant]:
    """Get all tenants of a property ordered by unit number."""
    property_id = parse_id(property_id, "property")
    return (
        db.query(Tenant)
        .filter(Tenant.property_id == property_id)
        .order_by(Tenant.unit_number.asc())
        .all()
    )


def update_tenant(db: Session, tenant_id: str, tenant_data: TenantUpdate) -> Tenant:
    """Update a tenant, re-validating the merged record and moving occupancy."""
    tenant = get_tenant(db, tenant_id)

    updates = tenant_data.model_dump(exclude_unset=True, exclude=SUB_RECORD_FIELDS)
    merged = _editable_fields(tenant)
    lease_updates = updates.pop("lease_details", None)
    if lease_updates is not None:
        merged["lease_details"] = {**merged["lease_details"], **lease_updates}
    merged.update(updates)

    try:
        validated = TenantCreate.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    if validated.property_id != tenant.property_id:
        validated = validated.model_copy(
            update={"property_id": parse_id(validated.property_id, "property")}
        )
    if validated.email != tenant.email:
        _ensure_email_free(db, validated.email, tenant.id)

    old_property_id = tenant.property_id
    old_unit_number = tenant.unit_number
    old_status = tenant.status

    _apply_fields(tenant, validated)
    occupancy.on_tenant_changed(db, tenant, old_property_id, old_unit_number, old_status)

    if tenant_data.documents is not None:
        tenant.documents = _build_documents(tenant_data.documents)
    if tenant_data.payment_history is not None:
        tenant.payment_history = [_build_payment(p) for p in tenant_data.payment_history]
    if tenant_data.maintenance_requests is not None:
        tenant.maintenance_requests = [
            _build_maintenance(r) for r in tenant_data.maintenance_requests
        ]

    _commit(db)
    db.refresh(tenant)
    return tenant


def delete_tenant(db: Session, tenant_id: str) -> TenantResponse:
    """Delete a tenant, freeing their unit if they were Active.

    Returns a snapshot of the deleted record.
    """
    tenant = get_tenant(db, tenant_id)
    snapshot = TenantResponse.model_validate(tenant)

    occupancy.on_tenant_deleted(db, tenant)
    db.delete(tenant)
    db.commit()
    logger.info("Deleted tenant %s (%s)", snapshot.id, snapshot.full_name)
    return snapshot


def get_tenant_stats(db: Session) -> TenantStats:
    """Count tenants by status and total the rent of Active tenants."""
    by_status = dict(db.query(Tenant.status, func.count(Tenant.id)).group_by(Tenant.status).all())
    average_rent, total_rent = (
        db.query(func.avg(Tenant.monthly_rent), func.coalesce(func.sum(Tenant.monthly_rent), 0))
        .filter(Tenant.status == TenantStatus.ACTIVE.value)
        .one()
    )

    return TenantStats(
        total_tenants=sum(by_status.values()),
        active_tenants=by_status.get(TenantStatus.ACTIVE.value, 0),
        inactive_tenants=by_status.get(TenantStatus.INACTIVE.value, 0),
        pending_tenants=by_status.get(TenantStatus.PENDING.value, 0),
        evicted_tenants=by_status.get(TenantStatus.EVICTED.value, 0),
        average_rent=round_half_up(average_rent),
        total_monthly_revenue=total_rent,
    )


def add_payment(db: Session, tenant_id: str, payment_data: PaymentCreate) -> Tenant:
    """Record a payment in a tenant's history."""
    tenant = get_tenant(db, tenant_id)
    tenant.payment_history.append(_build_payment(payment_data))
    db.commit()
    db.refresh(tenant)
    return tenant


def add_maintenance_request(
    db: Session,
    tenant_id: str,
    request_data: TenantMaintenanceCreate,
) -> Tenant:
    """File a maintenance request on behalf of a tenant."""
    tenant = get_tenant(db, tenant_id)
    tenant.maintenance_requests.append(_build_maintenance(request_data))
    db.commit()
    db.refresh(tenant)
    return tenant


def update_maintenance_status(
    db: Session,
    tenant_id: str,
    request_id: str,
    status_data: TenantMaintenanceStatusUpdate,
) -> Tenant:
    """Move a tenant maintenance request to a new status.

    ``completed_at`` is stamped when the request becomes Completed and
    cleared if it is reopened.
    """
    tenant = get_tenant(db, tenant_id)
    request = next((r for r in tenant.maintenance_requests if r.id == request_id), None)
    if not request:
        raise NotFoundError("Maintenance request not found")

    request.status = status_data.status
    if status_data.status == MaintenanceStatus.COMPLETED:
        request.completed_at = request.completed_at or datetime.now(UTC)
    else:
        request.completed_at = None
    db.commit()
    db.refresh(tenant)
    return tenant
