"""Tenant API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rentroll.core.config import settings
from rentroll.core.database import get_db
from rentroll.models.enums import TenantStatus
from rentroll.schemas.tenant import (
    PaymentCreate,
    TenantCreate,
    TenantDeleteResponse,
    TenantDetailResponse,
    TenantList,
    TenantMaintenanceCreate,
    TenantMaintenanceStatusUpdate,
    TenantMutationResponse,
    TenantResponse,
    TenantStats,
    TenantUpdate,
)
from rentroll.services import tenant as tenant_service

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=TenantList)
def list_tenants(
    tenant_status: TenantStatus | None = Query(None, alias="status"),
    property_id: str | None = Query(None, alias="property"),
    search: str | None = Query(None, description="Matches name, email or unit number"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """List tenants with filtering, search and pagination."""
    tenants, total = tenant_service.get_tenants(
        db,
        status=tenant_status,
        property_id=property_id,
        search=search,
        page=page,
        limit=limit,
    )
    return TenantList(
        tenants=[TenantResponse.model_validate(t) for t in tenants],
        current_page=page,
        total_pages=tenant_service.count_pages(total, limit),
        total_tenants=total,
    )


@router.get("/stats/overview", response_model=TenantStats)
def get_tenant_stats(db: Session = Depends(get_db)):
    """Count tenants by status and total Active rent."""
    return tenant_service.get_tenant_stats(db)


@router.get("/property/{property_id}", response_model=list[TenantResponse])
def list_tenants_for_property(property_id: str, db: Session = Depends(get_db)):
    """List every tenant of a property ordered by unit number."""
    tenants = tenant_service.get_tenants_by_property(db, property_id)
    return [TenantResponse.model_validate(t) for t in tenants]


@router.get("/{tenant_id}", response_model=TenantDetailResponse)
def get_tenant(tenant_id: str, db: Session = Depends(get_db)):
    """Get a tenant by ID with the property expanded."""
    return TenantDetailResponse.model_validate(tenant_service.get_tenant(db, tenant_id))


@router.post(
    "",
    response_model=TenantMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_tenant(tenant_data: TenantCreate, db: Session = Depends(get_db)):
    """Create a tenant and mark their unit as occupied."""
    tenant = tenant_service.create_tenant(db, tenant_data)
    return TenantMutationResponse(
        message="Tenant created successfully",
        tenant=TenantDetailResponse.model_validate(tenant),
    )


@router.put("/{tenant_id}", response_model=TenantMutationResponse)
def update_tenant(
    tenant_id: str,
    tenant_data: TenantUpdate,
    db: Session = Depends(get_db),
):
    """Update a tenant. Unit moves and status changes are re-checked."""
    tenant = tenant_service.update_tenant(db, tenant_id, tenant_data)
    return TenantMutationResponse(
        message="Tenant updated successfully",
        tenant=TenantDetailResponse.model_validate(tenant),
    )


@router.delete("/{tenant_id}", response_model=TenantDeleteResponse)
def delete_tenant(tenant_id: str, db: Session = Depends(get_db)):
    """Delete a tenant, freeing their unit if they were Active."""
    deleted = tenant_service.delete_tenant(db, tenant_id)
    return TenantDeleteResponse(message="Tenant deleted successfully", deleted_tenant=deleted)


@router.post(
    "/{tenant_id}/payments",
    response_model=TenantMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_payment(
    tenant_id: str,
    payment_data: PaymentCreate,
    db: Session = Depends(get_db),
):
    """Record a rent payment."""
    tenant = tenant_service.add_payment(db, tenant_id, payment_data)
    return TenantMutationResponse(
        message="Payment recorded successfully",
        tenant=TenantDetailResponse.model_validate(tenant),
    )


@router.post(
    "/{tenant_id}/maintenance",
    response_model=TenantMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_maintenance_request(
    tenant_id: str,
    request_data: TenantMaintenanceCreate,
    db: Session = Depends(get_db),
):
    """File a maintenance request for a tenant."""
    tenant = tenant_service.add_maintenance_request(db, tenant_id, request_data)
    return TenantMutationResponse(
        message="Maintenance request created successfully",
        tenant=TenantDetailResponse.model_validate(tenant),
    )


@router.put(
    "/{tenant_id}/maintenance/{request_id}",
    response_model=TenantMutationResponse,
)
def update_maintenance_status(
    tenant_id: str,
    request_id: str,
    status_data: TenantMaintenanceStatusUpdate,
    db: Session = Depends(get_db),
):
    """Update the status of a tenant's maintenance request."""
    tenant = tenant_service.update_maintenance_status(db, tenant_id, request_id, status_data)
    return TenantMutationResponse(
        message="Maintenance request updated successfully",
        tenant=TenantDetailResponse.model_validate(tenant),
    )
