"""Tenants web routes."""

from datetime import date

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from rentroll.core.config import settings
from rentroll.core.database import get_db
from rentroll.core.exceptions import AppError, format_error_messages
from rentroll.models.enums import TenantStatus
from rentroll.schemas.tenant import TenantCreate
from rentroll.services.property import get_properties
from rentroll.services.tenant import count_pages, create_tenant, delete_tenant, get_tenants
from rentroll.web.dependencies import add_flash_message, flash_errors, get_flash_messages
from rentroll.web.template_config import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def list_tenants(
    request: Request,
    search: str = "",
    page: int = 1,
    db: Session = Depends(get_db),
) -> HTMLResponse:
    """List tenants with search and pagination."""
    page = max(page, 1)
    tenants, total = get_tenants(
        db,
        search=search or None,
        page=page,
        limit=settings.DEFAULT_PAGE_SIZE,
    )
    return templates.TemplateResponse(
        request,
        "tenants/list.html",
        {
            "tenants": tenants,
            "search": search,
            "page": page,
            "total_pages": count_pages(total, settings.DEFAULT_PAGE_SIZE),
            "total": total,
            "messages": get_flash_messages(request),
        },
    )


@router.get("/create", response_class=HTMLResponse)
async def create_tenant_page(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    """Display create tenant form."""
    return templates.TemplateResponse(
        request,
        "tenants/create.html",
        {
            "properties": get_properties(db, sort_by="name"),
            "tenant_statuses": list(TenantStatus),
            "messages": get_flash_messages(request),
        },
    )


@router.post("/create", response_model=None)
async def create_tenant_submit(
    request: Request,
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    property_id: str = Form(...),
    unit_number: str = Form(...),
    start_date: date = Form(...),
    end_date: date = Form(...),
    monthly_rent: float = Form(...),
    security_deposit: float = Form(0),
    status: str = Form(TenantStatus.ACTIVE.value),
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Process create tenant form."""
    try:
        tenant_data = TenantCreate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            property_id=property_id,
            unit_number=unit_number,
            status=status,
            lease_details={
                "start_date": start_date,
                "end_date": end_date,
                "monthly_rent": monthly_rent,
                "security_deposit": security_deposit,
            },
        )
        tenant = create_tenant(db, tenant_data)
    except PydanticValidationError as exc:
        flash_errors(request, format_error_messages(exc.errors()))
        return RedirectResponse("/tenants/create", status_code=303)
    except AppError as exc:
        flash_errors(request, exc.detail)
        return RedirectResponse("/tenants/create", status_code=303)

    add_flash_message(request, f"Tenant '{tenant.full_name}' added to unit {tenant.unit_number}.", "success")
    return RedirectResponse("/tenants", status_code=303)


@router.post("/{tenant_id}/delete", response_model=None)
async def delete_tenant_submit(
    request: Request,
    tenant_id: str,
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Delete a tenant."""
    try:
        deleted = delete_tenant(db, tenant_id)
    except AppError as exc:
        flash_errors(request, exc.detail)
        return RedirectResponse("/tenants", status_code=303)

    add_flash_message(request, f"Tenant '{deleted.full_name}' removed.", "success")
    return RedirectResponse("/tenants", status_code=303)
