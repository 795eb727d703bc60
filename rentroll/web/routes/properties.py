"""Properties web routes."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from rentroll.core.database import get_db
from rentroll.core.exceptions import AppError, format_error_messages
from rentroll.models.enums import PropertyStatus, PropertyType
from rentroll.schemas.property import PropertyCreate
from rentroll.services.property import (
    create_property,
    delete_property,
    get_properties,
    get_property,
)
from rentroll.services.tenant import get_tenants_by_property
from rentroll.web.dependencies import add_flash_message, flash_errors, get_flash_messages
from rentroll.web.template_config import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def list_properties(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    """List all properties."""
    return templates.TemplateResponse(
        request,
        "properties/list.html",
        {
            "properties": get_properties(db),
            "messages": get_flash_messages(request),
        },
    )


@router.get("/create", response_class=HTMLResponse)
async def create_property_page(request: Request) -> HTMLResponse:
    """Display create property form."""
    return templates.TemplateResponse(
        request,
        "properties/create.html",
        {
            "property_types": list(PropertyType),
            "property_statuses": list(PropertyStatus),
            "messages": get_flash_messages(request),
        },
    )


@router.post("/create", response_model=None)
async def create_property_submit(
    request: Request,
    name: str = Form(...),
    address: str = Form(...),
    type: str = Form(PropertyType.APARTMENT.value),
    units: int = Form(...),
    rent: float = Form(...),
    status: str = Form(PropertyStatus.AVAILABLE.value),
    amenities: str = Form(""),
    description: str = Form(""),
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Process create property form."""
    try:
        property_data = PropertyCreate(
            name=name,
            address=address,
            type=type,
            units=units,
            rent=rent,
            status=status,
            amenities=amenities.split(","),
            description=description or None,
        )
    except PydanticValidationError as exc:
        flash_errors(request, format_error_messages(exc.errors()))
        return RedirectResponse("/properties/create", status_code=303)

    new_property = create_property(db, property_data)
    add_flash_message(request, f"Property '{new_property.name}' created successfully!", "success")
    return RedirectResponse(f"/properties/{new_property.id}", status_code=303)


@router.get("/{property_id}", response_class=HTMLResponse, response_model=None)
async def property_detail(
    request: Request,
    property_id: str,
    db: Session = Depends(get_db),
) -> HTMLResponse | RedirectResponse:
    """Display a property with its tenants."""
    try:
        prop = get_property(db, property_id)
    except AppError as exc:
        flash_errors(request, exc.detail)
        return RedirectResponse("/properties", status_code=303)

    return templates.TemplateResponse(
        request,
        "properties/detail.html",
        {
            "property": prop,
            "tenants": get_tenants_by_property(db, prop.id),
            "messages": get_flash_messages(request),
        },
    )


@router.post("/{property_id}/delete", response_model=None)
async def delete_property_submit(
    request: Request,
    property_id: str,
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Delete a property."""
    try:
        delete_property(db, property_id)
    except AppError as exc:
        flash_errors(request, exc.detail)
        return RedirectResponse("/properties", status_code=303)

    add_flash_message(request, "Property deleted successfully!", "success")
    return RedirectResponse("/properties", status_code=303)
