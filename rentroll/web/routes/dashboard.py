"""Dashboard web routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from rentroll.core.database import get_db
from rentroll.services.property import get_properties, get_property_stats
from rentroll.services.tenant import get_tenant_stats, get_tenants
from rentroll.web.dependencies import get_flash_messages
from rentroll.web.template_config import templates

router = APIRouter()

RECENT_TENANT_COUNT = 5


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request, db: Session = Depends(get_db)) -> HTMLResponse:
    """Display portfolio summary."""
    recent_tenants, _ = get_tenants(db, limit=RECENT_TENANT_COUNT)

    return templates.TemplateResponse(
        request,
        "dashboard/index.html",
        {
            "property_stats": get_property_stats(db),
            "tenant_stats": get_tenant_stats(db),
            "properties": get_properties(db),
            "recent_tenants": recent_tenants,
            "messages": get_flash_messages(request),
        },
    )
