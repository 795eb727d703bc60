"""Web routes package."""

from fastapi import APIRouter

from rentroll.web.routes import dashboard, home, properties, tenants

web_router = APIRouter()

web_router.include_router(home.router, tags=["web-home"])
web_router.include_router(dashboard.router, prefix="/dashboard", tags=["web-dashboard"])
web_router.include_router(properties.router, prefix="/properties", tags=["web-properties"])
web_router.include_router(tenants.router, prefix="/tenants", tags=["web-tenants"])
