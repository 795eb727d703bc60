"""Landing route."""

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    """Send visitors to the dashboard."""
    return RedirectResponse("/dashboard", status_code=303)
