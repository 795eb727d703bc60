"""Property API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rentroll.core.database import get_db
from rentroll.models.enums import PropertyStatus, PropertyType
from rentroll.schemas.base import Envelope, ListEnvelope, MessageEnvelope
from rentroll.schemas.property import (
    MaintenanceRequestCreate,
    MaintenanceStatusUpdate,
    OccupancyCorrection,
    PropertyCreate,
    PropertyResponse,
    PropertyStats,
    PropertyUpdate,
)
from rentroll.services import occupancy
from rentroll.services import property as property_service

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=ListEnvelope[PropertyResponse])
def list_properties(
    property_type: PropertyType | None = Query(None, alias="type"),
    property_status: PropertyStatus | None = Query(None, alias="status"),
    min_rent: float | None = Query(None, alias="minRent", ge=0),
    max_rent: float | None = Query(None, alias="maxRent", ge=0),
    sort_by: str | None = Query(None, alias="sortBy", description="Field name, '-' prefix for descending"),
    db: Session = Depends(get_db),
):
    """List properties filtered by type, status and rent range."""
    properties = property_service.get_properties(
        db,
        property_type=property_type,
        status=property_status,
        min_rent=min_rent,
        max_rent=max_rent,
        sort_by=sort_by,
    )
    return ListEnvelope[PropertyResponse](
        count=len(properties),
        data=[PropertyResponse.model_validate(p) for p in properties],
    )


@router.get("/stats/overview", response_model=Envelope[PropertyStats])
def get_property_stats(db: Session = Depends(get_db)):
    """Aggregate counts, units, occupancy and rent across all properties."""
    return Envelope[PropertyStats](data=property_service.get_property_stats(db))


@router.post("/occupancy/reconcile", response_model=ListEnvelope[OccupancyCorrection])
def reconcile_occupancy(db: Session = Depends(get_db)):
    """Recount Active tenants and repair drifted occupied-unit counters."""
    corrections = occupancy.reconcile_occupancy(db)
    return ListEnvelope[OccupancyCorrection](count=len(corrections), data=corrections)


@router.get("/{property_id}", response_model=Envelope[PropertyResponse])
def get_property(property_id: str, db: Session = Depends(get_db)):
    """Get a property by ID."""
    db_property = property_service.get_property(db, property_id)
    return Envelope[PropertyResponse](data=PropertyResponse.model_validate(db_property))


@router.post(
    "",
    response_model=Envelope[PropertyResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_property(property_data: PropertyCreate, db: Session = Depends(get_db)):
    """Create a new property."""
    db_property = property_service.create_property(db, property_data)
    return Envelope[PropertyResponse](data=PropertyResponse.model_validate(db_property))


@router.put("/{property_id}", response_model=Envelope[PropertyResponse])
def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    db: Session = Depends(get_db),
):
    """Update a property. All validation rules are re-applied."""
    db_property = property_service.update_property(db, property_id, property_data)
    return Envelope[PropertyResponse](data=PropertyResponse.model_validate(db_property))


@router.delete("/{property_id}", response_model=MessageEnvelope)
def delete_property(property_id: str, db: Session = Depends(get_db)):
    """Delete a property. Its tenants are not removed."""
    property_service.delete_property(db, property_id)
    return MessageEnvelope(message="Property deleted successfully")


@router.post(
    "/{property_id}/maintenance",
    response_model=Envelope[PropertyResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_maintenance_request(
    property_id: str,
    request_data: MaintenanceRequestCreate,
    db: Session = Depends(get_db),
):
    """File a maintenance request against a property."""
    db_property = property_service.add_maintenance_request(db, property_id, request_data)
    return Envelope[PropertyResponse](data=PropertyResponse.model_validate(db_property))


@router.put(
    "/{property_id}/maintenance/{request_id}",
    response_model=Envelope[PropertyResponse],
)
def update_maintenance_status(
    property_id: str,
    request_id: str,
    status_data: MaintenanceStatusUpdate,
    db: Session = Depends(get_db),
):
    """Update the status of a property's maintenance request."""
    db_property = property_service.update_maintenance_status(
        db, property_id, request_id, status_data
    )
    return Envelope[PropertyResponse](data=PropertyResponse.model_validate(db_property))
