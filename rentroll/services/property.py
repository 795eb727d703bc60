"""Property service for business logic."""

import logging
from decimal import ROUND_HALF_UP, Decimal

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session

from rentroll.core.exceptions import NotFoundError, ValidationError
from rentroll.core.ids import parse_id
from rentroll.models.enums import PropertyStatus, PropertyType
from rentroll.models.property import Property, PropertyMaintenanceRequest
from rentroll.schemas.property import (
    MaintenanceRequestCreate,
    MaintenanceStatusUpdate,
    PropertyCreate,
    PropertyStats,
    PropertyUpdate,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "name": Property.name,
    "type": Property.type,
    "status": Property.status,
    "units": Property.units,
    "rent": Property.rent,
    "occupiedUnits": Property.occupied_units,
    "createdAt": Property.created_at,
    "updatedAt": Property.updated_at,
}


def round_half_up(value: float | None) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value is None:
        return 0
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _apply_fields(db_property: Property, property_data: PropertyCreate) -> None:
    db_property.name = property_data.name
    db_property.address = property_data.address
    db_property.type = property_data.type
    db_property.units = property_data.units
    db_property.rent = property_data.rent
    db_property.status = property_data.status
    db_property.amenities = list(property_data.amenities)
    db_property.description = property_data.description
    db_property.images = list(property_data.images)
    owner = property_data.owner
    db_property.owner_name = owner.name if owner else None
    db_property.owner_contact = owner.contact if owner else None
    db_property.owner_email = owner.email if owner else None


def _editable_fields(db_property: Property) -> dict:
    """Current values of every field a client may edit."""
    return {
        "name": db_property.name,
        "address": db_property.address,
        "type": db_property.type,
        "units": db_property.units,
        "rent": db_property.rent,
        "status": db_property.status,
        "amenities": list(db_property.amenities or []),
        "description": db_property.description,
        "owner": db_property.owner,
        "images": list(db_property.images or []),
    }


def create_property(db: Session, property_data: PropertyCreate) -> Property:
    """Create a new property with no occupied units."""
    db_property = Property(occupied_units=0)
    _apply_fields(db_property, property_data)
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    logger.info("Created property %s (%s)", db_property.id, db_property.name)
    return db_property


def get_property(db: Session, property_id: str) -> Property:
    """Get a property by ID."""
    property_id = parse_id(property_id, "property")
    db_property = db.query(Property).filter(Property.id == property_id).first()
    if not db_property:
        raise NotFoundError("Property not found")
    return db_property


def get_properties(
    db: Session,
    property_type: PropertyType | None = None,
    status: PropertyStatus | None = None,
    min_rent: float | None = None,
    max_rent: float | None = None,
    sort_by: str | None = None,
) -> list[Property]:
    """List properties matching every supplied filter.

    ``sort_by`` names a field; a leading ``-`` sorts descending. Without it
    the newest properties come first.
    """
    query = db.query(Property)
    if property_type:
        query = query.filter(Property.type == property_type.value)
    if status:
        query = query.filter(Property.status == status.value)
    if min_rent is not None:
        query = query.filter(Property.rent >= min_rent)
    if max_rent is not None:
        query = query.filter(Property.rent <= max_rent)

    if sort_by:
        descending = sort_by.startswith("-")
        field = sort_by[1:] if descending else sort_by
        column = SORTABLE_FIELDS.get(field)
        if column is None:
            raise ValidationError(f"sortBy: cannot sort by '{field}'")
        query = query.order_by(column.desc() if descending else column.asc())
    else:
        query = query.order_by(Property.created_at.desc())

    return query.all()


def update_property(
    db: Session,
    property_id: str,
    property_data: PropertyUpdate,
) -> Property:
    """Update a property, re-validating the whole merged record."""
    db_property = get_property(db, property_id)

    merged = _editable_fields(db_property)
    merged.update(property_data.model_dump(exclude_unset=True))
    try:
        validated = PropertyCreate.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc

    if validated.units < db_property.occupied_units:
        raise ValidationError(
            f"units: cannot be lower than the {db_property.occupied_units} occupied units"
        )

    _apply_fields(db_property, validated)
    db.commit()
    db.refresh(db_property)
    return db_property


def delete_property(db: Session, property_id: str) -> None:
    """Delete a property. Tenants referring to it are left in place."""
    db_property = get_property(db, property_id)
    logger.info("Deleting property %s (%s)", db_property.id, db_property.name)
    db.delete(db_property)
    db.commit()


def get_property_stats(db: Session) -> PropertyStats:
    """Aggregate counts, unit totals and rent figures across all properties."""
    total, total_units, total_occupied, avg_rent, min_rent, max_rent = db.query(
        func.count(Property.id),
        func.coalesce(func.sum(Property.units), 0),
        func.coalesce(func.sum(Property.occupied_units), 0),
        func.avg(Property.rent),
        func.min(Property.rent),
        func.max(Property.rent),
    ).one()

    by_status = dict(
        db.query(Property.status, func.count(Property.id)).group_by(Property.status).all()
    )

    occupancy_rate = round(total_occupied / total_units * 100, 2) if total_units > 0 else 0.0

    return PropertyStats(
        total_properties=total,
        available_properties=by_status.get(PropertyStatus.AVAILABLE.value, 0),
        occupied_properties=by_status.get(PropertyStatus.OCCUPIED.value, 0),
        maintenance_properties=by_status.get(PropertyStatus.MAINTENANCE.value, 0),
        reserved_properties=by_status.get(PropertyStatus.RESERVED.value, 0),
        total_units=total_units,
        total_occupied_units=total_occupied,
        available_units=total_units - total_occupied,
        overall_occupancy_rate=occupancy_rate,
        average_rent=round_half_up(avg_rent),
        min_rent=min_rent or 0,
        max_rent=max_rent or 0,
    )


def add_maintenance_request(
    db: Session,
    property_id: str,
    request_data: MaintenanceRequestCreate,
) -> Property:
    """Append a maintenance request to a property."""
    db_property = get_property(db, property_id)
    db_property.maintenance_requests.append(
        PropertyMaintenanceRequest(
            title=request_data.title,
            description=request_data.description,
            priority=request_data.priority,
            status=request_data.status,
        )
    )
    db.commit()
    db.refresh(db_property)
    return db_property


def update_maintenance_status(
    db: Session,
    property_id: str,
    request_id: str,
    status_data: MaintenanceStatusUpdate,
) -> Property:
    """Move one of a property's maintenance requests to a new status."""
    db_property = get_property(db, property_id)
    request = next((r for r in db_property.maintenance_requests if r.id == request_id), None)
    if not request:
        raise NotFoundError("Maintenance request not found")

    request.status = status_data.status
    db.commit()
    db.refresh(db_property)
    return db_property
