"""Occupancy bookkeeping between tenants and properties.

A property's ``occupied_units`` counter must equal the number of Active
tenants assigned to it, and a (property, unit) pair may hold at most one
Active tenant. The functions here run inside the caller's session: the
tenant write and the counter write are flushed together and committed once
by the calling service.
"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from rentroll.core.exceptions import ConflictError, NotFoundError
from rentroll.models.enums import TenantStatus
from rentroll.models.property import Property
from rentroll.models.tenant import Tenant
from rentroll.schemas.property import OccupancyCorrection

logger = logging.getLogger(__name__)


def lock_property(db: Session, property_id: str) -> Property | None:
    """Load a property row, taking a row lock where the backend supports it."""
    return db.query(Property).filter(Property.id == property_id).with_for_update().first()


def require_property(db: Session, property_id: str) -> Property:
    """Load and lock the property a tenant refers to."""
    db_property = lock_property(db, property_id)
    if not db_property:
        raise NotFoundError("Property not found", status_code=400)
    return db_property


def find_active_occupant(
    db: Session,
    property_id: str,
    unit_number: str,
    exclude_tenant_id: str | None = None,
) -> Tenant | None:
    """Return the Active tenant holding a unit, if any."""
    query = db.query(Tenant).filter(
        Tenant.property_id == property_id,
        Tenant.unit_number == unit_number,
        Tenant.status == TenantStatus.ACTIVE.value,
    )
    if exclude_tenant_id:
        query = query.filter(Tenant.id != exclude_tenant_id)
    return query.first()


def ensure_unit_available(
    db: Session,
    property_id: str,
    unit_number: str,
    exclude_tenant_id: str | None = None,
) -> None:
    """Raise a conflict if another Active tenant already holds the unit."""
    if find_active_occupant(db, property_id, unit_number, exclude_tenant_id):
        qualifier = "another" if exclude_tenant_id else "an"
        raise ConflictError(f"Unit {unit_number} is already occupied by {qualifier} active tenant")


def _ensure_capacity(db_property: Property) -> None:
    if db_property.occupied_units >= db_property.units:
        raise ConflictError(f"Property '{db_property.name}' has no available units")


def _increment(db_property: Property) -> None:
    _ensure_capacity(db_property)
    db_property.occupied_units += 1
    logger.info(
        "Property %s occupancy %d/%d",
        db_property.id,
        db_property.occupied_units,
        db_property.units,
    )


def _decrement(db_property: Property) -> None:
    db_property.occupied_units = max(0, db_property.occupied_units - 1)
    logger.info(
        "Property %s occupancy %d/%d",
        db_property.id,
        db_property.occupied_units,
        db_property.units,
    )


def check_new_tenant(db: Session, tenant: Tenant) -> Property:
    """Check property, unit and capacity for a tenant not yet in the session."""
    db_property = require_property(db, tenant.property_id)
    ensure_unit_available(db, tenant.property_id, tenant.unit_number)
    if tenant.is_active:
        _ensure_capacity(db_property)
    return db_property


def on_tenant_created(db: Session, tenant: Tenant, db_property: Property | None = None) -> None:
    """Add the tenant and take the unit.

    ``db_property`` is the result of an earlier ``check_new_tenant`` call;
    without it the checks run here. Nothing is added if a check fails.
    """
    if db_property is None:
        db_property = check_new_tenant(db, tenant)

    db.add(tenant)
    if tenant.is_active:
        _increment(db_property)
    db.flush()


def on_tenant_changed(
    db: Session,
    tenant: Tenant,
    old_property_id: str,
    old_unit_number: str,
    old_status: str,
) -> None:
    """Re-validate and move occupancy after a tenant's fields were changed.

    ``tenant`` already carries the new values. Leaving Active (or leaving a
    property while Active) frees a unit on the old property; becoming Active
    (or arriving Active on a new property) takes one on the new property.
    """
    property_changed = tenant.property_id != old_property_id
    unit_changed = tenant.unit_number != old_unit_number
    was_active = old_status == TenantStatus.ACTIVE
    is_active = tenant.is_active

    new_property = lock_property(db, tenant.property_id)
    if not new_property and (property_changed or (is_active and not was_active)):
        raise NotFoundError("Property not found", status_code=400)

    if property_changed or unit_changed or (is_active and not was_active):
        ensure_unit_available(db, tenant.property_id, tenant.unit_number, tenant.id)

    if was_active and (property_changed or not is_active):
        old_property = lock_property(db, old_property_id)
        if old_property:
            _decrement(old_property)
    if is_active and (property_changed or not was_active) and new_property:
        _increment(new_property)
    db.flush()


def on_tenant_deleted(db: Session, tenant: Tenant) -> None:
    """Free the tenant's unit if they were Active."""
    if not tenant.is_active:
        return
    db_property = lock_property(db, tenant.property_id)
    if not db_property:
        logger.warning("Tenant %s refers to missing property %s", tenant.id, tenant.property_id)
        return
    _decrement(db_property)


def count_active_tenants(db: Session) -> dict[str, int]:
    """Count Active tenants per property id."""
    rows = (
        db.query(Tenant.property_id, func.count(Tenant.id))
        .filter(Tenant.status == TenantStatus.ACTIVE.value)
        .group_by(Tenant.property_id)
        .all()
    )
    return {property_id: count for property_id, count in rows}


def reconcile_occupancy(db: Session) -> list[OccupancyCorrection]:
    """Recount Active tenants and rewrite any drifted counters."""
    active_counts = count_active_tenants(db)
    corrections: list[OccupancyCorrection] = []

    for db_property in db.query(Property).order_by(Property.created_at).all():
        actual = min(active_counts.get(db_property.id, 0), db_property.units)
        if actual == db_property.occupied_units:
            continue
        corrections.append(
            OccupancyCorrection(
                property_id=db_property.id,
                name=db_property.name,
                previous_occupied_units=db_property.occupied_units,
                occupied_units=actual,
            )
        )
        logger.warning(
            "Corrected occupancy for property %s: %d -> %d",
            db_property.id,
            db_property.occupied_units,
            actual,
        )
        db_property.occupied_units = actual

    db.commit()
    return corrections
