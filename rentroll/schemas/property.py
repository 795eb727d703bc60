"""Property Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import Field, field_validator

from rentroll.models.enums import (
    MaintenancePriority,
    MaintenanceStatus,
    PropertyStatus,
    PropertyType,
)
from rentroll.schemas.base import CamelModel


class Owner(CamelModel):
    """Owner contact details."""

    name: str | None = None
    contact: str | None = None
    email: str | None = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v


class PropertyCreate(CamelModel):
    """Schema for creating a new property.

    Also used to re-validate the merged record on update, so every rule here
    applies to both operations.
    """

    name: str = Field(min_length=1, max_length=100)
    address: str = Field(min_length=1)
    type: PropertyType = PropertyType.APARTMENT
    units: int = Field(ge=1)
    rent: float = Field(ge=0)
    status: PropertyStatus = PropertyStatus.AVAILABLE
    amenities: list[str] = Field(default_factory=list)
    description: str | None = Field(default=None, max_length=500)
    owner: Owner | None = None
    images: list[str] = Field(default_factory=list)

    @field_validator("amenities")
    @classmethod
    def strip_amenities(cls, v: list[str]) -> list[str]:
        """Trim amenity names and drop empty entries."""
        return [a.strip() for a in v if a and a.strip()]


class PropertyUpdate(CamelModel):
    """Schema for updating a property. Omitted fields keep their values."""

    name: str | None = None
    address: str | None = None
    type: PropertyType | None = None
    units: int | None = None
    rent: float | None = None
    status: PropertyStatus | None = None
    amenities: list[str] | None = None
    description: str | None = None
    owner: Owner | None = None
    images: list[str] | None = None


class MaintenanceRequestCreate(CamelModel):
    """Schema for filing a maintenance request against a property."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    status: MaintenanceStatus = MaintenanceStatus.PENDING


class MaintenanceStatusUpdate(CamelModel):
    """Schema for moving a maintenance request to a new status."""

    status: MaintenanceStatus


class MaintenanceRequestResponse(CamelModel):
    id: str
    title: str | None
    description: str | None
    priority: MaintenancePriority
    status: MaintenanceStatus
    created_at: datetime


class PropertySummary(CamelModel):
    """Reduced property view embedded in tenant responses."""

    id: str
    name: str
    address: str
    type: PropertyType


class PropertyResponse(CamelModel):
    """Schema for property response."""

    id: str
    name: str
    address: str
    type: PropertyType
    units: int
    rent: float
    status: PropertyStatus
    amenities: list[str]
    description: str | None
    owner: Owner
    images: list[str]
    occupied_units: int
    occupancy_rate: float
    available_units: int
    maintenance_requests: list[MaintenanceRequestResponse]
    created_at: datetime
    updated_at: datetime


class PropertyStats(CamelModel):
    """Aggregate figures across all properties."""

    total_properties: int
    available_properties: int
    occupied_properties: int
    maintenance_properties: int
    reserved_properties: int
    total_units: int
    total_occupied_units: int
    available_units: int
    overall_occupancy_rate: float
    average_rent: int
    min_rent: float
    max_rent: float


class OccupancyCorrection(CamelModel):
    """A counter rewritten by the reconcile tool."""

    property_id: str
    name: str
    previous_occupied_units: int
    occupied_units: int
