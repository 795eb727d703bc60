"""Enum definitions for property and tenant records."""

from enum import Enum


class PropertyType(str, Enum):
    """Kind of real-estate asset."""

    APARTMENT = "Apartment"
    HOUSE = "House"
    COMMERCIAL = "Commercial"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    VILLA = "Villa"


class PropertyStatus(str, Enum):
    """Listing status of a property."""

    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    RESERVED = "Reserved"


class TenantStatus(str, Enum):
    """Tenant lifecycle status. Only ACTIVE tenants occupy a unit."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING = "Pending"
    EVICTED = "Evicted"


class MaintenancePriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class MaintenanceStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class DocumentType(str, Enum):
    ID_PROOF = "ID Proof"
    LEASE_AGREEMENT = "Lease Agreement"
    INCOME_PROOF = "Income Proof"
    OTHER = "Other"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    CHECK = "Check"
    BANK_TRANSFER = "Bank Transfer"
    ONLINE = "Online"
    CREDIT_CARD = "Credit Card"


class PaymentStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"
    LATE = "Late"
    PARTIAL = "Partial"


class LeaseStatus(str, Enum):
    """Where today falls relative to a lease interval."""

    EXPIRED = "Expired"
    FUTURE = "Future"
    ACTIVE = "Active"
