"""Seed script to populate the database with sample data."""

from datetime import date

from rentroll.core.database import Base, SessionLocal, engine
from rentroll.models import property, tenant  # noqa: F401
from rentroll.models.property import Property
from rentroll.schemas.property import Owner, PropertyCreate
from rentroll.schemas.tenant import EmergencyContact, LeaseDetails, TenantCreate
from rentroll.services.property import create_property
from rentroll.services.tenant import create_tenant


def seed_database() -> None:
    """Seed the database with sample data."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if db.query(Property).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        complex_ = create_property(
            db,
            PropertyCreate(
                name="Sample Apartment Complex",
                address="123 Main St, Sample City, SC 12345",
                type="Apartment",
                units=24,
                rent=1200,
                amenities=["Pool", "Gym", "Parking"],
                owner=Owner(name="Sample Holdings", email="owner@example.com"),
            ),
        )
        print(f"Created property: {complex_.name} (ID: {complex_.id})")

        townhouse = create_property(
            db,
            PropertyCreate(
                name="Maple Row Townhouses",
                address="48 Maple Row, Sample City, SC 12346",
                type="Townhouse",
                units=6,
                rent=1850,
                amenities=["Garage", "Garden"],
            ),
        )
        print(f"Created property: {townhouse.name} (ID: {townhouse.id})")

        resident = create_tenant(
            db,
            TenantCreate(
                first_name="John",
                last_name="Smith",
                email="john.smith@example.com",
                phone="5551234567",
                property_id=complex_.id,
                unit_number="101",
                lease_details=LeaseDetails(
                    start_date=date(2026, 1, 1),
                    end_date=date(2026, 12, 31),
                    monthly_rent=1200,
                    security_deposit=1200,
                ),
                emergency_contact=EmergencyContact(
                    name="Jane Smith", relationship="Spouse", phone="5559876543"
                ),
            ),
        )
        print(f"Created tenant: {resident.full_name} in unit {resident.unit_number}")

        print("Seeding complete!")
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
