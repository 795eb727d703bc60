"""Tests for tenant API endpoints."""

import time

from fastapi.testclient import TestClient

from conftest import tenant_payload

MISSING_ID = "6f1c2a52-0000-4000-8000-000000000000"


def _occupied_units(client: TestClient, property_id: str) -> int:
    return client.get(f"/api/properties/{property_id}").json()["data"]["occupiedUnits"]


class TestTenantCreate:
    """Creating tenants through the API."""

    def test_create_tenant(self, client: TestClient, create_property) -> None:
        prop = create_property()
        response = client.post("/api/tenants", json=tenant_payload(prop["id"]))
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Tenant created successfully"
        tenant = body["tenant"]
        assert tenant["firstName"] == "Ada"
        assert tenant["fullName"] == "Ada Lovelace"
        assert tenant["status"] == "Active"
        assert tenant["propertyId"] == prop["id"]
        assert tenant["property"]["name"] == "Harbor View"
        assert tenant["leaseDetails"]["monthlyRent"] == 1500
        assert tenant["leaseDetails"]["paymentDay"] == 1
        assert tenant["leaseStatus"] in {"Active", "Expired", "Future"}
        assert isinstance(tenant["daysUntilLeaseEnd"], int)

    def test_create_increments_occupied_units(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        create_tenant(prop["id"])
        assert _occupied_units(client, prop["id"]) == 1

    def test_email_is_lowercased(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"], email="Ada@Example.COM")
        assert tenant["email"] == "ada@example.com"

    def test_duplicate_email(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        create_tenant(prop["id"])
        response = client.post(
            "/api/tenants",
            json=tenant_payload(prop["id"], unitNumber="B2", email="ADA@example.com"),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Email already exists"
        assert _occupied_units(client, prop["id"]) == 1

    def test_occupied_unit(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        create_tenant(prop["id"])
        response = client.post(
            "/api/tenants",
            json=tenant_payload(prop["id"], email="other@example.com"),
        )
        assert response.status_code == 400
        assert "already occupied" in response.json()["error"]

    def test_invalid_email(self, client: TestClient, create_property) -> None:
        prop = create_property()
        response = client.post("/api/tenants", json=tenant_payload(prop["id"], email="nope"))
        assert response.status_code == 400
        assert any("Please provide a valid email" in m for m in response.json()["error"])

    def test_invalid_phone(self, client: TestClient, create_property) -> None:
        prop = create_property()
        response = client.post("/api/tenants", json=tenant_payload(prop["id"], phone="555-1234"))
        assert response.status_code == 400
        assert any("10-digit phone number" in m for m in response.json()["error"])

    def test_lease_end_before_start(self, client: TestClient, create_property) -> None:
        prop = create_property()
        payload = tenant_payload(prop["id"])
        payload["leaseDetails"]["endDate"] = "2025-06-01"
        response = client.post("/api/tenants", json=payload)
        assert response.status_code == 400
        assert any(
            "Lease end date must be after start date" in m for m in response.json()["error"]
        )

    def test_missing_property(self, client: TestClient) -> None:
        response = client.post("/api/tenants", json=tenant_payload(MISSING_ID))
        assert response.status_code == 400
        assert response.json()["error"] == "Property not found"

    def test_malformed_property_id(self, client: TestClient) -> None:
        response = client.post("/api/tenants", json=tenant_payload("12345"))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid property ID"

    def test_near_miss_email_is_rejected_quickly(
        self, client: TestClient, create_property
    ) -> None:
        prop = create_property()
        started = time.perf_counter()
        response = client.post(
            "/api/tenants", json=tenant_payload(prop["id"], email="a" * 40 + "!")
        )
        assert response.status_code == 400
        assert time.perf_counter() - started < 1.0

    def test_overlong_email_rejected(self, client: TestClient, create_property) -> None:
        prop = create_property()
        email = "a" * 250 + "@example.com"
        response = client.post("/api/tenants", json=tenant_payload(prop["id"], email=email))
        assert response.status_code == 400

    def test_dotted_and_hyphenated_email_accepted(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"], email="ada.king-noel@mail.example.co.uk")
        assert tenant["email"] == "ada.king-noel@mail.example.co.uk"

    def test_unit_checked_before_email(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        create_tenant(prop["id"])
        response = client.post("/api/tenants", json=tenant_payload(prop["id"]))
        assert response.status_code == 400
        assert "already occupied" in response.json()["error"]

    def test_property_checked_before_email(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        create_tenant(prop["id"])
        response = client.post("/api/tenants", json=tenant_payload(MISSING_ID))
        assert response.status_code == 400
        assert response.json()["error"] == "Property not found"


class TestTenantRead:
    """Fetching and listing tenants."""

    def test_get_tenant_expands_property(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.get(f"/api/tenants/{tenant['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == tenant["id"]
        assert data["property"]["id"] == prop["id"]
        assert data["property"]["occupiedUnits"] == 1

    def test_get_tenant_not_found(self, client: TestClient) -> None:
        response = client.get(f"/api/tenants/{MISSING_ID}")
        assert response.status_code == 404
        assert response.json()["error"] == "Tenant not found"

    def test_get_tenant_malformed_id(self, client: TestClient) -> None:
        response = client.get("/api/tenants/xyz")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid tenant ID"

    def test_dangling_property_reference(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        client.delete(f"/api/properties/{prop['id']}")

        response = client.get(f"/api/tenants/{tenant['id']}")
        assert response.status_code == 200
        assert response.json()["propertyId"] == prop["id"]
        assert response.json()["property"] is None

    def test_list_filters(self, client: TestClient, create_property, create_tenant) -> None:
        first = create_property(name="First")
        second = create_property(name="Second")
        create_tenant(first["id"], email="a@example.com", unitNumber="1")
        create_tenant(first["id"], email="b@example.com", unitNumber="2", status="Pending")
        create_tenant(second["id"], email="c@example.com", unitNumber="1")

        by_status = client.get("/api/tenants", params={"status": "Active"}).json()
        assert by_status["totalTenants"] == 2

        by_property = client.get("/api/tenants", params={"property": first["id"]}).json()
        assert by_property["totalTenants"] == 2
        assert all(t["property"]["name"] == "First" for t in by_property["tenants"])

        combined = client.get(
            "/api/tenants", params={"property": first["id"], "status": "Pending"}
        ).json()
        assert [t["email"] for t in combined["tenants"]] == ["b@example.com"]

    def test_search(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        create_tenant(prop["id"], firstName="Grace", lastName="Hopper", email="grace@example.com")
        create_tenant(prop["id"], unitNumber="B7", email="alan@example.com", firstName="Alan")

        assert client.get("/api/tenants", params={"search": "hopp"}).json()["totalTenants"] == 1
        assert client.get("/api/tenants", params={"search": "ALAN@"}).json()["totalTenants"] == 1
        assert client.get("/api/tenants", params={"search": "b7"}).json()["totalTenants"] == 1
        assert client.get("/api/tenants", params={"search": "%"}).json()["totalTenants"] == 0

    def test_pagination(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        for i in range(5):
            create_tenant(prop["id"], unitNumber=str(i), email=f"t{i}@example.com")

        page = client.get("/api/tenants", params={"page": 3, "limit": 2}).json()
        assert page["currentPage"] == 3
        assert page["totalPages"] == 3
        assert page["totalTenants"] == 5
        assert len(page["tenants"]) == 1

    def test_empty_list(self, client: TestClient) -> None:
        assert client.get("/api/tenants").json() == {
            "tenants": [],
            "currentPage": 1,
            "totalPages": 0,
            "totalTenants": 0,
        }

    def test_tenants_by_property_sorted_by_unit(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        create_tenant(prop["id"], unitNumber="C3", email="c@example.com")
        create_tenant(prop["id"], unitNumber="A1", email="a@example.com")
        create_tenant(prop["id"], unitNumber="B2", email="b@example.com")

        response = client.get(f"/api/tenants/property/{prop['id']}")
        assert response.status_code == 200
        assert [t["unitNumber"] for t in response.json()] == ["A1", "B2", "C3"]


class TestTenantUpdate:
    """Updating tenants through the API."""

    def test_partial_lease_update(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.put(
            f"/api/tenants/{tenant['id']}",
            json={"leaseDetails": {"monthlyRent": 1650}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Tenant updated successfully"
        lease = body["tenant"]["leaseDetails"]
        assert lease["monthlyRent"] == 1650
        assert lease["startDate"] == "2026-01-01"
        assert lease["securityDeposit"] == 1500

    def test_update_rejects_bad_lease_dates(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.put(
            f"/api/tenants/{tenant['id']}",
            json={"leaseDetails": {"endDate": "2025-12-31"}},
        )
        assert response.status_code == 400

    def test_update_rejects_taken_email(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        create_tenant(prop["id"], email="first@example.com", unitNumber="1")
        second = create_tenant(prop["id"], email="second@example.com", unitNumber="2")
        response = client.put(
            f"/api/tenants/{second['id']}",
            json={"email": "first@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Email already exists"

    def test_deactivate_frees_unit(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        client.put(f"/api/tenants/{tenant['id']}", json={"status": "Inactive"})
        assert _occupied_units(client, prop["id"]) == 0

    def test_move_between_properties(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        old = create_property(name="Old")
        new = create_property(name="New")
        tenant = create_tenant(old["id"])
        response = client.put(f"/api/tenants/{tenant['id']}", json={"property": new["id"]})
        assert response.status_code == 200
        assert response.json()["tenant"]["property"]["name"] == "New"
        assert _occupied_units(client, old["id"]) == 0
        assert _occupied_units(client, new["id"]) == 1

    def test_update_not_found(self, client: TestClient) -> None:
        response = client.put(f"/api/tenants/{MISSING_ID}", json={"notes": "hi"})
        assert response.status_code == 404


class TestTenantDelete:
    """Deleting tenants through the API."""

    def test_delete_returns_snapshot(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.delete(f"/api/tenants/{tenant['id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Tenant deleted successfully"
        assert body["deletedTenant"]["id"] == tenant["id"]
        assert body["deletedTenant"]["email"] == "ada@example.com"
        assert _occupied_units(client, prop["id"]) == 0
        assert client.get(f"/api/tenants/{tenant['id']}").status_code == 404

    def test_delete_not_found(self, client: TestClient) -> None:
        assert client.delete(f"/api/tenants/{MISSING_ID}").status_code == 404


class TestTenantStats:
    """Aggregate tenant figures."""

    def test_stats(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        create_tenant(prop["id"], unitNumber="1", email="a@example.com")
        second = tenant_payload(prop["id"], unitNumber="2", email="b@example.com")
        second["leaseDetails"]["monthlyRent"] = 2001
        assert client.post("/api/tenants", json=second).status_code == 201
        create_tenant(prop["id"], unitNumber="3", email="c@example.com", status="Pending")
        create_tenant(prop["id"], unitNumber="4", email="d@example.com", status="Evicted")

        response = client.get("/api/tenants/stats/overview")
        assert response.status_code == 200
        assert response.json() == {
            "totalTenants": 4,
            "activeTenants": 2,
            "inactiveTenants": 0,
            "pendingTenants": 1,
            "evictedTenants": 1,
            "averageRent": 1751,
            "totalMonthlyRevenue": 3501,
        }


class TestTenantSubRecords:
    """Payments and maintenance requests on tenants."""

    def test_record_payment(self, client: TestClient, create_property, create_tenant) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.post(
            f"/api/tenants/{tenant['id']}/payments",
            json={
                "amount": 1500,
                "paymentDate": "2026-02-01",
                "paymentMethod": "Bank Transfer",
                "status": "Paid",
                "month": "February",
                "year": 2026,
            },
        )
        assert response.status_code == 201
        payments = response.json()["tenant"]["paymentHistory"]
        assert len(payments) == 1
        assert payments[0]["paymentMethod"] == "Bank Transfer"
        assert payments[0]["status"] == "Paid"

    def test_invalid_payment_method(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.post(
            f"/api/tenants/{tenant['id']}/payments",
            json={"amount": 10, "paymentMethod": "Barter"},
        )
        assert response.status_code == 400

    def test_maintenance_completion_is_stamped(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        added = client.post(
            f"/api/tenants/{tenant['id']}/maintenance",
            json={"title": "Broken window", "priority": "Urgent"},
        )
        assert added.status_code == 201
        request = added.json()["tenant"]["maintenanceRequests"][0]
        assert request["completedAt"] is None

        completed = client.put(
            f"/api/tenants/{tenant['id']}/maintenance/{request['id']}",
            json={"status": "Completed"},
        )
        assert completed.status_code == 200
        assert completed.json()["tenant"]["maintenanceRequests"][0]["completedAt"] is not None

        reopened = client.put(
            f"/api/tenants/{tenant['id']}/maintenance/{request['id']}",
            json={"status": "In Progress"},
        )
        assert reopened.json()["tenant"]["maintenanceRequests"][0]["completedAt"] is None

    def test_update_missing_maintenance_request(
        self, client: TestClient, create_property, create_tenant
    ) -> None:
        prop = create_property()
        tenant = create_tenant(prop["id"])
        response = client.put(
            f"/api/tenants/{tenant['id']}/maintenance/{MISSING_ID}",
            json={"status": "Completed"},
        )
        assert response.status_code == 404
