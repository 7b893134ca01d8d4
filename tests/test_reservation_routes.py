"""API tests for customer and agency reservation endpoints."""

from bson import ObjectId

from travelhub.config.database import Collections
from tests.conftest import (
    CUSTOMER_ID,
    OWNER_ID,
    auth_headers,
    seed_agency,
    seed_reservation,
    seed_user,
)


def legacy_travel_payload(catalog, **extra):
    payload = {
        "agencyId": str(catalog["agency"]["_id"]),
        "packageId": str(catalog["travel"]["_id"]),
        "departureDate": "2026-12-01",
        "numberOfTravelers": 2,
        "travelers": [{"name": "Ann", "age": 30}, {"name": "Bob", "age": 32}],
    }
    payload.update(extra)
    return payload


def legacy_slot_payload(catalog, start_time="10:00"):
    return {
        "businessId": str(catalog["agency"]["_id"]),
        "serviceId": str(catalog["slot"]["_id"]),
        "appointmentDate": "2026-11-02",
        "startTime": start_time,
    }


class TestBooking:
    def test_travel_booking_with_promo(self, client, catalog):
        response = client.post(
            "/api/reservations/",
            json=legacy_travel_payload(catalog, promoCode="save20", totalAmount=1),
            headers=auth_headers(CUSTOMER_ID),
        )
        assert response.status_code == 201
        body = response.json()
        assert body["_id"]
        assert body["kind"] == "travel"
        assert body["subtotal"] == 1000
        assert body["discount"] == 200
        assert body["total_price"] == 800
        assert body["promo_code"] == "SAVE20"
        assert body["customer_name"] == "Sam Traveler"
        assert [t["name"] for t in body["travelers"]] == ["Ann", "Bob"]

    def test_slot_booking(self, client, catalog):
        response = client.post(
            "/api/reservations/", json=legacy_slot_payload(catalog, "9:30"), headers=auth_headers(CUSTOMER_ID)
        )
        assert response.status_code == 201
        body = response.json()
        assert body["start_time"] == "09:30"
        assert body["end_time"] == "10:30"
        assert body["appointment_date"] == "2026-11-02"
        assert body["status"] == "pending"

    def test_slot_conflict_is_409(self, client, fake_db, catalog):
        seed_reservation(fake_db, catalog["agency"], catalog["slot"])
        response = client.post(
            "/api/reservations/", json=legacy_slot_payload(catalog, "10:30"), headers=auth_headers(CUSTOMER_ID)
        )
        assert response.status_code == 409
        assert response.json()["code"] == "SlotConflict"
        assert response.json()["fields"] == ["start_time"]

    def test_missing_fields_is_400(self, client, catalog):
        response = client.post(
            "/api/reservations/",
            json={"agencyId": str(catalog["agency"]["_id"]), "appointmentDate": "2026-11-02"},
            headers=auth_headers(CUSTOMER_ID),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "MissingField"
        assert response.json()["fields"] == ["package_id"]

    def test_malformed_travelers_is_400(self, client, fake_db, catalog):
        response = client.post(
            "/api/reservations/",
            json=legacy_travel_payload(catalog, travelers=["Alice"]),
            headers=auth_headers(CUSTOMER_ID),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "ValidationError"
        assert response.json()["fields"] == ["travelers.0"]
        assert fake_db[Collections.RESERVATIONS].docs == []

    def test_tagged_payload_missing_package_is_400(self, client, catalog):
        response = client.post(
            "/api/reservations/",
            json={"kind": "travel", "agency_id": str(catalog["agency"]["_id"]), "date": "2026-12-01"},
            headers=auth_headers(CUSTOMER_ID),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "MissingField"
        assert response.json()["fields"] == ["package_id"]

    def test_unknown_package_is_404(self, client, catalog):
        response = client.post(
            "/api/reservations/",
            json=legacy_travel_payload(catalog, packageId=str(ObjectId())),
            headers=auth_headers(CUSTOMER_ID),
        )
        assert response.status_code == 404
        assert response.json()["code"] == "NotFound"

    def test_requires_token(self, client, catalog):
        response = client.post("/api/reservations/", json=legacy_travel_payload(catalog))
        assert response.status_code in (401, 403)

    def test_garbage_token(self, client, catalog):
        response = client.post(
            "/api/reservations/",
            json=legacy_travel_payload(catalog),
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert response.status_code == 401


class TestCustomerReservations:
    def test_list_mine_newest_first(self, client, fake_db, catalog):
        agency, slot = catalog["agency"], catalog["slot"]
        seed_reservation(fake_db, agency, slot, appointment_date="2026-11-01")
        seed_reservation(fake_db, agency, slot, appointment_date="2026-11-03")
        seed_reservation(fake_db, agency, slot, customer_user_id="someone_else")

        response = client.get("/api/reservations/mine", headers=auth_headers(CUSTOMER_ID))
        assert response.status_code == 200
        body = response.json()
        assert [r["appointment_date"] for r in body["reservations"]] == ["2026-11-03", "2026-11-01"]
        assert body["pagination"] == {"current": 1, "pages": 1, "total": 2}

    def test_list_mine_paginates_and_filters(self, client, fake_db, catalog):
        agency, slot = catalog["agency"], catalog["slot"]
        for day in ("2026-11-01", "2026-11-02", "2026-11-03"):
            seed_reservation(fake_db, agency, slot, appointment_date=day)
        seed_reservation(fake_db, agency, slot, appointment_date="2026-11-04", status="cancelled")

        response = client.get(
            "/api/reservations/mine?status=confirmed&page=2&limit=2", headers=auth_headers(CUSTOMER_ID)
        )
        body = response.json()
        assert [r["appointment_date"] for r in body["reservations"]] == ["2026-11-01"]
        assert body["pagination"] == {"current": 2, "pages": 2, "total": 3}

    def test_get_one_is_scoped_to_owner(self, client, fake_db, catalog):
        mine = seed_reservation(fake_db, catalog["agency"], catalog["slot"])
        theirs = seed_reservation(fake_db, catalog["agency"], catalog["slot"], customer_user_id="someone_else")

        assert client.get(f"/api/reservations/{mine['_id']}", headers=auth_headers(CUSTOMER_ID)).status_code == 200
        assert client.get(f"/api/reservations/{theirs['_id']}", headers=auth_headers(CUSTOMER_ID)).status_code == 404
        assert client.get("/api/reservations/bogus", headers=auth_headers(CUSTOMER_ID)).status_code == 404

    def test_cancel_with_reason(self, client, fake_db, catalog):
        reservation = seed_reservation(fake_db, catalog["agency"], catalog["slot"])
        response = client.post(
            f"/api/reservations/{reservation['_id']}/cancel",
            json={"reason": "Flight moved"},
            headers=auth_headers(CUSTOMER_ID),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "cancelled"
        assert body["cancellation_reason"] == "Flight moved"
        assert body["cancelled_by"] == "customer"

    def test_cancel_twice_is_rejected(self, client, fake_db, catalog):
        reservation = seed_reservation(fake_db, catalog["agency"], catalog["slot"])
        url = f"/api/reservations/{reservation['_id']}/cancel"
        assert client.post(url, headers=auth_headers(CUSTOMER_ID)).status_code == 200

        response = client.post(url, headers=auth_headers(CUSTOMER_ID))
        assert response.status_code == 400
        assert response.json()["code"] == "InvalidTransition"


class TestAgencyReservations:
    def test_list_filtered_by_date(self, client, fake_db, catalog):
        seed_user(fake_db, user_id=OWNER_ID, email="owner@example.com", name="Olive Owner")
        agency, slot = catalog["agency"], catalog["slot"]
        seed_reservation(fake_db, agency, slot, appointment_date="2026-11-02", start_time="14:00", end_time="15:00")
        seed_reservation(fake_db, agency, slot, appointment_date="2026-11-02", start_time="09:00", end_time="10:00")
        seed_reservation(fake_db, agency, slot, appointment_date="2026-11-05")

        response = client.get("/api/agency/reservations/?date=2026-11-02", headers=auth_headers(OWNER_ID))
        assert response.status_code == 200
        body = response.json()
        assert [r["start_time"] for r in body["reservations"]] == ["09:00", "14:00"]
        assert body["pagination"]["total"] == 2

    def test_list_without_agency_is_empty(self, client, catalog):
        response = client.get("/api/agency/reservations/", headers=auth_headers("no_agency_user"))
        assert response.status_code == 200
        assert response.json()["reservations"] == []

    def test_confirm_pending(self, client, fake_db, catalog):
        reservation = seed_reservation(fake_db, catalog["agency"], catalog["slot"], status="pending")
        response = client.put(
            f"/api/agency/reservations/{reservation['_id']}/status",
            json={"status": "confirmed", "business_notes": "Bring your passport"},
            headers=auth_headers(OWNER_ID),
        )
        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"
        assert response.json()["business_notes"] == "Bring your passport"

    def test_unknown_status_is_400(self, client, fake_db, catalog):
        reservation = seed_reservation(fake_db, catalog["agency"], catalog["slot"], status="pending")
        response = client.put(
            f"/api/agency/reservations/{reservation['_id']}/status",
            json={"status": "completed"},
            headers=auth_headers(OWNER_ID),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "ValidationError"

    def test_other_owner_gets_404(self, client, fake_db, catalog):
        seed_agency(fake_db, owner_id="rival_owner", agency_name="Rival Tours")
        reservation = seed_reservation(fake_db, catalog["agency"], catalog["slot"], status="pending")
        response = client.put(
            f"/api/agency/reservations/{reservation['_id']}/status",
            json={"status": "cancelled"},
            headers=auth_headers("rival_owner"),
        )
        assert response.status_code == 404
