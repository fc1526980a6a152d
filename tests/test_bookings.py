import pytest
from bson import ObjectId

from schemas import Role
from security import create_token
from tests.helpers import auth

URL = "/api/admin/bookings/admin"


def booking(tourist_id, **overrides):
    body = {"touristId": tourist_id, "date": "2026-12-01", "time": "06:00", "adults": 2}
    body.update(overrides)
    return body


@pytest.fixture
def tourist_id(make_tourist):
    return make_tourist()


def test_provider_booking_bills_children_at_half_rate(client, db, admin_headers, tourist_id, make_provider):
    provider_id = make_provider(price=20)
    res = client.post(URL, json=booking(tourist_id, providerId=provider_id, adults=3, children=2), headers=admin_headers)
    assert res.status_code == 201
    created = res.json()["booking"]
    assert created["totalPrice"] == 80
    assert created["status"] == "pending"
    assert created["providerId"] == provider_id
    assert created["productType"] is None

    stored = db["booking"].find_one({"_id": ObjectId(created["id"])})
    assert stored["touristId"] == ObjectId(tourist_id)
    assert stored["providerId"] == ObjectId(provider_id)


def test_product_booking_uses_tier_for_whole_party(client, admin_headers, tourist_id):
    res = client.post(URL, json=booking(tourist_id, productType="Village Tour", adults=4, children=2), headers=admin_headers)
    assert res.status_code == 201
    assert res.json()["booking"]["totalPrice"] == pytest.approx(109.2)


def test_client_supplied_price_is_ignored(client, admin_headers, tourist_id):
    body = booking(tourist_id, productType="Jeep Safari", adults=2, totalPrice=1)
    res = client.post(URL, json=body, headers=admin_headers)
    assert res.json()["booking"]["totalPrice"] == 76


def test_status_can_be_set_on_creation(client, admin_headers, tourist_id):
    body = booking(tourist_id, productType="Jeep Safari", status="confirmed")
    res = client.post(URL, json=body, headers=admin_headers)
    assert res.json()["booking"]["status"] == "confirmed"


@pytest.mark.parametrize("missing", ["touristId", "date", "time", "adults"])
def test_required_fields(client, admin_headers, tourist_id, missing):
    body = booking(tourist_id, productType="Jeep Safari")
    del body[missing]
    res = client.post(URL, json=body, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Tourist ID, date, time, and adults are required"


def test_zero_adults_is_present_not_missing(client, admin_headers, tourist_id):
    res = client.post(URL, json=booking(tourist_id, productType="Jeep Safari", adults=0, children=2), headers=admin_headers)
    assert res.status_code == 201
    assert res.json()["booking"]["totalPrice"] == 76


def test_both_pricing_sources_rejected_before_anything_else(client, admin_headers, make_provider):
    body = booking(str(ObjectId()), providerId=make_provider(), productType="Jeep Safari")
    res = client.post(URL, json=body, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Provide either providerId or productType, not both"


def test_no_pricing_source(client, admin_headers, tourist_id):
    res = client.post(URL, json=booking(tourist_id), headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Either providerId or productType is required"


def test_malformed_ids(client, admin_headers, tourist_id):
    res = client.post(URL, json=booking(tourist_id, providerId="nope"), headers=admin_headers)
    assert res.json() == {"error": "Invalid Provider ID"}

    res = client.post(URL, json=booking("nope", productType="Jeep Safari"), headers=admin_headers)
    assert res.json() == {"error": "Invalid Tourist ID"}


def test_unknown_tourist_and_provider(client, admin_headers, tourist_id):
    res = client.post(URL, json=booking(str(ObjectId()), productType="Jeep Safari"), headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Tourist not found"

    res = client.post(URL, json=booking(tourist_id, providerId=str(ObjectId())), headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Provider not found"


def test_party_outside_bands(client, db, admin_headers, tourist_id):
    res = client.post(URL, json=booking(tourist_id, productType="Jeep Safari", adults=18, children=3), headers=admin_headers)
    assert res.status_code == 400
    assert "21" in res.json()["error"]
    assert db["booking"].count_documents({}) == 0


@pytest.mark.parametrize("product", ["Tuk Tuk Adventures", "Whale Watching"])
def test_product_without_pricing(client, admin_headers, tourist_id, product):
    res = client.post(URL, json=booking(tourist_id, productType=product), headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid product type or no pricing available"


def test_negative_counts_rejected(client, admin_headers, tourist_id):
    res = client.post(URL, json=booking(tourist_id, productType="Jeep Safari", children=-1), headers=admin_headers)
    assert res.status_code == 400


def test_approval_only_changes_status(client, admin_headers, tourist_id, make_provider):
    created = client.post(
        URL, json=booking(tourist_id, providerId=make_provider(price=42.5), adults=2, children=1), headers=admin_headers
    ).json()["booking"]

    res = client.put(f"{URL}/{created['id']}/approve", headers=admin_headers)
    assert res.status_code == 200
    approved = res.json()["booking"]
    assert approved["status"] == "confirmed"
    assert approved["totalPrice"] == created["totalPrice"] == pytest.approx(106.25)
    for field in ("touristId", "providerId", "date", "time", "adults", "children"):
        assert approved[field] == created[field]


def test_approve_and_delete_validate_ids(client, admin_headers):
    assert client.put(f"{URL}/bad-id/approve", headers=admin_headers).status_code == 400
    assert client.put(f"{URL}/{ObjectId()}/approve", headers=admin_headers).status_code == 404
    assert client.delete(f"{URL}/{ObjectId()}", headers=admin_headers).status_code == 404


def test_admin_edit_and_delete(client, db, admin_headers, tourist_id):
    created = client.post(URL, json=booking(tourist_id, productType="Jeep Safari"), headers=admin_headers).json()["booking"]

    res = client.put(
        f"{URL}/{created['id']}",
        json={"totalPrice": 50, "status": "cancelled", "specialNotes": "rain"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    edited = res.json()["booking"]
    assert (edited["totalPrice"], edited["status"], edited["specialNotes"]) == (50, "cancelled", "rain")
    assert edited["adults"] == created["adults"]

    listed = client.get(URL, headers=admin_headers).json()
    assert [b["id"] for b in listed] == [created["id"]]
    assert client.get(URL, params={"status": "pending"}, headers=admin_headers).json() == []

    assert client.delete(f"{URL}/{created['id']}", headers=admin_headers).json() == {"message": "Booking deleted"}
    assert db["booking"].count_documents({}) == 0


def test_tourist_books_for_themselves(client, db, tourist_id, make_tourist):
    other_id = make_tourist(email="other@gmail.com")
    token = create_token(tourist_id, Role.TOURIST)

    body = booking(other_id, productType="Catamaran Boat Ride", adults=3, specialNotes="vegetarian")
    res = client.post("/api/bookings", json=body, headers=auth(token))
    assert res.status_code == 201
    created = res.json()["booking"]
    assert created["touristId"] == tourist_id
    assert created["totalPrice"] == 21

    mine = client.get("/api/bookings", headers=auth(token)).json()
    assert [b["id"] for b in mine] == [created["id"]]
    other = client.get("/api/bookings", headers=auth(create_token(other_id, Role.TOURIST))).json()
    assert other == []


def test_booking_routes_enforce_roles(client, tourist_id, admin_token):
    res = client.post("/api/bookings", json=booking(tourist_id, productType="Jeep Safari"), headers=auth(admin_token))
    assert res.status_code == 403

    tourist_token = create_token(tourist_id, Role.TOURIST)
    res = client.post(URL, json=booking(tourist_id, productType="Jeep Safari"), headers=auth(tourist_token))
    assert res.status_code == 403
    assert res.json() == {"error": "Not authorized: Admin only"}


def test_unapproved_provider_is_not_bookable(client, admin_headers, tourist_id, make_provider):
    provider_id = make_provider(approved=False)
    res = client.post(URL, json=booking(tourist_id, providerId=provider_id), headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Provider not found"


def test_provider_total_is_not_rounded(client, admin_headers, tourist_id, make_provider):
    provider_id = make_provider(price=10.005)
    res = client.post(URL, json=booking(tourist_id, providerId=provider_id, adults=1), headers=admin_headers)
    assert res.status_code == 201
    assert res.json()["booking"]["totalPrice"] == 10.005
