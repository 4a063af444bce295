"""Tests for the public menu, quote and booking endpoints."""

from sqlalchemy import func, select

from app.models.booking import Booking


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestMenu:
    def test_grouped_by_course(self, client, menu_items):
        response = client.get("/api/menu")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"starter", "main", "dessert"}
        assert [i["name"] for i in data["starter"]] == ["Crispy Satay Chicken", "Pan Seared Scallops"]
        assert [i["name"] for i in data["main"]] == ["12oz Ribeye", "Turkey & Ham Roulade"]

    def test_unavailable_items_hidden(self, client, menu_items):
        data = client.get("/api/menu").json()
        assert "Lemon Posset" not in [i["name"] for i in data["dessert"]]
        assert len(data["dessert"]) == 2

    def test_item_fields(self, client, menu_items):
        ribeye = client.get("/api/menu").json()["main"][0]
        assert ribeye["id"] == menu_items["ribeye"].id
        assert ribeye["type"] == "main"
        assert ribeye["subcategory"] == "steak"
        assert ribeye["surcharge"] == 8.0
        assert ribeye["available"] is True

    def test_empty_menu(self, client):
        assert client.get("/api/menu").json() == {"starter": [], "main": [], "dessert": []}


class TestQuote:
    def test_quote_matches_booking_total(self, client, booking_payload):
        response = client.post("/api/bookings/quote", json={"guests": booking_payload()["guests"]})

        assert response.status_code == 200
        data = response.json()
        assert data["guest_count"] == 2
        assert data["subtotal"] == 20.0
        assert data["tip"] == 2.0
        assert data["total"] == 22.0
        assert data["surcharges"] == [
            {"guest_name": "Bob", "item_name": "Pan Seared Scallops", "amount": 5.0}
        ]

    def test_incomplete_selection_still_priced(self, client, menu_items):
        response = client.post(
            "/api/bookings/quote",
            json={"guests": [{"guest_name": "", "courseOption": "3-course", "orders": {}}]},
        )
        assert response.status_code == 200
        assert response.json()["total"] == 11.0

    def test_null_guest_name_priced(self, client, menu_items):
        response = client.post(
            "/api/bookings/quote",
            json={"guests": [{"guest_name": None, "courseOption": "2-course",
                              "orders": {"starter": menu_items["scallops"].id}}]},
        )
        assert response.status_code == 200
        assert response.json()["total"] == 11.0
        assert response.json()["surcharges"][0]["guest_name"] == ""

    def test_nothing_persisted(self, client, db_session, booking_payload):
        client.post("/api/bookings/quote", json={"guests": booking_payload()["guests"]})
        assert db_session.execute(select(func.count(Booking.id))).scalar_one() == 0

    def test_unknown_course_option(self, client):
        response = client.post(
            "/api/bookings/quote",
            json={"guests": [{"guest_name": "A", "courseOption": "4-course"}]},
        )
        assert response.status_code == 422


class TestCreateBooking:
    def test_created(self, client, booking_payload):
        response = client.post("/api/bookings", json=booking_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["booking_reference"].startswith("XM-")
        assert data["total_amount"] == 22.0
        assert data["total_guests"] == 2
        assert data["payment_link"] == "https://pay.example.com/xmas/22.00?h=testhash"
        assert isinstance(data["id"], int)

    def test_snake_case_course_option_accepted(self, client, booking_payload):
        payload = booking_payload()
        for guest in payload["guests"]:
            guest["course_option"] = guest.pop("courseOption")

        response = client.post("/api/bookings", json=payload)

        assert response.status_code == 201
        assert response.json()["total_amount"] == 22.0

    def test_client_total_ignored(self, client, booking_payload):
        response = client.post("/api/bookings", json=booking_payload(total_amount=1))
        assert response.json()["total_amount"] == 22.0

    def test_validation_message(self, client, booking_payload):
        payload = booking_payload()
        del payload["guests"][0]["orders"]["main"]

        response = client.post("/api/bookings", json=payload)

        assert response.status_code == 400
        assert response.json() == {"detail": "Alice must select a main course"}

    def test_missing_guest_name(self, client, booking_payload):
        payload = booking_payload()
        payload["guests"][1]["guest_name"] = "  "

        response = client.post("/api/bookings", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "All guests must have a name"

    def test_no_guests(self, client, booking_payload):
        response = client.post("/api/bookings", json=booking_payload(guests=[]))
        assert response.status_code == 400
        assert response.json()["detail"] == "At least one guest is required"

    def test_missing_organizer(self, client, booking_payload):
        response = client.post("/api/bookings", json=booking_payload(organizer_name=""))
        assert response.status_code == 400
        assert response.json()["detail"] == "Organizer name is required"

    def test_null_organizer_name(self, client, booking_payload):
        response = client.post("/api/bookings", json=booking_payload(organizer_name=None))
        assert response.status_code == 400
        assert response.json()["detail"] == "Organizer name is required"

    def test_null_guest_name(self, client, booking_payload):
        payload = booking_payload()
        payload["guests"][0]["guest_name"] = None

        response = client.post("/api/bookings", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "All guests must have a name"

    def test_unknown_dish(self, client, booking_payload):
        payload = booking_payload()
        payload["guests"][0]["orders"]["starter"] = 4242

        response = client.post("/api/bookings", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Menu item 4242 is not a valid starter"

    def test_too_many_guests(self, client, booking_payload):
        guest = booking_payload()["guests"][0]
        response = client.post("/api/bookings", json=booking_payload(guests=[guest] * 51))
        assert response.status_code == 422


class TestGetBooking:
    def test_by_reference(self, client, booking_payload):
        reference = client.post("/api/bookings", json=booking_payload()).json()["booking_reference"]

        response = client.get("/api/bookings", params={"reference": reference})

        assert response.status_code == 200
        data = response.json()
        assert data["booking_reference"] == reference
        assert data["payment_status"] == "pending"
        assert data["organizer_name"] == "Jane Organizer"
        alice, bob = data["guests"]
        assert alice["guest_name"] == "Alice"
        assert [o["menu_item"]["type"] for o in alice["orders"]] == ["starter", "main", "dessert"]
        assert bob["orders"][0]["menu_item"]["name"] == "Pan Seared Scallops"
        assert bob["orders"][0]["menu_item"]["surcharge"] == 5.0

    def test_reference_required(self, client):
        response = client.get("/api/bookings")
        assert response.status_code == 400
        assert response.json()["detail"] == "Reference parameter required"

    def test_empty_reference(self, client):
        assert client.get("/api/bookings", params={"reference": ""}).status_code == 400

    def test_not_found(self, client):
        response = client.get("/api/bookings", params={"reference": "XM-NOPE-0000"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Booking not found"
