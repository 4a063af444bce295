"""Tests for menu catalog administration."""

from decimal import Decimal

import pytest

from app.models.menu import CourseType, MenuItem
from app.schemas.menu import MenuItemCreate, MenuItemUpdate
from app.services.menu_service import (
    MenuItemInUseError,
    MenuService,
    MenuValidationError,
    parse_course_type,
)


def dish(**overrides):
    data = {
        "name": "Roast Cod",
        "type": "main",
        "description": "Champagne & Tarragon Beurre Blanc",
        "price": 0,
        "surcharge": 0,
        "subcategory": "regular",
        "available": True,
    }
    data.update(overrides)
    return data


class TestMenuService:
    def test_parse_course_type(self):
        assert parse_course_type("dessert") == CourseType.DESSERT
        with pytest.raises(MenuValidationError, match="Invalid menu item type"):
            parse_course_type("side")

    def test_create_and_group(self, db_session):
        service = MenuService(db_session)
        service.create(MenuItemCreate(**dish()))
        service.create(MenuItemCreate(**dish(name="Hidden Dish", available=False)))

        grouped = service.grouped_available()

        assert [i.name for i in grouped["main"]] == ["Roast Cod"]
        assert grouped["starter"] == []
        assert len(service.list_all()) == 2

    def test_name_trimmed(self, db_session):
        item = MenuService(db_session).create(MenuItemCreate(**dish(name="  Roast Cod  ")))
        assert item.name == "Roast Cod"

    @pytest.mark.parametrize("overrides", [{"name": ""}, {"name": "   "}, {"type": None}, {"price": None}])
    def test_missing_fields(self, db_session, overrides):
        with pytest.raises(MenuValidationError, match="Missing required fields"):
            MenuService(db_session).create(MenuItemCreate(**dish(**overrides)))

    def test_update_keeps_surcharge_and_subcategory_when_omitted(self, db_session, menu_items):
        ribeye = menu_items["ribeye"]
        update = MenuItemUpdate(name="12oz Ribeye", type="main", description="New garnish", price=0)

        item = MenuService(db_session).update(ribeye.id, update)

        assert item.surcharge == Decimal("8.00")
        assert item.subcategory == "steak"
        assert item.description == "New garnish"

    def test_update_sets_surcharge_when_given(self, db_session, menu_items):
        update = MenuItemUpdate(name="12oz Ribeye", type="main", price=0, surcharge=0, subcategory="regular")

        item = MenuService(db_session).update(menu_items["ribeye"].id, update)

        assert item.surcharge == Decimal("0.00")
        assert item.subcategory == "regular"

    def test_update_missing(self, db_session):
        assert MenuService(db_session).update(404, MenuItemCreate(**dish())) is None

    def test_delete_refused_when_ordered(self, db_session, menu_items, booking_payload, settings):
        from app.schemas.booking import BookingCreate
        from app.services.booking_service import BookingService

        BookingService(db_session, settings).create_booking(BookingCreate.model_validate(booking_payload()))
        service = MenuService(db_session)

        assert service.order_count(menu_items["turkey"].id) == 2
        with pytest.raises(MenuItemInUseError):
            service.delete(menu_items["turkey"].id)
        assert db_session.get(MenuItem, menu_items["turkey"].id) is not None

    def test_negative_surcharge_rejected_by_model(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            MenuItem(name="Bad", type=CourseType.MAIN, surcharge=Decimal("-1"))

    def test_blank_name_rejected_by_model(self):
        with pytest.raises(ValueError, match="cannot be blank"):
            MenuItem(name="  ", type=CourseType.MAIN)


class TestMenuAdminApi:
    def test_list_includes_unavailable(self, client, admin_headers, menu_items):
        response = client.get("/api/admin/menu", headers=admin_headers)
        assert response.status_code == 200
        names = [i["name"] for i in response.json()]
        assert "Lemon Posset" in names
        assert len(names) == len(menu_items)

    def test_create(self, client, admin_headers):
        response = client.post("/api/admin/menu", json=dish(surcharge=2.5), headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Roast Cod"
        assert data["type"] == "main"
        assert data["surcharge"] == 2.5
        assert data["available"] is True
        assert client.get("/api/menu").json()["main"][0]["id"] == data["id"]

    def test_create_invalid_type(self, client, admin_headers):
        response = client.post("/api/admin/menu", json=dish(type="side"), headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid menu item type"

    def test_create_missing_name(self, client, admin_headers):
        payload = dish()
        del payload["name"]
        response = client.post("/api/admin/menu", json=payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"

    def test_create_negative_price(self, client, admin_headers):
        response = client.post("/api/admin/menu", json=dish(price=-1), headers=admin_headers)
        assert response.status_code == 422

    def test_update(self, client, admin_headers, menu_items):
        item_id = menu_items["ribeye"].id
        response = client.put(
            f"/api/admin/menu/{item_id}",
            json=dish(name="12oz Ribeye", surcharge=9, subcategory="steak", available=False),
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["surcharge"] == 9.0
        assert response.json()["available"] is False
        main_names = [i["name"] for i in client.get("/api/menu").json()["main"]]
        assert "12oz Ribeye" not in main_names

    def test_surcharge_change_reprices_new_bookings(self, client, admin_headers, menu_items, booking_payload):
        client.put(
            f"/api/admin/menu/{menu_items['scallops'].id}",
            json=dish(name="Pan Seared Scallops", type="starter", surcharge=6),
            headers=admin_headers,
        )

        response = client.post("/api/bookings", json=booking_payload())

        # (10 + 5 + 6) * 1.10
        assert response.json()["total_amount"] == 23.1

    def test_partial_edit_keeps_premium_pricing(self, client, admin_headers, menu_items, booking_payload):
        ribeye_id = menu_items["ribeye"].id
        response = client.put(
            f"/api/admin/menu/{ribeye_id}",
            json={"name": "12oz Ribeye", "type": "main", "description": "Peppercorn sauce", "price": 0, "available": True},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["surcharge"] == 8.0
        assert response.json()["subcategory"] == "steak"

        payload = booking_payload()
        payload["guests"][0]["orders"]["main"] = ribeye_id
        booking = client.post("/api/bookings", json=payload)

        # (10 + 5 + 5 + 8) * 1.10
        assert booking.json()["total_amount"] == 30.8

    def test_update_invalid_type(self, client, admin_headers, menu_items):
        response = client.put(
            f"/api/admin/menu/{menu_items['ribeye'].id}", json=dish(type="entree"), headers=admin_headers
        )
        assert response.status_code == 400

    def test_update_not_found(self, client, admin_headers):
        response = client.put("/api/admin/menu/999", json=dish(), headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Menu item not found"

    def test_delete(self, client, admin_headers, menu_items):
        item_id = menu_items["tart"].id

        response = client.delete(f"/api/admin/menu/{item_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        names = [i["name"] for i in client.get("/api/admin/menu", headers=admin_headers).json()]
        assert "Dark Chocolate & Hazelnut Tart" not in names

    def test_delete_in_use_conflict(self, client, admin_headers, menu_items, booking_payload):
        client.post("/api/bookings", json=booking_payload())

        response = client.delete(f"/api/admin/menu/{menu_items['pudding'].id}", headers=admin_headers)

        assert response.status_code == 409

    def test_delete_not_found(self, client, admin_headers):
        response = client.delete("/api/admin/menu/999", headers=admin_headers)
        assert response.status_code == 404
