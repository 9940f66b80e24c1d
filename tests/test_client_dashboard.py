from datetime import date, datetime, timezone

from client.api import ApiError
from client.dashboard import (
    FARMER_SECTIONS, FarmerDashboard, MemberDashboard, next_friday, resolve_section, subscription_view,
)
from client.storage import STORAGE_KEYS

NOW = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)  # a Wednesday


def _subscription(end, status="active"):
    return {"id": 1, "plan": "1month", "status": status,
            "startDate": "2026-09-14T12:00:00Z", "endDate": end}


def test_resolve_section():
    assert resolve_section("#orders") == "orders"
    assert resolve_section("#Products", FARMER_SECTIONS) == "products"
    assert resolve_section("#unknown") == "overview"
    assert resolve_section(None) == "overview"


def test_next_friday():
    assert next_friday(date(2026, 10, 14)) == date(2026, 10, 16)
    assert next_friday(date(2026, 10, 16)) == date(2026, 10, 23)
    assert next_friday(date(2026, 10, 17)) == date(2026, 10, 23)


def test_active_subscription_view():
    view = subscription_view(_subscription("2026-11-13T12:00:00Z"), now=NOW)

    assert view["isActive"] is True
    assert view["status"] == "active"
    assert view["daysRemaining"] == 30
    assert view["deliveriesRemaining"] == 4
    assert view["nextDeliveryDate"] == "2026-10-16"


def test_lapsed_subscription_shows_as_expired():
    view = subscription_view(_subscription("2026-10-01T12:00:00Z"), now=NOW)

    assert view["isActive"] is False
    assert view["status"] == "expired"
    assert view["daysRemaining"] == 0
    assert view["deliveriesRemaining"] == 0
    assert view["nextDeliveryDate"] is None


def test_cancelled_subscription_is_not_active():
    view = subscription_view(_subscription("2026-11-13T12:00:00Z", status="cancelled"), now=NOW)

    assert view["isActive"] is False
    assert view["status"] == "cancelled"


def test_no_subscription():
    assert subscription_view(None) is None


class FlakyApi:
    def __init__(self):
        self.fail_orders = True

    def get_profile(self):
        return {"id": 1, "fullname": "Jana Nováková"}

    def get_subscription(self):
        return _subscription("2026-11-13T12:00:00Z")

    def get_orders(self):
        if self.fail_orders:
            raise ApiError("HTTP 503", status=503)
        return [{"id": 7}]


def test_member_dashboard_isolates_section_errors():
    api = FlakyApi()
    dashboard = MemberDashboard(api).load(now=NOW)

    assert dashboard.user["fullname"] == "Jana Nováková"
    assert dashboard.subscription["isActive"] is True
    assert dashboard.orders == []
    assert dashboard.errors == {"orders": "HTTP 503"}

    api.fail_orders = False
    dashboard.retry("orders")
    assert dashboard.orders == [{"id": 7}]
    assert dashboard.errors == {}


def test_member_dashboard_against_server(api, storage):
    result = api.register({"email": "jana@example.cz", "password": "secret123", "fullname": "Jana Nováková"})
    storage.set(STORAGE_KEYS["TOKEN"], result["token"])
    api.create_subscription("1month")

    dashboard = MemberDashboard(api).load()

    assert dashboard.errors == {}
    assert dashboard.subscription["isActive"] is True
    assert dashboard.subscription["daysRemaining"] >= 28


def test_farmer_dashboard(storage):
    dashboard = FarmerDashboard(storage)

    first = dashboard.add_product("Early potatoes", 38, 10)
    second = dashboard.add_product("Dill", 24, 5, unit="bunch", category="herbs")
    assert (first["id"], second["id"]) == (1, 2)

    assert dashboard.update_product(2, quantity=3)["quantity"] == 3
    assert dashboard.update_product(99, quantity=1) is None

    storage.set(STORAGE_KEYS["FARMER_DELIVERIES"], [{"id": 1}, {"id": 2}])
    assert dashboard.stats() == {"revenue": 38 * 10 + 24 * 3, "deliveries": 2, "products": 2}

    assert dashboard.delete_product(1)
    assert dashboard.delete_product(1) is False
    assert [p["name"] for p in FarmerDashboard(storage).products] == ["Dill"]
