import logging
import math
from datetime import date, datetime, timedelta, timezone

from client.api import ApiError
from client.storage import STORAGE_KEYS

logger = logging.getLogger(__name__)

DELIVERIES_PER_MONTH = 4

MEMBER_SECTIONS = ("overview", "subscription", "orders", "profile")
FARMER_SECTIONS = ("overview", "products", "deliveries", "profile")


def resolve_section(fragment, sections=MEMBER_SECTIONS):
    """Map a ``#hash`` fragment to a known section, falling back to the first one."""
    name = (fragment or "").lstrip("#").strip().lower()
    return name if name in sections else sections[0]


def _parse(value):
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_friday(today):
    days = (4 - today.weekday()) % 7 or 7
    return today + timedelta(days=days)


def subscription_view(subscription, now=None):
    """Derived display data; expiry is decided here, the server never flips status."""
    if not subscription:
        return None

    now = now or datetime.now(timezone.utc)
    end = _parse(subscription["endDate"])
    remaining_days = max(0, math.ceil((end - now).total_seconds() / 86400))
    active = subscription["status"] == "active" and end > now

    deliveries = 0
    delivery_date = None
    if active:
        deliveries = math.ceil(remaining_days / 30 * DELIVERIES_PER_MONTH)
        friday = next_friday(now.date())
        if friday <= end.date():
            delivery_date = friday.isoformat()

    status = subscription["status"]
    if status == "active" and not active:
        status = "expired"

    return dict(
        subscription,
        status=status,
        isActive=active,
        daysRemaining=remaining_days,
        deliveriesRemaining=deliveries,
        nextDeliveryDate=delivery_date,
    )


class MemberDashboard:
    def __init__(self, api):
        self.api = api
        self.user = None
        self.subscription = None
        self.orders = []
        self.errors = {}

    def load(self, now=None):
        self.errors = {}

        self.user = self.api.get_profile()

        try:
            self.subscription = subscription_view(self.api.get_subscription(), now=now)
        except ApiError as e:
            logger.warning("Could not load subscription: %s", e)
            self.errors["subscription"] = str(e)

        try:
            self.orders = self.api.get_orders()
        except ApiError as e:
            logger.warning("Could not load orders: %s", e)
            self.orders = []
            self.errors["orders"] = str(e)

        return self

    def retry(self, section):
        if section == "orders":
            self.orders = self.api.get_orders()
        elif section == "subscription":
            self.subscription = subscription_view(self.api.get_subscription())
        self.errors.pop(section, None)


class FarmerDashboard:
    """Farmer product list and delivery log, kept in client storage only."""

    def __init__(self, storage):
        self.storage = storage

    @property
    def products(self):
        return self.storage.get(STORAGE_KEYS["FARMER_PRODUCTS"]) or []

    @property
    def deliveries(self):
        return self.storage.get(STORAGE_KEYS["FARMER_DELIVERIES"]) or []

    def _save(self, products):
        self.storage.set(STORAGE_KEYS["FARMER_PRODUCTS"], products)

    def add_product(self, name, price, quantity, unit="kg", category="vegetables"):
        products = self.products
        product = {
            "id": max((p["id"] for p in products), default=0) + 1,
            "name": name,
            "price": price,
            "quantity": quantity,
            "unit": unit,
            "category": category,
            "createdAt": date.today().isoformat(),
        }
        products.append(product)
        self._save(products)
        return product

    def update_product(self, product_id, **changes):
        products = self.products
        for product in products:
            if product["id"] == product_id:
                product.update(changes)
                self._save(products)
                return product
        return None

    def delete_product(self, product_id):
        products = self.products
        remaining = [p for p in products if p["id"] != product_id]
        if len(remaining) == len(products):
            return False
        self._save(remaining)
        return True

    def stats(self):
        products = self.products
        return {
            "revenue": sum(p["price"] * p["quantity"] for p in products),
            "deliveries": len(self.deliveries),
            "products": len(products),
        }
