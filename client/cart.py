import logging
from numbers import Number

from client.storage import STORAGE_KEYS

logger = logging.getLogger(__name__)


def is_valid_product(product):
    if not isinstance(product, dict):
        return False
    price = product.get("priceSubscription")
    return (
        isinstance(product.get("id"), int) and not isinstance(product.get("id"), bool)
        and isinstance(product.get("name"), str)
        and isinstance(price, Number) and not isinstance(price, bool)
        and price >= 0
    )


class CartManager:
    """Cart line items keyed by product id, written through to storage on every change."""

    def __init__(self, storage):
        self.storage = storage
        stored = storage.get(STORAGE_KEYS["CART"])
        self.cart = stored if isinstance(stored, list) else []

    def get_cart(self):
        return self.cart

    def get_count(self):
        return sum(item.get("quantity", 1) for item in self.cart)

    def get_total_price(self):
        return sum(item["priceSubscription"] * item.get("quantity", 1) for item in self.cart)

    def _find(self, product_id):
        return next((item for item in self.cart if item["id"] == product_id), None)

    def add_item(self, product):
        if not is_valid_product(product):
            logger.error("Invalid product: %r", product)
            return False

        existing = self._find(product["id"])
        if existing:
            existing["quantity"] = existing.get("quantity", 1) + 1
        else:
            self.cart.append(dict(product, quantity=1))

        self.save()
        return True

    def remove_item(self, product_id):
        initial = len(self.cart)
        self.cart = [item for item in self.cart if item["id"] != product_id]
        if len(self.cart) < initial:
            self.save()
            return True
        return False

    def update_quantity(self, product_id, quantity):
        item = self._find(product_id)
        if not item:
            return False
        if quantity <= 0:
            return self.remove_item(product_id)

        item["quantity"] = quantity
        self.save()
        return True

    def clear(self):
        self.cart = []
        self.save()

    def save(self):
        self.storage.set(STORAGE_KEYS["CART"], self.cart)

    def to_order_items(self):
        return [
            {
                "productId": str(item["id"]),
                "name": item["name"],
                "quantity": item.get("quantity", 1),
                "price": item["priceSubscription"],
                "total": item["priceSubscription"] * item.get("quantity", 1),
            }
            for item in self.cart
        ]
