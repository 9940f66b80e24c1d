import logging

import requests

from client.storage import STORAGE_KEYS

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    def __init__(self, message, status=None, payload=None):
        super().__init__(message)
        self.status = status
        self.payload = payload or {}


class NetworkError(ApiError):
    pass


class ValidationFailed(ApiError):
    @property
    def details(self):
        return self.payload.get("details", [])


class UnauthorizedError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


ERRORS_BY_STATUS = {
    400: ValidationFailed,
    401: UnauthorizedError,
    404: NotFoundError,
}


class ApiClient:
    """Thin REST client for the BioMarket API.

    The bearer token is read from storage on every call, so a login in one
    place is visible to every client sharing the storage.
    """

    def __init__(self, base_url, storage, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.storage = storage
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method, path, json=None, params=None, auth=True):
        headers = {"Content-Type": "application/json"}
        token = self.storage.get(STORAGE_KEYS["TOKEN"]) if auth else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, headers=headers, json=json,
                                            params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            body = payload if isinstance(payload, dict) else {}
            message = body.get("error") or f"HTTP {response.status_code}"
            error_class = ERRORS_BY_STATUS.get(response.status_code, ApiError)
            raise error_class(message, status=response.status_code, payload=body)

        return payload

    # auth
    def register(self, data):
        return self.request("POST", "/api/auth/register", json=data, auth=False)

    def login(self, email, password):
        return self.request("POST", "/api/auth/login", json={"email": email, "password": password}, auth=False)

    def logout(self):
        return self.request("POST", "/api/auth/logout")

    def me(self):
        return self.request("GET", "/api/auth/me")

    # users
    def get_profile(self):
        return self.request("GET", "/api/users/profile")

    def update_profile(self, data):
        return self.request("PUT", "/api/users/profile", json=data)

    def delete_account(self):
        return self.request("DELETE", "/api/users/profile")

    def export_data(self):
        return self.request("GET", "/api/users/data")

    # orders
    def get_orders(self):
        return self.request("GET", "/api/orders")

    def get_order(self, order_id):
        return self.request("GET", f"/api/orders/{order_id}")

    def create_order(self, items, delivery_date, address=None):
        body = {"items": items, "deliveryDate": delivery_date}
        if address:
            body["address"] = address
        return self.request("POST", "/api/orders", json=body)

    def cancel_order(self, order_id):
        return self.request("POST", f"/api/orders/{order_id}/cancel")

    # subscriptions
    def get_plans(self):
        return self.request("GET", "/api/subscriptions/plans", auth=False)

    def get_subscription(self):
        return self.request("GET", "/api/subscriptions")

    def create_subscription(self, plan, payment_method=None):
        body = {"plan": plan}
        if payment_method:
            body["paymentMethod"] = payment_method
        return self.request("POST", "/api/subscriptions", json=body)

    def cancel_subscription(self, subscription_id):
        return self.request("POST", f"/api/subscriptions/{subscription_id}/cancel")

    def renew_subscription(self, subscription_id, plan):
        return self.request("POST", f"/api/subscriptions/{subscription_id}/renew", json={"plan": plan})

    # payments
    def get_payments(self):
        return self.request("GET", "/api/payments")

    def process_payment(self, data):
        return self.request("POST", "/api/payments/process", json=data)

    def get_payment_methods(self):
        return self.request("GET", "/api/payments/methods", auth=False)

    # catalog
    def get_products(self, category="all", sort="rating", query=None):
        params = {"category": category, "sort": sort}
        if query:
            params["q"] = query
        return self.request("GET", "/api/products", params=params, auth=False)
