"""Checkout for subscription plans, driven from the client.

plan selection -> authentication gate -> payment method -> payment
-> subscription activation -> redirect to the dashboard.
"""
import logging
from collections import namedtuple

from client.api import ApiError
from client.storage import STORAGE_KEYS
from core import validators
from services.plans import SUBSCRIPTION_PLANS

logger = logging.getLogger(__name__)

PAYMENT_METHODS = ("card", "bank", "wallet")

CheckoutResult = namedtuple("CheckoutResult", ["success", "redirect", "errors", "payment", "subscription"])


class CheckoutError(Exception):
    pass


class PaymentFailed(CheckoutError):
    pass


class SubscriptionActivationError(CheckoutError):
    """Payment went through but the subscription was not created."""

    def __init__(self, message, transaction_id):
        super().__init__(message)
        self.transaction_id = transaction_id


def _holder(value):
    if not value or len(value.strip()) < 2:
        return validators.ValidationResult(False, "Enter the card holder name")
    return validators.OK


CARD_RULES = {
    "number": validators.card_number,
    "expiry": validators.card_expiry,
    "cvv": validators.cvv,
    "holder": _holder,
}


class CheckoutFlow:
    def __init__(self, api, sessions, storage):
        self.api = api
        self.sessions = sessions
        self.storage = storage
        self.method = None
        self.state = "plan_selection"

    @property
    def plan(self):
        return self.storage.get(STORAGE_KEYS["SELECTED_PLAN"])

    def select_plan(self, plan_id):
        if plan_id not in SUBSCRIPTION_PLANS:
            raise CheckoutError(f"Unknown plan {plan_id}")
        self.storage.set(STORAGE_KEYS["SELECTED_PLAN"], plan_id)
        self.state = "plan_selected"

    def authenticate(self):
        # AccessDenied leaves the selected plan in storage for after registration
        session = self.sessions.require_role("buyer")
        self.state = "authenticated"
        return session

    def choose_method(self, method):
        if method not in PAYMENT_METHODS:
            raise CheckoutError(f"Unknown payment method {method}")
        self.method = method
        self.state = "method_selected"

    def validate_card(self, card):
        card = card or {}
        _, errors = validators.validate_form(
            {field: card.get(field) for field in CARD_RULES}, CARD_RULES
        )
        return errors

    def submit(self, card=None):
        plan_id = self.plan
        if not plan_id:
            raise CheckoutError("No plan selected")
        if self.state != "method_selected":
            raise CheckoutError(f"Cannot submit payment in state {self.state}")

        if self.method == "card":
            errors = self.validate_card(card)
            if errors:
                return CheckoutResult(False, None, errors, None, None)

        body = {"planId": plan_id, "paymentMethod": self.method}
        if self.method == "card":
            body["card"] = card

        try:
            payment = self.api.process_payment(body)["payment"]
        except ApiError as e:
            logger.info("Payment failed: %s", e)
            self.state = "method_selected"
            raise PaymentFailed(str(e)) from e

        self.state = "paid"

        try:
            subscription = self.api.create_subscription(plan_id, payment_method=self.method)["subscription"]
        except ApiError as e:
            logger.error("Payment %s succeeded but subscription failed: %s", payment["transactionId"], e)
            raise SubscriptionActivationError(str(e), payment["transactionId"]) from e

        self.storage.remove(STORAGE_KEYS["SELECTED_PLAN"])
        self.state = "completed"
        return CheckoutResult(True, "dashboard", {}, payment, subscription)

    def run(self, plan_id, method, card=None):
        """Drive every step in order; AccessDenied bubbles up for the redirect."""
        self.select_plan(plan_id)
        self.authenticate()
        self.choose_method(method)
        return self.submit(card)

