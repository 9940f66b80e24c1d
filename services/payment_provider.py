import logging
import re
import secrets
import time
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

DECLINED_TEST_CARD = "4000000000000002"

PAYMENT_METHODS = [
    {"id": "card", "type": "card", "name": "Bank card", "icon": "💳", "available": True},
    {"id": "bank", "type": "bank", "name": "Bank transfer", "icon": "🏦", "available": True},
    {"id": "googlepay", "type": "googlepay", "name": "Google Pay", "icon": "G", "available": True},
    {"id": "applepay", "type": "applepay", "name": "Apple Pay", "icon": "", "available": True},
]


class PaymentDeclined(Exception):
    def __init__(self, message, transaction_id):
        super().__init__(message)
        self.transaction_id = transaction_id


class PaymentProvider:
    """Interface checkout code talks to. A real gateway subclasses this."""

    is_mock = False

    def charge(self, amount, currency, method, card=None, metadata=None):
        """Charge the customer and return a result dict.

        The dict carries ``transaction_id``, ``status``, ``amount`` and
        ``currency``. Raises ``PaymentDeclined`` when the charge is refused.
        """
        raise NotImplementedError

    def methods(self):
        return PAYMENT_METHODS


def generate_transaction_id(prefix="txn"):
    millis = int(datetime.now(timezone.utc).timestamp() * 1000)
    return f"{prefix}_{millis}_{secrets.token_hex(4)}"


class MockPaymentProvider(PaymentProvider):
    """Mock gateway: every charge succeeds after a fixed delay, except the decline test card."""

    is_mock = True

    def __init__(self, delay_seconds=2.0, sleep=time.sleep):
        self.delay_seconds = delay_seconds
        self._sleep = sleep
        logger.info("Mock payment provider initialized (delay=%ss)", delay_seconds)

    def charge(self, amount, currency, method, card=None, metadata=None):
        if self.delay_seconds:
            self._sleep(self.delay_seconds)

        transaction_id = generate_transaction_id()

        if method == "card" and card:
            digits = re.sub(r"\D", "", card.get("number") or "")
            if digits == DECLINED_TEST_CARD:
                logger.info("Mock charge %s declined", transaction_id)
                raise PaymentDeclined("Card declined. Try another card.", transaction_id)

        return {
            "transaction_id": transaction_id,
            "status": "success",
            "amount": amount,
            "currency": currency,
            "mock": True,
        }


def get_payment_provider(app):
    provider = app.extensions.get("payment_provider")
    if provider is None:
        provider = MockPaymentProvider(delay_seconds=app.config.get("PAYMENT_DELAY_SECONDS", 0))
        app.extensions["payment_provider"] = provider
    return provider
