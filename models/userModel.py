from core.extensions import db
from core.imports import datetime, timezone

ROLES = ("buyer", "farmer")


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() + "Z" if value else None


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(200), nullable=False)
    fullname = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="buyer")  # 'buyer', 'farmer'
    phone = db.Column(db.String(20), nullable=True)
    address = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    orders = db.relationship(
        "Order", backref="user", cascade="all, delete-orphan",
        order_by="Order.created_at.desc()"
    )
    subscriptions = db.relationship(
        "Subscription", backref="user", cascade="all, delete-orphan",
        order_by="Subscription.created_at.desc()"
    )
    payments = db.relationship(
        "Payment", backref="user", cascade="all, delete-orphan",
        order_by="Payment.created_at.desc()"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "fullname": self.fullname,
            "role": self.role,
            "phone": self.phone,
            "address": self.address,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
