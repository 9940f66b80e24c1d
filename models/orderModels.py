from core.extensions import db
from models.userModel import utcnow, isoformat

ORDER_STATUSES = ("pending", "processing", "delivered", "cancelled")


class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    total = db.Column(db.Float, nullable=False)
    delivery_date = db.Column(db.String(50), nullable=False)
    address = db.Column(db.String(500), nullable=True)
    status = db.Column(db.String(50), default="pending")  # pending, processing, delivered, cancelled
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "total": self.total,
            "deliveryDate": self.delivery_date,
            "address": self.address,
            "status": self.status,
            "items": [item.to_dict() for item in self.items],
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = db.Column(db.String(100), nullable=False)  # catalog id, no FK: the catalog is static
    name = db.Column(db.String(200), nullable=False)  # snapshot of product name
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Float, nullable=False)  # price per unit
    total = db.Column(db.Float, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "orderId": self.order_id,
            "productId": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
            "total": self.total,
        }
