from core.extensions import db
from models.userModel import utcnow, isoformat

SUBSCRIPTION_STATUSES = ("active", "expired", "cancelled")


class Subscription(db.Model):
    __tablename__ = "subscriptions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    plan = db.Column(db.String(20), nullable=False)  # 1month, 3months, 1year
    status = db.Column(db.String(20), default="active")
    start_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    end_date = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "plan": self.plan,
            "status": self.status,
            "startDate": isoformat(self.start_date),
            "endDate": isoformat(self.end_date),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
