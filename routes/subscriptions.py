from core.imports import Blueprint, jwt_required, jsonify, request, logging
from core.extensions import db
from core.errors import NotFound, Conflict
from core.security import current_user, current_user_id
from models.userModel import utcnow
from models.subscriptionModels import Subscription
from schemas.subscriptionSchemas import CreateSubscriptionSchema, RenewSubscriptionSchema
from services.plans import plan_end_date, plan_catalog

logger = logging.getLogger(__name__)

subscriptions_bp = Blueprint('subscriptions', __name__)


def _owned_subscription(subscription_id):
    subscription = Subscription.query.filter_by(id=subscription_id, user_id=current_user_id()).first()
    if not subscription:
        raise NotFound("Subscription not found")
    return subscription


@subscriptions_bp.route('/api/subscriptions/plans', methods=['GET'])
def list_plans():
    """
    List the subscription plans
    ---
    tags:
      - Subscriptions
    responses:
      200:
        description: Plans with price, duration in months, deliveries and savings
    """
    return jsonify({"data": plan_catalog()}), 200


@subscriptions_bp.route('/api/subscriptions', methods=['GET'])
@jwt_required()
def get_subscription():
    """
    Get the current user's most recent subscription
    ---
    tags:
      - Subscriptions
    security:
      - Bearer: []
    parameters:
      - name: Authorization
        in: header
        description: "JWT token as: Bearer <your_token>"
        required: true
        type: string
    responses:
      200:
        description: The latest subscription, or null when there is none
    """
    subscription = (
        Subscription.query
        .filter_by(user_id=current_user_id())
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        .first()
    )
    return jsonify(subscription.to_dict() if subscription else None), 200


@subscriptions_bp.route('/api/subscriptions', methods=['POST'])
@jwt_required()
def create_subscription():
    """
    Create and activate a subscription
    ---
    tags:
      - Subscriptions
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - name: Authorization
        in: header
        description: "JWT token as: Bearer <your_token>"
        required: true
        type: string
      - name: body
        in: body
        required: true
        schema:
          type: object
          required:
            - plan
          properties:
            plan:
              type: string
              enum: [1month, 3months, 1year]
            paymentMethod:
              type: string
              example: card
    responses:
      201:
        description: Subscription created, endDate is startDate plus the plan duration
      400:
        description: Validation error
    """
    user = current_user()
    data = CreateSubscriptionSchema.model_validate(request.get_json(silent=True) or {})

    start = utcnow()
    subscription = Subscription(
        user_id=user.id,
        plan=data.plan,
        status="active",
        start_date=start,
        end_date=plan_end_date(data.plan, start)
    )
    db.session.add(subscription)
    db.session.commit()

    logger.info("Subscription %s (%s) activated for user %s", subscription.id, data.plan, user.id)

    return jsonify({
        "message": "Subscription created successfully",
        "subscription": subscription.to_dict()
    }), 201


@subscriptions_bp.route('/api/subscriptions/<int:subscription_id>/cancel', methods=['POST'])
@jwt_required()
def cancel_subscription(subscription_id):
    subscription = _owned_subscription(subscription_id)

    if subscription.status == "cancelled":
        raise Conflict("Subscription is already cancelled")

    subscription.status = "cancelled"
    db.session.commit()

    return jsonify({
        "message": "Subscription cancelled",
        "subscription": subscription.to_dict()
    }), 200


@subscriptions_bp.route('/api/subscriptions/<int:subscription_id>/renew', methods=['POST'])
@jwt_required()
def renew_subscription(subscription_id):
    """
    Renew a subscription with a plan
    ---
    tags:
      - Subscriptions
    description: >
      Extends the subscription from its current end date, or from now when it
      already ended, and switches it to the given plan.
    parameters:
      - name: subscription_id
        in: path
        required: true
        type: integer
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            plan:
              type: string
              enum: [1month, 3months, 1year]
    responses:
      200:
        description: Subscription renewed
      404:
        description: Subscription not found
      409:
        description: Cancelled subscriptions cannot be renewed
    """
    subscription = _owned_subscription(subscription_id)
    data = RenewSubscriptionSchema.model_validate(request.get_json(silent=True) or {})

    if subscription.status == "cancelled":
        raise Conflict("Cancelled subscriptions cannot be renewed")

    base = max(subscription.end_date, utcnow())
    subscription.plan = data.plan
    subscription.status = "active"
    subscription.end_date = plan_end_date(data.plan, base)
    db.session.commit()

    return jsonify({
        "message": "Subscription renewed",
        "subscription": subscription.to_dict()
    }), 200
