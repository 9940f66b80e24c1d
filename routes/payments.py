from core.imports import Blueprint, jwt_required, jsonify, request, current_app, logging
from core.extensions import db
from core.security import current_user, current_user_id
from models.paymentModels import Payment
from schemas.paymentSchemas import ProcessPaymentSchema
from services.payment_provider import PaymentDeclined, get_payment_provider
from services.plans import get_plan

logger = logging.getLogger(__name__)

payments_bp = Blueprint('payments', __name__)


@payments_bp.route('/api/payments', methods=['GET'])
@jwt_required()
def payment_history():
    """
    Payment history of the logged-in user
    ---
    tags:
      - Payments
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
        description: Payments, newest first
    """
    payments = (
        Payment.query
        .filter_by(user_id=current_user_id())
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )
    return jsonify([payment.to_dict() for payment in payments]), 200


@payments_bp.route('/api/payments/process', methods=['POST'])
@jwt_required()
def process_payment():
    """
    Process a payment through the configured provider
    ---
    tags:
      - Payments
    security:
      - Bearer: []
    description: >
      The default provider is a mock: it always succeeds after a short delay,
      except for the decline test card 4000000000000002.
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
          properties:
            amount:
              type: number
              example: 299
            planId:
              type: string
              enum: [1month, 3months, 1year]
            paymentMethod:
              type: string
              enum: [card, bank, wallet, googlepay, applepay]
            card:
              type: object
              properties:
                number:
                  type: string
                  example: "4111111111111111"
    responses:
      200:
        description: Payment processed successfully
      402:
        description: Payment declined
    """
    user = current_user()
    data = ProcessPaymentSchema.model_validate(request.get_json(silent=True) or {})
    provider = get_payment_provider(current_app)
    currency = current_app.config["PAYMENT_CURRENCY"]

    amount = data.amount
    if amount is None:
        plan = get_plan(data.plan_id)
        amount = plan["price"] if plan else 0

    card = data.card.model_dump() if data.card else None

    try:
        result = provider.charge(amount, currency, data.payment_method, card=card,
                                 metadata={"userId": user.id, "planId": data.plan_id})
    except PaymentDeclined as e:
        db.session.add(Payment(
            user_id=user.id,
            transaction_id=e.transaction_id,
            amount=amount,
            currency=currency,
            status="failed",
            method=data.payment_method,
            plan=data.plan_id
        ))
        db.session.commit()
        logger.info("Payment %s declined for user %s", e.transaction_id, user.id)
        return jsonify({"error": str(e), "transactionId": e.transaction_id}), 402

    payment = Payment(
        user_id=user.id,
        transaction_id=result["transaction_id"],
        amount=result["amount"],
        currency=result["currency"],
        status=result["status"],
        method=data.payment_method,
        plan=data.plan_id
    )
    db.session.add(payment)
    db.session.commit()

    logger.info("Payment %s processed for user %s", payment.transaction_id, user.id)

    return jsonify({
        "message": "Payment processed successfully",
        "payment": payment.to_dict(),
        "isMock": provider.is_mock
    }), 200


@payments_bp.route('/api/payments/methods', methods=['GET'])
def payment_methods():
    return jsonify({"data": get_payment_provider(current_app).methods()}), 200


@payments_bp.route('/api/payments/webhook', methods=['POST'])
def payment_webhook():
    # Acknowledge only; the mock provider sends no events.
    return "Webhook received", 200
