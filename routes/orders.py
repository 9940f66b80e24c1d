from core.imports import Blueprint, jwt_required, jsonify, request, current_app, logging
from core.extensions import db
from core.errors import NotFound, Conflict
from core.security import current_user, current_user_id
from models.orderModels import Order, OrderItem
from schemas.orderSchemas import CreateOrderSchema
from services.catalog import product_manager

logger = logging.getLogger(__name__)

orders_bp = Blueprint('orders', __name__)


def _catalog_price(product_id):
    try:
        product = product_manager.get_by_id(int(product_id))
    except ValueError:
        return None
    return product["priceSubscription"] if product else None


def _owned_order(order_id):
    order = Order.query.filter_by(id=order_id, user_id=current_user_id()).first()
    if not order:
        raise NotFound("Order not found")
    return order


@orders_bp.route('/api/orders', methods=['GET'])
@jwt_required()
def list_orders():
    """
    Get all orders of the logged-in user
    ---
    tags:
      - Orders
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
        description: Orders with their items, newest first
    """
    orders = (
        Order.query
        .filter_by(user_id=current_user_id())
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )
    return jsonify([order.to_dict() for order in orders]), 200


@orders_bp.route('/api/orders/<int:order_id>', methods=['GET'])
@jwt_required()
def get_order(order_id):
    """
    Get Order Details
    ---
    tags:
      - Orders
    summary: Retrieve a specific order by ID
    description: Returns the order only when it belongs to the authenticated user.
    parameters:
      - name: order_id
        in: path
        required: true
        type: integer
        example: 1
    responses:
      200:
        description: Order details
      404:
        description: Order not found
    """
    return jsonify(_owned_order(order_id).to_dict()), 200


@orders_bp.route('/api/orders', methods=['POST'])
@jwt_required()
def create_order():
    """
    Create a new order for the logged-in user
    ---
    tags:
      - Orders
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
            - items
            - deliveryDate
          properties:
            items:
              type: array
              items:
                type: object
                properties:
                  productId:
                    type: string
                    example: "3"
                  name:
                    type: string
                    example: "Cherry tomatoes"
                  quantity:
                    type: integer
                    example: 2
                  price:
                    type: number
                    example: 74
                  total:
                    type: number
                    example: 148
            deliveryDate:
              type: string
              example: "2026-10-23"
            address:
              type: string
              example: "Vinohradská 12, Praha 2"
    responses:
      201:
        description: Order created successfully
      400:
        description: Validation error
    """
    user = current_user()
    data = CreateOrderSchema.model_validate(request.get_json(silent=True) or {})
    recompute = current_app.config.get("RECOMPUTE_ORDER_TOTALS", False)

    order = Order(
        user_id=user.id,
        total=0,
        delivery_date=data.delivery_date,
        address=data.address or user.address,
        status="pending"
    )

    total = 0
    for item in data.items:
        price, line_total = item.price, item.total
        if recompute:
            catalog_price = _catalog_price(item.product_id)
            if catalog_price is not None:
                price, line_total = catalog_price, catalog_price * item.quantity

        order.items.append(OrderItem(
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            price=price,
            total=line_total
        ))
        total += line_total

    order.total = total
    db.session.add(order)
    db.session.commit()

    logger.info("Order %s created for user %s (total=%s)", order.id, user.id, total)

    return jsonify({
        "message": "Order created successfully",
        "order": order.to_dict()
    }), 201


@orders_bp.route('/api/orders/<int:order_id>/cancel', methods=['POST'])
@jwt_required()
def cancel_order(order_id):
    order = _owned_order(order_id)

    if order.status != "pending":
        raise Conflict(f"Order is {order.status} and can no longer be cancelled")

    order.status = "cancelled"
    db.session.commit()

    return jsonify({
        "message": "Order cancelled",
        "order": order.to_dict()
    }), 200
