from core.imports import Blueprint, jsonify, request, jwt_required, datetime, timezone, logging
from core.extensions import db
from core.security import current_user
from schemas.userSchemas import UpdateProfileSchema

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__)


@users_bp.route('/api/users/profile', methods=['GET'])
@jwt_required()
def get_profile():
    """
    Get the authenticated user's profile
    ---
    tags:
      - User
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
        description: Profile of the current user
      404:
        description: User not found
    """
    return jsonify(current_user().to_dict()), 200


@users_bp.route('/api/users/profile', methods=['PUT'])
@jwt_required()
def update_profile():
    """
    Update the authenticated user's profile
    ---
    tags:
      - User
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
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            fullname:
              type: string
              example: Jana Svobodová
            phone:
              type: string
              example: "+420 777 123 456"
            address:
              type: string
              example: "Korunní 8, Praha 2"
    responses:
      200:
        description: Profile updated successfully
      400:
        description: Validation error
      404:
        description: User not found
    """
    user = current_user()
    data = UpdateProfileSchema.model_validate(request.get_json(silent=True) or {})

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(user, field, value)

    db.session.commit()

    return jsonify({
        "message": "Profile updated successfully",
        "user": user.to_dict()
    }), 200


@users_bp.route('/api/users/profile', methods=['DELETE'])
@jwt_required()
def delete_profile():
    """
    Delete the account and everything it owns (right to be forgotten)
    ---
    tags:
      - User
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
        description: Account deleted with its orders, subscriptions and payments
      404:
        description: User not found
    """
    user = current_user()
    user_id = user.id

    db.session.delete(user)
    db.session.commit()

    logger.info("Deleted user %s", user_id)

    return jsonify({
        "message": "Account deleted successfully",
        "deletedAt": datetime.now(timezone.utc).isoformat()
    }), 200


@users_bp.route('/api/users/data', methods=['GET'])
@jwt_required()
def export_data():
    """
    Export every record owned by the authenticated user
    ---
    tags:
      - User
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
        description: User, orders with items, subscriptions and payments
      404:
        description: User not found
    """
    user = current_user()

    return jsonify({
        "user": user.to_dict(),
        "orders": [order.to_dict() for order in user.orders],
        "subscriptions": [sub.to_dict() for sub in user.subscriptions],
        "payments": [payment.to_dict() for payment in user.payments],
        "exportedAt": datetime.now(timezone.utc).isoformat()
    }), 200
