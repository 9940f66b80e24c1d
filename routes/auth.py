from core.imports import Blueprint, jsonify, request, jwt_required, logging
from core.extensions import db
from core.security import hash_password, verify_password, issue_token, current_user
from models.userModel import User
from schemas.userSchemas import RegisterSchema, LoginSchema

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

DEMO_PASSWORD = "password123"


def _seed_user(email, fullname, role, phone):
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(
            email=email,
            password=hash_password(DEMO_PASSWORD),
            fullname=fullname,
            role=role,
            phone=phone,
            address="Vinohradská 12, Praha 2"
        )
        db.session.add(user)
        db.session.commit()
        logger.info("Demo %s created (email=%s, password=%s)", role, email, DEMO_PASSWORD)
    else:
        logger.info("Demo %s already exists.", role)
    return user


def seed_demo_buyer():
    return _seed_user("demo@buyer.com", "Jana Nováková", "buyer", "+420 777 123 456")


def seed_demo_farmer():
    return _seed_user("demo@farmer.com", "Petr Dvořák", "farmer", "+420 777 654 321")


@auth_bp.route('/api/auth/register', methods=['POST'])
def register():
    """
    Register a new account
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - email
            - password
            - fullname
          properties:
            email:
              type: string
              example: jana@example.cz
            password:
              type: string
              example: secret123
            fullname:
              type: string
              example: Jana Nováková
            phone:
              type: string
              example: "+420 777 123 456"
            address:
              type: string
              example: "Vinohradská 12, Praha 2"
            role:
              type: string
              enum: [buyer, farmer]
    responses:
      201:
        description: Registration successful, returns the user and a bearer token
      400:
        description: Validation error
      409:
        description: User already exists
    """
    data = RegisterSchema.model_validate(request.get_json(silent=True) or {})

    if User.query.filter_by(email=data.email).first():
        return jsonify({"error": "User already exists"}), 409

    user = User(
        email=data.email,
        password=hash_password(data.password),
        fullname=data.fullname,
        role=data.role,
        phone=data.phone,
        address=data.address
    )
    db.session.add(user)
    db.session.commit()

    logger.info("Registered %s user %s", user.role, user.id)

    return jsonify({
        "message": "Registration successful",
        "user": user.to_dict(),
        "token": issue_token(user)
    }), 201


@auth_bp.route('/api/auth/login', methods=['POST'])
def login():
    data = LoginSchema.model_validate(request.get_json(silent=True) or {})

    user = User.query.filter_by(email=data.email).first()

    # Same response for unknown email and wrong password
    if not user or not verify_password(data.password, user.password):
        logger.info("Failed login attempt")
        return jsonify({"error": "Invalid credentials"}), 401

    return jsonify({
        "message": "Login successful",
        "user": user.to_dict(),
        "token": issue_token(user)
    }), 200


@auth_bp.route('/api/auth/logout', methods=['POST'])
def logout():
    # Tokens are stateless; the client drops its copy.
    return jsonify({"message": "Logout successful"}), 200


@auth_bp.route('/api/auth/me', methods=['GET'])
@jwt_required()
def me():
    """
    Get the user behind the bearer token
    ---
    tags:
      - Auth
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
        description: Current user
      401:
        description: Missing, invalid or expired token
      404:
        description: User deleted since the token was issued
    """
    return jsonify(current_user().to_dict()), 200
