from core.imports import create_access_token, get_jwt_identity, logging
from core.extensions import db, bcrypt
from core.errors import NotFound
from models.userModel import User

logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode("utf-8")


def verify_password(password, hashed):
    return bcrypt.check_password_hash(hashed, password)


def issue_token(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={"email": user.email, "role": user.role}
    )


def current_user_id():
    return int(get_jwt_identity())


def current_user():
    """User behind the verified token; 404 when it was deleted after issuance."""
    user = db.session.get(User, current_user_id())
    if not user:
        raise NotFound("User not found")
    return user


def check_jwt_secret(app):
    secret = app.config.get("JWT_SECRET_KEY")
    min_length = app.config.get("JWT_MIN_SECRET_LENGTH", 32)
    if not secret or len(secret) < min_length:
        logger.critical("JWT_SECRET must be set and at least %d characters long", min_length)
        raise SystemExit(1)
