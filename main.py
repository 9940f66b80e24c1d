from core.imports import jsonify, Flask, datetime, timezone, logging
from core.config import Config
from core.extensions import db, jwt, swagger, cors, bcrypt, migrate
from core.errors import register_error_handlers
from core.security import check_jwt_secret
from routes.auth import auth_bp, seed_demo_buyer, seed_demo_farmer
from routes.users import users_bp
from routes.orders import orders_bp
from routes.subscriptions import subscriptions_bp
from routes.payments import payments_bp
from routes.marketplace import marketplace_bp

logger = logging.getLogger(__name__)


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    check_jwt_secret(app)

    db.init_app(app)
    jwt.init_app(app)
    swagger.init_app(app)
    cors.init_app(app, origins=[app.config["FRONTEND_URL"]], supports_credentials=True)
    bcrypt.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(subscriptions_bp)
    app.register_blueprint(payments_bp)
    app.register_blueprint(marketplace_bp)

    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": app.config["ENV_NAME"],
            "timezone": app.config["TIMEZONE"]
        }), 200

    return app


if __name__ == "__main__":
    app = create_app()

    with app.app_context():
        db.create_all()

        seed_demo_buyer()
        seed_demo_farmer()

    port = app.config["PORT"]
    logger.info("Server running on port %s (env=%s, timezone=%s)",
                port, app.config["ENV_NAME"], app.config["TIMEZONE"])
    app.run(port=port, debug=app.config["ENV_NAME"] == "development")
