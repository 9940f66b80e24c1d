from datetime import timedelta
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default="false"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    ENV_NAME = os.environ.get("APP_ENV") or os.environ.get("NODE_ENV", "development")
    PORT = int(os.environ.get("PORT", 3000))
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")
    TIMEZONE = os.environ.get("TZ", "Europe/Prague")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    #SQLALCHEMY_DATABASE_URI = "postgresql://localhost/biomarket"
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///biomarket.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET")
    JWT_MIN_SECRET_LENGTH = 32
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_TOKEN_LOCATION = ["headers"]

    PAYMENT_CURRENCY = "CZK"
    PAYMENT_DELAY_SECONDS = float(os.environ.get("PAYMENT_DELAY_SECONDS", 2.0))
    RECOMPUTE_ORDER_TOTALS = _env_flag("RECOMPUTE_ORDER_TOTALS")

    SWAGGER = {
        "title": "BioMarket API",
        "uiversion": 3,
        "securityDefinitions": {
            "Bearer": {"type": "apiKey", "name": "Authorization", "in": "header"}
        },
    }
