import os
from datetime import timedelta
from decimal import Decimal
from urllib.parse import quote_plus

BASEDIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _database_uri():
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    db_user = os.getenv("DB_USER")
    if not db_user:
        return "sqlite:///" + os.path.join(BASEDIR, "storefront.db")

    db_password = quote_plus(os.getenv("DB_PASSWORD", ""))
    return (
        f"postgresql+psycopg2://{db_user}:{db_password}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}"
        f"/{os.getenv('DB_NAME', 'storefront')}"
    )


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "secret")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_ACCESS_HOURS", 12)))

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(BASEDIR, "uploads"))
    ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    BASE_URL = os.getenv("BASE_URL", "http://localhost:3000")
    KHALTI_URL = os.getenv("KHALTI_URL", "https://dev.khalti.com/api/v2")
    KHALTI_SECRET_KEY = os.getenv("KHALTI_SECRET_KEY", "")
    KHALTI_TIMEOUT = int(os.getenv("KHALTI_TIMEOUT", 10))

    SHIPPING_COUNTRY = os.getenv("SHIPPING_COUNTRY", "Nepal")
    SHIPPING_FLAT_RATE = Decimal(os.getenv("SHIPPING_FLAT_RATE", "0"))
    TAX_RATE = Decimal(os.getenv("TAX_RATE", "0"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    KHALTI_URL = "https://khalti.test/api/v2"
    KHALTI_SECRET_KEY = "test-khalti-key"
    BASE_URL = "http://shop.test"
