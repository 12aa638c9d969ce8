import os

from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Raised at startup when required settings are missing."""


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))

    # Simple pagination defaults
    DEFAULT_LIMIT = int(os.getenv("DEFAULT_LIMIT", "12"))
    MAX_LIMIT = int(os.getenv("MAX_LIMIT", "50"))

    # Admin auth cookie: <prefix>-<project_ref>-auth-token
    PROJECT_REF = os.getenv("PROJECT_REF", "local")
    AUTH_COOKIE_PREFIX = os.getenv("AUTH_COOKIE_PREFIX", "gst")
    AUTH_TOKEN_MIN_LENGTH = int(os.getenv("AUTH_TOKEN_MIN_LENGTH", "40"))
    AUTH_SESSION_MAX_AGE = int(os.getenv("AUTH_SESSION_MAX_AGE", str(8 * 60 * 60)))

    # Object storage for product images
    STORAGE_ROOT = os.getenv("STORAGE_ROOT", os.path.join(os.getcwd(), "storage"))
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "product-images")
    STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", "")
    MAX_IMAGE_BYTES = 5 * 1024 * 1024
    # Leave room for the other form fields around the image
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(6 * 1024 * 1024)))

    REQUIRED_SETTINGS = {
        "SECRET_KEY": "SECRET_KEY",
        "SQLALCHEMY_DATABASE_URI": "DATABASE_URL",
    }

    @classmethod
    def validate(cls) -> None:
        missing = [env for attr, env in cls.REQUIRED_SETTINGS.items() if not getattr(cls, attr, None)]
        if missing:
            raise ConfigError(
                "Missing required environment variables: "
                + ", ".join(missing)
                + ". Set them in the environment or in .env"
            )


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    PROJECT_REF = "test"
