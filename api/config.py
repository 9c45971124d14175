"""
Environment-aware configuration.
Values are read from the environment (and .env) once, at import time.
create_app() turns the auth-related keys into an AuthSettings instance.
"""
import os
from dotenv import load_dotenv

load_dotenv()  # Read .env if present


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///tenant-auth.db")
    SQLALCHEMY_ECHO = _env_bool("SQLALCHEMY_ECHO")

    # jwt / session configuration
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES_IN = os.getenv("ACCESS_TOKEN_EXPIRES_IN", "15m")
    REFRESH_TOKEN_EXPIRES_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "30"))

    # argon2 time_cost and memory_cost (KiB)
    PASSWORD_HASH_COST = int(os.getenv("PASSWORD_HASH_COST", "10"))
    PASSWORD_HASH_MEMORY_COST = int(os.getenv("PASSWORD_HASH_MEMORY_COST", "65536"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    DATABASE_URL = "sqlite://"
    SQLALCHEMY_ECHO = False
    JWT_SECRET = "testing-secret-key-that-is-long-enough-for-hs256"
    ACCESS_TOKEN_EXPIRES_IN = "15m"
    REFRESH_TOKEN_EXPIRES_DAYS = 30
    PASSWORD_HASH_COST = 1
    PASSWORD_HASH_MEMORY_COST = 64


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/testing).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
