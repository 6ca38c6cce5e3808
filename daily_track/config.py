import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///daily_track.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
    JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", 168))
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:8081")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", default=True)
    API_VERSION = "1.0.0"


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret"
    JWT_EXPIRATION_HOURS = 1
    LOG_LEVEL = "WARNING"
    AUTO_CREATE_TABLES = True
