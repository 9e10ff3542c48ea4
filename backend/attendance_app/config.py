import os
from datetime import timedelta
from dotenv import load_dotenv


load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


def _split_origins(value):
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    SECRET_KEY = os.getenv("JWT_SECRET_KEY", "changeme")  # used for both Flask and JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "changeme")
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        "sqlite:///" + os.path.join(BASE_DIR, "attendance.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = True
    CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS", "http://localhost:3000"))
    FLASK_ENV = os.getenv("FLASK_ENV", "development")

    # Students stay signed in for a week.
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_COOKIE_SECURE = os.getenv("JWT_COOKIE_SECURE", "true").lower() in ("true", "1", "yes")
    JWT_COOKIE_SAMESITE = "Lax"
    JWT_COOKIE_CSRF_PROTECT = False

    CURRICULUM_XLSX_PATH = os.getenv(
        "CURRICULUM_XLSX_PATH",
        os.path.join(BASE_DIR, "data", "curriculum.xlsx")
    )
    CURRICULUM_SHEET = os.getenv("CURRICULUM_SHEET", 0)
    AUDIT_LOG_FILE = os.getenv("AUDIT_LOG_FILE", os.path.join("logs", "audit.log"))

    ADMIN_TEACHER_USERNAME = os.getenv("ADMIN_TEACHER_USERNAME", "Totoadmin")
    ADMIN_TEACHER_PASSWORD = os.getenv("ADMIN_TEACHER_PASSWORD")
    ADMIN_TEACHER_LEVEL = os.getenv("ADMIN_TEACHER_LEVEL", "ม.6")
    ADMIN_TEACHER_ROOM = os.getenv("ADMIN_TEACHER_ROOM", "6/2")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    SECRET_KEY = JWT_SECRET_KEY
    RATELIMIT_ENABLED = False
    JWT_COOKIE_SECURE = False
    CURRICULUM_XLSX_PATH = None
    AUDIT_LOG_FILE = None
    ADMIN_TEACHER_PASSWORD = None
