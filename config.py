import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./referral_iam.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Development sessions are never honoured unless DEV_MODE is on
    DEV_MODE = bool(data.get("DEV_MODE", False))
    DEV_SESSION_SECRET = data.get("DEV_SESSION_SECRET", "dev-secret-key-change-in-production")
    DEV_SESSION_TTL_HOURS = data.get("DEV_SESSION_TTL_HOURS", 24)
    DEV_SESSION_COOKIE_NAME = data.get("DEV_SESSION_COOKIE_NAME", "dev_session")

    SESSION_TTL_DAYS = data.get("SESSION_TTL_DAYS", 30)
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session_token")

    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:3000")
    INVITE_TTL_DAYS = data.get("INVITE_TTL_DAYS", 7)
    MAGIC_LINK_TTL_MINUTES = data.get("MAGIC_LINK_TTL_MINUTES", 15)
    MAGIC_LINK_MAX_ACTIVE = data.get("MAGIC_LINK_MAX_ACTIVE", 3)

    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "log")  # smtp | log
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@localhost")
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
