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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Notification rules
    NOTIFICATION_EXPIRING_SOON_DAYS = data.get("NOTIFICATION_EXPIRING_SOON_DAYS", 7)
    NOTIFICATION_EXPIRED_WINDOW_DAYS = data.get("NOTIFICATION_EXPIRED_WINDOW_DAYS", None)  # None = unbounded
    NOTIFICATION_DATE_FORMAT = data.get("NOTIFICATION_DATE_FORMAT", "%m/%d/%Y")

    # Notification sync worker
    NOTIFICATION_SYNC_ENABLED = bool(data.get("NOTIFICATION_SYNC_ENABLED", True))
    NOTIFICATION_SYNC_INTERVAL_SECONDS = data.get("NOTIFICATION_SYNC_INTERVAL_SECONDS", 3600)  # Hourly
