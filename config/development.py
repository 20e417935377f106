import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "lifeskill_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

# School onboarding
DEFAULT_SCHOOL_PASSWORD = os.getenv("DEFAULT_SCHOOL_PASSWORD", "admin@123")
SCHOOL_ID_MAX_ATTEMPTS = int(os.getenv("SCHOOL_ID_MAX_ATTEMPTS", "5"))
BULK_UPLOAD_WORKERS = int(os.getenv("BULK_UPLOAD_WORKERS", "4"))

# Push notifications: Firebase service-account JSON; left empty, messages are only logged.
FCM_CREDENTIALS_FILE = os.getenv("FCM_CREDENTIALS_FILE", "")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
