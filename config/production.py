import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "lifeskill_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/var/lib/lifeskill-admin/uploads")
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

DEFAULT_SCHOOL_PASSWORD = os.getenv("DEFAULT_SCHOOL_PASSWORD", "admin@123")
SCHOOL_ID_MAX_ATTEMPTS = int(os.getenv("SCHOOL_ID_MAX_ATTEMPTS", "5"))
BULK_UPLOAD_WORKERS = int(os.getenv("BULK_UPLOAD_WORKERS", "8"))

FCM_CREDENTIALS_FILE = os.getenv("FCM_CREDENTIALS_FILE", "")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
