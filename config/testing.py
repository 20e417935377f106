import os
import tempfile

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "lifeskill_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(tempfile.gettempdir(), "lifeskill-admin-uploads"))

DEFAULT_SCHOOL_PASSWORD = "admin@123"
SCHOOL_ID_MAX_ATTEMPTS = 5
BULK_UPLOAD_WORKERS = 2

FCM_CREDENTIALS_FILE = ""

AUTO_INIT_DB = False
AUTO_SEED_DB = False
