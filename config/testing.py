import os

from werkzeug.security import generate_password_hash

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "intern_portal_test"),
}

API_TOKEN = "test-token"

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD_HASH = generate_password_hash("test-password")

APPLICATION_ID_PREFIX = "INT"

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads-test")
MAX_RESUME_BYTES = 1024 * 1024
SIGNED_URL_MAX_AGE = 3600

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
