import os

from werkzeug.security import generate_password_hash

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "intern_portal"),
}

API_TOKEN = os.getenv("API_TOKEN", "please-set-API_TOKEN")

# No default password in production; ADMIN_PASSWORD is hashed when no hash is given.
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH") or (
    generate_password_hash(os.environ["ADMIN_PASSWORD"]) if os.getenv("ADMIN_PASSWORD") else ""
)

APPLICATION_ID_PREFIX = os.getenv("APPLICATION_ID_PREFIX", "INT")

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/var/lib/intern-portal/uploads")
MAX_RESUME_BYTES = int(os.getenv("MAX_RESUME_BYTES", str(10 * 1024 * 1024)))
SIGNED_URL_MAX_AGE = int(os.getenv("SIGNED_URL_MAX_AGE", str(365 * 24 * 3600)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
