import os

from werkzeug.security import generate_password_hash

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "intern_portal"),
}

# Bearer token every admin/API client must send
API_TOKEN = os.getenv("API_TOKEN", "dev-api-token")

# Fixed admin identity, loaded once at startup
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH") or generate_password_hash(
    os.getenv("ADMIN_PASSWORD", "admin123")
)

APPLICATION_ID_PREFIX = os.getenv("APPLICATION_ID_PREFIX", "INT")

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
MAX_RESUME_BYTES = int(os.getenv("MAX_RESUME_BYTES", str(10 * 1024 * 1024)))
SIGNED_URL_MAX_AGE = int(os.getenv("SIGNED_URL_MAX_AGE", str(365 * 24 * 3600)))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
