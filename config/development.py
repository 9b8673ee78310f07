import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "church_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Shared secret for POST /api/create-profile (X-Service-Role-Key header)
SERVICE_ROLE_KEY = os.getenv("SERVICE_ROLE_KEY")

# Accounts created without a real email log in as <username>@<domain>
LOGIN_PLACEHOLDER_DOMAIN = os.getenv("LOGIN_PLACEHOLDER_DOMAIN", "example.com")
SIGNIN_MAX_ATTEMPTS = int(os.getenv("SIGNIN_MAX_ATTEMPTS", "5"))
SIGNIN_COOLDOWN_SECONDS = int(os.getenv("SIGNIN_COOLDOWN_SECONDS", "60"))
SIGNIN_WINDOW_SECONDS = int(os.getenv("SIGNIN_WINDOW_SECONDS", "300"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo members and the demo admin on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
