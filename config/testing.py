import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "church_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SERVICE_ROLE_KEY = "test-service-role-key"

LOGIN_PLACEHOLDER_DOMAIN = "example.com"
SIGNIN_MAX_ATTEMPTS = 3
SIGNIN_COOLDOWN_SECONDS = 60
SIGNIN_WINDOW_SECONDS = 300
SESSION_DAYS = 7

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
