import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rfid_attendance_test"),
}

# Tests run against the in-process repositories
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

GRACE_PERIOD_MINUTES = 15

SCHOOL_TIMEZONE = ""

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
