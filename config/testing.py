import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "site_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

HOLIDAYS_FILE = ""
CLOCKOUT_POLICY = "auto"
MEAL_ALLOWANCE_AMOUNT = 5.0
API_BASE_URL = "http://testserver"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
