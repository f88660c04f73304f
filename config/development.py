import os

from config.config import DB_CONFIG, Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = dict(DB_CONFIG)

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

HOLIDAYS_FILE = Config.HOLIDAYS_FILE
CLOCKOUT_POLICY = Config.CLOCKOUT_POLICY
MEAL_ALLOWANCE_AMOUNT = Config.MEAL_ALLOWANCE_AMOUNT
API_BASE_URL = Config.API_BASE_URL

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
