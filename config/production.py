import os

from config.config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = dict(DB_CONFIG)

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

HOLIDAYS_FILE = Config.HOLIDAYS_FILE
CLOCKOUT_POLICY = Config.CLOCKOUT_POLICY
MEAL_ALLOWANCE_AMOUNT = Config.MEAL_ALLOWANCE_AMOUNT
API_BASE_URL = Config.API_BASE_URL

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
