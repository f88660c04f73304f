"""Shared defaults read from the environment (``.env`` is loaded by the app factory)."""

import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "site_attendance")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Empty means the packaged public holiday list.
    HOLIDAYS_FILE = os.environ.get("HOLIDAYS_FILE", "")
    # "auto": derive hours from elapsed time; "fixed": propose 8/0 and let the supervisor edit.
    CLOCKOUT_POLICY = os.environ.get("CLOCKOUT_POLICY", "auto")
    MEAL_ALLOWANCE_AMOUNT = float(os.environ.get("MEAL_ALLOWANCE_AMOUNT", "5"))

    API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:5000")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
