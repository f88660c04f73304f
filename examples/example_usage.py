"""Service layer without Flask: print this month's payroll summary."""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.site_attendance.site_attendance.common.datetime_utils import now_utc
from src.site_attendance.site_attendance.container import build_container
from src.site_attendance.site_attendance.context import AppContext, AppSettings


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    context = AppContext(lambda: AppSettings.from_module(settings))
    container = build_container(db_config=settings.DB_CONFIG, context=context)

    today = now_utc().date()
    for row in container.payroll_service.monthly_summary(today.month, today.year):
        print(row.to_dict())


if __name__ == "__main__":
    main()
