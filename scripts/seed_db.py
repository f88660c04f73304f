from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.site_attendance.site_attendance.database.bootstrap import apply_schema, apply_seed_sql
from src.site_attendance.site_attendance.database.connection import DBConfig

logger = logging.getLogger("seed_db")


def main() -> None:
    parser = argparse.ArgumentParser(description="Load the demo roster and projects.")
    parser.add_argument("--with-schema", action="store_true", help="apply schema.sql first")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")
    target = DBConfig.from_dict(settings.DB_CONFIG).describe()

    if args.with_schema:
        apply_schema(settings.DB_CONFIG, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Applied schema.sql -> %s", target)
    apply_seed_sql(settings.DB_CONFIG, seed_path=REPO_ROOT / "database" / "seed.sql")
    logger.info("Seeded demo workers and projects -> %s", target)


if __name__ == "__main__":
    main()
