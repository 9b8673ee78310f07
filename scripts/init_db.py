from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.church_attendance.church_attendance.database.bootstrap import apply_schema, list_tables
from src.church_attendance.church_attendance.database.connection import DBConfig

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")
    target = DBConfig.from_dict(settings.DB_CONFIG)

    apply_schema(target, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(target)
    logger.info("OK: Applied schema.sql -> %s (tables=%d)", target.describe(), len(tables))


if __name__ == "__main__":
    main()
