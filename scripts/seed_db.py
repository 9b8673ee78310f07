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

from src.church_attendance.church_attendance.database.bootstrap import apply_seed_sql, ensure_demo_admin
from src.church_attendance.church_attendance.database.connection import DBConfig

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")
    target = DBConfig.from_dict(settings.DB_CONFIG)

    apply_seed_sql(target, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_admin(
        target,
        placeholder_domain=getattr(settings, "LOGIN_PLACEHOLDER_DOMAIN", "example.com"),
    )
    logger.info("OK: Seeded database -> %s", target.describe())


if __name__ == "__main__":
    main()
