from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hostel_system.hostel_system.database.bootstrap import DEMO_USERS, ensure_demo_data

logger = logging.getLogger("scripts.seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_data(db_config)

    logger.info("seeded %s@%s/%s", db_config.get("user"), db_config.get("host"), db_config.get("database"))
    for _, email, password, role, _ in DEMO_USERS:
        logger.info("  %s: %s / %s", role, email, password)
    logger.info("  Block A, Room 101")


if __name__ == "__main__":
    main()
