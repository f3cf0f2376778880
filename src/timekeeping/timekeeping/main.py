from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def load_settings(settings_module: Optional[str] = None, *, env: Optional[str] = None):
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module(env))


def create_container(settings_module: Optional[str] = None, *, env: Optional[str] = None) -> Container:
    settings = load_settings(settings_module, env=env)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(getattr(settings, "DB_CONFIG"))
    if getattr(settings, "DEBUG", False):
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__, db_config.get("user"), db_config.get("host"),
            db_config.get("port", 3306), db_config.get("database"),
        )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=SCHEMA_PATH)

    return build_container(
        db_config=db_config,
        late_start_hour=int(getattr(settings, "LATE_START_HOUR", 8)),
        late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 15)),
        default_page_limit=int(getattr(settings, "DEFAULT_PAGE_LIMIT", 10)),
    )
