from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.settings import EngineSettings
from .database.bootstrap import apply_schema, ensure_stations, list_tables
from .reports.controller import register as register_reports

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)
    logger.info(
        f"settings={settings_module} db={db_config.get('user')}@{db_config.get('host')}:"
        f"{db_config.get('port', 3306)}/{db_config.get('database')}"
    )

    engine_settings = EngineSettings.from_module(settings)

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        created = ensure_stations(db_config)
        logger.info(f"Schema ready (tables={len(list_tables(db_config))}, new stations={created or 'none'})")

    container = build_container(db_config=db_config, settings=engine_settings)
    logger.info(
        f"Time credit policy={container.policy.name} target station={engine_settings.target_station_name}"
    )

    register_reports(app, container)

    return app
