"""Example: call the report services directly (no Flask).

Controllers are a thin layer; everything below is what the HTTP endpoints do.
"""

import importlib
from datetime import datetime, timedelta

from config import get_settings_module

from src.station_attribution.station_attribution.container import build_container
from src.station_attribution.station_attribution.core.settings import EngineSettings
from src.station_attribution.station_attribution.events.model import EventFilter


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=EngineSettings.from_module(settings))

    week_ago = datetime.now() - timedelta(days=7)
    report = container.productivity_service.compute_productivity(EventFilter(date_from=week_ago))
    print(report.to_dict())

    missing = container.backfill_service.detect_missing_attribution()
    for m in missing[:5]:
        print(m.item.item_id, m.current_station_name, m.current_employee_name)


if __name__ == "__main__":
    main()
