from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attribution.factory import TimeCreditPolicyFactory
from .attribution.pipeline import AttributionPipeline
from .attribution.policies.base import TimeCreditPolicy
from .backfill.service import BackfillService
from .common.cache import ReportCache
from .core.settings import EngineSettings
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .events.mysql_event_repository import MySQLEventStore
from .items.mysql_item_repository import MySQLItemRepository
from .metrics.service import ProductivityService
from .stations.mysql_station_repository import MySQLStationRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    settings: EngineSettings

    stations_repo: MySQLStationRepository
    employees_repo: MySQLEmployeeRepository
    items_repo: MySQLItemRepository
    event_store: MySQLEventStore

    policy: TimeCreditPolicy
    report_cache: Optional[ReportCache]
    pipeline: AttributionPipeline
    productivity_service: ProductivityService
    backfill_service: BackfillService


def build_report_cache(settings: EngineSettings) -> Optional[ReportCache]:
    if settings.report_cache_ttl_seconds <= 0 or settings.report_cache_max_entries <= 0:
        return None
    return ReportCache(
        ttl_seconds=settings.report_cache_ttl_seconds,
        max_entries=settings.report_cache_max_entries,
    )


def build_container(*, db_config: dict, settings: Optional[EngineSettings] = None) -> Container:
    settings = settings or EngineSettings()
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connection_timeout=max(int(settings.query_timeout_seconds), 1),
    )
    conn = DatabaseConnection.get_instance(config)

    stations_repo = MySQLStationRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    items_repo = MySQLItemRepository(conn)
    event_store = MySQLEventStore(conn)

    # Unknown policy names fail here, at startup, not on the first report.
    policy = TimeCreditPolicyFactory(default_name=settings.time_credit_policy).create()
    report_cache = build_report_cache(settings)

    pipeline = AttributionPipeline(event_store, stations_repo, policy=policy, settings=settings)
    productivity_service = ProductivityService(pipeline, employees_repo, items_repo, cache=report_cache)
    backfill_service = BackfillService(
        event_store,
        stations_repo,
        employees_repo,
        items_repo,
        settings=settings,
        on_change=productivity_service.invalidate_cache,
    )

    return Container(
        conn=conn,
        settings=settings,
        stations_repo=stations_repo,
        employees_repo=employees_repo,
        items_repo=items_repo,
        event_store=event_store,
        policy=policy,
        report_cache=report_cache,
        pipeline=pipeline,
        productivity_service=productivity_service,
        backfill_service=backfill_service,
    )
