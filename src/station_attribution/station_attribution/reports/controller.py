from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..backfill.detector import summarize_missing
from ..common.datetime_utils import parse_report_datetime
from ..common.validators import optional_id, parse_page
from ..core.enums import ItemStatus
from ..core.exceptions import (
    DomainError,
    DuplicateAttribution,
    EmployeeInvalid,
    ItemNotFound,
    QueryTimeout,
    ValidationError,
)
from ..events.model import EventFilter
from ..items.model import ItemFilter

logger = logging.getLogger(__name__)

TIMEOUT_SUGGESTIONS = [
    "Narrow the date range",
    "Filter by a single station or employee",
    "Retry in a moment; the event store may be busy",
]


def _error_status(e: DomainError) -> int:
    if isinstance(e, (ValidationError, EmployeeInvalid)):
        return 400
    if isinstance(e, ItemNotFound):
        return 404
    if isinstance(e, DuplicateAttribution):
        return 409
    if isinstance(e, QueryTimeout):
        return 408
    return 500


def _date_range(args) -> tuple:
    date_from = parse_report_datetime(args.get("dateFrom") or args.get("startDate"), "dateFrom")
    date_to = parse_report_datetime(args.get("dateTo") or args.get("endDate"), "dateTo", end_of_day=True)
    if date_from and date_to and date_from > date_to:
        raise ValidationError("dateFrom must not be after dateTo")
    return date_from, date_to


def _event_filter(args) -> EventFilter:
    date_from, date_to = _date_range(args)
    return EventFilter(
        date_from=date_from,
        date_to=date_to,
        station_id=optional_id(args.get("stationId")),
        employee_id=optional_id(args.get("employeeId")),
    )


def _item_filter(args) -> ItemFilter:
    date_from, date_to = _date_range(args)
    raw_status = optional_id(args.get("itemStatus"))
    status = None
    if raw_status:
        try:
            status = ItemStatus(raw_status.upper())
        except ValueError:
            raise ValidationError(f"Unknown item status {raw_status!r}")
    return ItemFilter(date_from=date_from, date_to=date_to, status=status)


def register(app: Flask, container) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = _error_status(e)
        payload = {"success": False, "error": str(e), "retryable": e.retryable}
        if isinstance(e, QueryTimeout):
            payload["suggestions"] = TIMEOUT_SUGGESTIONS
        if status == 500:
            logger.error(f"{type(e).__name__}: {e}")
        return jsonify(payload), status

    @app.route("/api/reports/productivity", methods=["GET"], endpoint="productivity_report")
    def productivity_report():
        report = container.productivity_service.compute_productivity(_event_filter(request.args))
        return jsonify({"success": True, **report.to_dict()})

    @app.route("/api/reports/employee-items", methods=["GET"], endpoint="employee_items_report")
    def employee_items_report():
        page, limit = parse_page(request.args.get("page"), request.args.get("limit"))
        event_filter = _event_filter(request.args)
        result = container.productivity_service.compute_items_for_employee(
            request.args.get("employeeId") or "",
            event_filter,
            page=page,
            limit=limit,
        )
        return jsonify({"success": True, **result.to_dict()})

    @app.route("/api/reports/missing-attribution", methods=["GET"], endpoint="missing_attribution_report")
    def missing_attribution_report():
        items = container.backfill_service.detect_missing_attribution(
            target_station_id=optional_id(request.args.get("stationId")),
            item_filter=_item_filter(request.args),
        )
        return jsonify({"success": True, "data": [m.to_dict() for m in items], "summary": summarize_missing(items)})

    @app.route("/api/reports/attribute", methods=["POST"], endpoint="attribute_item")
    def attribute_item():
        body = request.get_json(silent=True) or {}
        event = container.backfill_service.backfill_attribution(
            item_id=body.get("orderItemId") or body.get("itemId") or "",
            employee_id=body.get("employeeId") or "",
            actor_id=body.get("actorId") or "",
            target_station_id=optional_id(body.get("stationId")),
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Attribution recorded",
                    "data": {
                        "event_id": event.event_id,
                        "item_id": event.item_id,
                        "station_id": event.station_id,
                        "employee_id": event.employee_id,
                        "start_time": event.start_time.isoformat(),
                        "end_time": event.end_time.isoformat() if event.end_time else None,
                        "duration_seconds": event.duration_seconds,
                        "note": event.note,
                    },
                }
            ),
            201,
        )
