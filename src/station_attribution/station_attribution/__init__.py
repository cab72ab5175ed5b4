"""Station Attribution package.

Turns raw per-station scan events into per-employee productivity metrics and
detects/backfills forgotten scans. Organized by feature modules (events,
attribution, metrics, backfill, ...) with a thin Flask controller layer on top
of service/repository layers.
"""
