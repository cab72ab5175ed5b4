from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, TypeVar

from ..core.exceptions import QueryTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_budget(fn: Callable[[], T], *, budget_seconds: float, label: str = "query") -> T:
    """Run ``fn`` in a worker thread and give up after ``budget_seconds``.

    The worker is not interrupted on expiry; its result is simply discarded.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="event-fetch")
    future = executor.submit(fn)
    try:
        return future.result(timeout=budget_seconds)
    except FutureTimeout:
        logger.warning(f"{label} exceeded time budget of {budget_seconds:g}s")
        raise QueryTimeout(budget_seconds)
    finally:
        executor.shutdown(wait=False)
