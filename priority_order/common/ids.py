"""Run identifier helpers."""

from __future__ import annotations

from datetime import datetime, timezone

RUN_ID_PREFIX = "order"


def generate_run_id(prefix: str = RUN_ID_PREFIX) -> str:
    """Sortable id for one CLI invocation, e.g. ``order-20261019T120000123456Z``."""
    stamp = datetime.now(tz=timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    return f"{prefix}-{stamp}"
