"""Prometheus-style metrics from the algod ``/metrics`` endpoint."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from .api import ApiError

_ROW = re.compile(r"(?m)^[^#].*")
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class MetricsModel:
    """Network and block metrics tracked while watching the node."""

    enabled: bool = False
    window: int = 0
    round_time: timedelta = timedelta(0)
    tps: float = 0.0
    rx: int = 0
    tx: int = 0
    last_ts: datetime = field(default_factory=lambda: datetime.min.replace(tzinfo=timezone.utc))
    last_rx: int = 0
    last_tx: int = 0


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer value {text!r}")
    return int(text)


def parse_metrics_content(content: str) -> Dict[str, int]:
    """Parse metrics text into a mapping of metric name to integer value."""
    if not content.startswith("#"):
        raise ValueError("invalid metrics content")
    result: Dict[str, int] = {}
    for row in _ROW.findall(content):
        parts = row.split(" ")
        if len(parts) < 2:
            raise ValueError(f"invalid metrics row {row!r}")
        result[parts[0]] = _parse_int(parts[1])
    return result


def get_metrics(client: Any) -> Dict[str, int]:
    """Fetch and parse the node's metrics."""
    response = client.metrics()
    if response.status_code != 200:
        raise ApiError("invalid status code", response.status_code)
    return parse_metrics_content(response.text)