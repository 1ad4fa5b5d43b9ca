"""Average block time and throughput over a window of rounds."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from .api import ApiError, _status_line

_NS_PER_SECOND = 10**9


@dataclass
class BlockMetrics:
    """Average round time and transactions per second."""

    avg_time: timedelta = timedelta(0)
    tps: float = 0.0


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _fetch_block(client: Any, round_number: int) -> dict:
    response = client.get_block(round_number)
    if response.status_code != 200:
        raise ApiError(_status_line(response), response.status_code)
    return response.json().get("block") or {}


def get_block_metrics(client: Any, round_number: int, window: int) -> BlockMetrics:
    """Compare ``round_number`` with the block ``window`` rounds before it."""
    metrics = BlockMetrics()
    if round_number < window:
        return metrics

    latest = _fetch_block(client, round_number)
    earlier = _fetch_block(client, round_number - window)

    latest_ts = latest.get("ts")
    earlier_ts = earlier.get("ts")
    if latest_ts is None or earlier_ts is None:
        return metrics

    elapsed_ns = (int(latest_ts) - int(earlier_ts)) * _NS_PER_SECOND
    avg_ns = _trunc_div(elapsed_ns, window)
    metrics.avg_time = timedelta(microseconds=_trunc_div(avg_ns, 1000))

    latest_tc = latest.get("tc")
    earlier_tc = earlier.get("tc")
    whole = _trunc_div(avg_ns, _NS_PER_SECOND)
    avg_seconds = whole + (avg_ns - whole * _NS_PER_SECOND) / 1e9
    if latest_tc is not None and earlier_tc is not None and avg_seconds != 0:
        metrics.tps = (float(latest_tc) - float(earlier_tc)) / (float(window) * avg_seconds)
    return metrics