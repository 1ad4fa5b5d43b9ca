"""Application state kept up to date by watching the node."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from .accounts import Account, accounts_from_state
from .api import ApiError, HttpClient, ParticipationKey, _status_line
from .block import get_block_metrics
from .clock import Clock
from .metrics import MetricsModel, get_metrics
from .participation import get_part_keys
from .status import State, StatusModel

Callback = Callable[[Optional["StateModel"], Optional[Exception]], None]


@dataclass
class StateModel:
    """Status, metrics, accounts and keys of the watched node."""

    status: StatusModel = field(default_factory=StatusModel)
    metrics: MetricsModel = field(default_factory=MetricsModel)
    accounts: Dict[str, Account] = field(default_factory=dict)
    participation_keys: Optional[List[ParticipationKey]] = None
    admin: bool = False
    watching: bool = False
    client: Any = None
    http: Any = None
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)

    def _wait_after_error(self, error: Exception, callback: Callback) -> None:
        self.status.state = "DOWN"
        callback(None, error)
        self.sleep(3)

    def _fetch_status(self, client: Any, callback: Callback) -> None:
        try:
            self.status.fetch(client, self.http or HttpClient())
        except Exception as error:
            callback(None, error)

    def watch(self, callback: Callback, client: Any) -> None:
        """Follow new rounds until :meth:`stop` is called."""
        self.watching = True
        if self.metrics.window == 0:
            self.metrics.window = 100

        self._fetch_status(client, callback)
        last_round = self.status.last_round

        while self.watching:
            if self.status.state == State.FAST_CATCHUP:
                self.sleep(10)
                self._fetch_status(client, callback)
                continue

            try:
                response = client.wait_for_block(int(last_round))
            except Exception as error:
                self._wait_after_error(error, callback)
                continue
            if response.status_code != 200:
                self._wait_after_error(
                    ApiError(_status_line(response), response.status_code), callback
                )
                continue

            data = response.json()
            self.status.state = "Unknown"
            self.status.update(
                data["last-round"],
                data.get("catchup-time", 0),
                data.get("catchpoint"),
                data.get("upgrade-node-vote"),
            )
            self.update_keys()

            if self.status.state == State.SYNCING:
                last_round = self.status.last_round
                callback(self, None)
                continue

            if self.status.last_round % 5 == 0 or (
                self.status.last_round > 100 and self.metrics.round_time == timedelta(0)
            ):
                try:
                    block_metrics = get_block_metrics(
                        client, self.status.last_round, self.metrics.window
                    )
                except Exception as error:
                    self._wait_after_error(error, callback)
                    continue
                self.metrics.round_time = block_metrics.avg_time
                self.metrics.tps = block_metrics.tps
                self.update_metrics_from_rpc(client)

            last_round = self.status.last_round
            callback(self, None)

    def stop(self) -> None:
        """Ask the watch loop to finish."""
        self.watching = False

    def update_metrics_from_rpc(self, client: Any) -> None:
        """Refresh the network RX/TX rates from the metrics endpoint."""
        try:
            values = get_metrics(client)
        except Exception:
            self.metrics.enabled = False
            return
        self.metrics.enabled = True
        now = datetime.now(timezone.utc)
        seconds = (now - self.metrics.last_ts).total_seconds()
        sent = values.get("algod_network_sent_bytes_total", 0)
        received = values.get("algod_network_received_bytes_total", 0)
        if seconds > 0:
            self.metrics.tx = max(0, int((sent - self.metrics.last_tx) / seconds))
            self.metrics.rx = max(0, int((received - self.metrics.last_rx) / seconds))
        else:
            self.metrics.tx = 0
            self.metrics.rx = 0
        self.metrics.last_ts = now
        self.metrics.last_tx = sent
        self.metrics.last_rx = received

    def update_accounts(self) -> None:
        """Rebuild the account map from the current keys."""
        self.accounts = accounts_from_state(self, Clock(), self.client)

    def update_keys(self) -> None:
        """Reload participation keys; failure means no admin access."""
        try:
            self.participation_keys = get_part_keys(self.client)
        except Exception:
            self.participation_keys = None
            self.admin = False
            return
        self.admin = True
        try:
            self.update_accounts()
        except Exception:
            pass