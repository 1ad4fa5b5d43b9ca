"""Node status tracking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .api import ApiError, _status_line
from .github import get_go_algorand_release


class State(str, Enum):
    """Synchronisation state of the node."""

    FAST_CATCHUP = "FAST-CATCHUP"
    SYNCING = "SYNCING"
    STABLE = "RUNNING"

    def __str__(self) -> str:
        return self.value


@dataclass
class StatusModel:
    """Status of the node as reported by algod."""

    state: str = ""
    version: str = ""
    network: str = ""
    voting: bool = False
    needs_update: bool = False
    last_round: int = 0

    def __str__(self) -> str:
        return f"\nLastRound: {self.last_round}\n"

    def update(
        self,
        last_round: int,
        catchup_time: int,
        catchpoint: Optional[str],
        upgrade_node_vote: Optional[bool],
    ) -> None:
        """Apply a status response to the model."""
        self.last_round = int(last_round)
        if catchup_time > 0:
            self.state = State.FAST_CATCHUP if catchpoint else State.SYNCING
        else:
            self.state = State.STABLE
        if upgrade_node_vote is not None:
            self.voting = upgrade_node_vote

    def fetch(self, client: Any, http: Any) -> None:
        """Refresh version information (once) and the current status."""
        if self.version in ("", "N/A"):
            response = client.get_version()
            if response.status_code != 200:
                raise ApiError(
                    f"Status code {response.status_code}: {_status_line(response)}",
                    response.status_code,
                )
            info = response.json()
            build = info["build"]
            self.network = info["genesis_id"]
            self.version = (
                f"v{build['major']}.{build['minor']}.{build['build_number']}-{build['channel']}"
            )
            release = get_go_algorand_release(build["channel"], http)
            self.needs_update = release is not None and self.version != release

        response = client.get_status()
        if response.status_code != 200:
            raise ApiError(
                f"Status code {response.status_code}: {_status_line(response)}",
                response.status_code,
            )
        data = response.json()
        self.update(
            data["last-round"],
            data.get("catchup-time", 0),
            data.get("catchpoint"),
            data.get("upgrade-node-vote"),
        )