"""Data models for the algod REST API and a small HTTP transport.

The algod client used throughout the package is any object exposing the
algod endpoints as methods (``get_status``, ``get_version``, ``metrics``,
``get_block``, ``get_participation_keys`` and so on).  Each method returns a
response object with ``status_code``, ``reason``, ``text`` and ``json()``,
which is exactly what :mod:`requests` responses provide.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import requests

DEFAULT_TIMEOUT = 30.0


class ApiError(Exception):
    """Raised when an HTTP endpoint answers with an unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _status_line(response: Any) -> str:
    """Render a response status the way HTTP reports it, e.g. ``404 Not Found``."""
    code = getattr(response, "status_code", "")
    reason = getattr(response, "reason", "") or ""
    return f"{code} {reason}".strip()


def _decode_bytes(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return base64.b64decode(value)


class HttpClient:
    """Plain HTTP transport used for release lookups and short links."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def get(self, url: str) -> requests.Response:
        return requests.get(url, timeout=self.timeout)

    def post(self, url: str, content_type: str, body: bytes) -> requests.Response:
        return requests.post(
            url,
            data=body,
            headers={"Content-Type": content_type},
            timeout=self.timeout,
        )


@dataclass
class AccountParticipation:
    """Consensus participation keys registered for an account."""

    selection_participation_key: bytes = b""
    state_proof_key: Optional[bytes] = None
    vote_first_valid: int = 0
    vote_key_dilution: int = 0
    vote_last_valid: int = 0
    vote_participation_key: bytes = b""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccountParticipation":
        return cls(
            selection_participation_key=_decode_bytes(data.get("selection-participation-key")) or b"",
            state_proof_key=_decode_bytes(data.get("state-proof-key")),
            vote_first_valid=int(data.get("vote-first-valid", 0)),
            vote_key_dilution=int(data.get("vote-key-dilution", 0)),
            vote_last_valid=int(data.get("vote-last-valid", 0)),
            vote_participation_key=_decode_bytes(data.get("vote-participation-key")) or b"",
        )


@dataclass
class ParticipationKey:
    """A participation key installed on the node."""

    address: str = ""
    id: str = ""
    key: AccountParticipation = field(default_factory=AccountParticipation)
    effective_first_valid: Optional[int] = None
    effective_last_valid: Optional[int] = None
    last_block_proposal: Optional[int] = None
    last_state_proof: Optional[int] = None
    last_vote: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParticipationKey":
        return cls(
            address=data.get("address", ""),
            id=data.get("id", ""),
            key=AccountParticipation.from_dict(data.get("key") or {}),
            effective_first_valid=data.get("effective-first-valid"),
            effective_last_valid=data.get("effective-last-valid"),
            last_block_proposal=data.get("last-block-proposal"),
            last_state_proof=data.get("last-state-proof"),
            last_vote=data.get("last-vote"),
        )


@dataclass
class AccountInfo:
    """Account information as reported by algod."""

    address: str = ""
    amount: int = 0
    status: str = ""
    participation: Optional[AccountParticipation] = None
    incentive_eligible: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccountInfo":
        participation = data.get("participation")
        return cls(
            address=data.get("address", ""),
            amount=int(data.get("amount", 0)),
            status=data.get("status", ""),
            participation=(
                AccountParticipation.from_dict(participation) if participation is not None else None
            ),
            incentive_eligible=data.get("incentive-eligible"),
        )