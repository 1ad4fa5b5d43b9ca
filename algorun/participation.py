"""Participation key management and registration links."""

from __future__ import annotations

import base64
import json
import threading
import time
from dataclasses import dataclass, field, fields
from typing import Any, List, Optional
from urllib.parse import quote_plus

from .api import ApiError, ParticipationKey, _status_line

ONLINE_SHORT_LINK_URL = "http://b.nodekit.run/online"
OFFLINE_SHORT_LINK_URL = "http://b.nodekit.run/offline"
SHORT_LINK_BASE = "https://b.nodekit.run/"
LORA_BASE = "https://lora.algokit.io/"


@dataclass
class KeyGenerationParams:
    """Validity range and dilution for a new participation key."""

    first: int
    last: int
    dilution: Optional[int] = None


@dataclass
class OnlineShortLinkBody:
    """Request payload for an online registration short link."""

    account: str = field(metadata={"json": "account"})
    vote_key_b64: str = field(metadata={"json": "voteKeyB64"})
    selection_key_b64: str = field(metadata={"json": "selectionKeyB64"})
    state_proof_key_b64: str = field(metadata={"json": "stateProofKeyB64"})
    vote_first_valid: int = field(metadata={"json": "voteFirstValid"})
    vote_last_valid: int = field(metadata={"json": "voteLastValid"})
    key_dilution: int = field(metadata={"json": "keyDilution"})
    network: str = field(metadata={"json": "network"})


@dataclass
class OfflineShortLinkBody:
    """Request payload for an offline registration short link."""

    account: str = field(metadata={"json": "account"})
    network: str = field(metadata={"json": "network"})


@dataclass
class ShortLinkResponse:
    """Identifier of a created short link."""

    id: str = ""


def _wire(body: Any) -> bytes:
    payload = {f.metadata.get("json", f.name): getattr(body, f.name) for f in fields(body)}
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _check(response: Any) -> None:
    if response.status_code != 200:
        raise ApiError(_status_line(response), response.status_code)


def get_part_keys(client: Any) -> List[ParticipationKey]:
    """List the participation keys installed on the node."""
    response = client.get_participation_keys()
    _check(response)
    return [ParticipationKey.from_dict(item) for item in response.json() or []]


def read_part_key(client: Any, participation_id: str) -> ParticipationKey:
    """Read one participation key by id."""
    response = client.get_participation_key_by_id(participation_id)
    _check(response)
    return ParticipationKey.from_dict(response.json())


def generate_key_pair(
    client: Any,
    address: str,
    params: KeyGenerationParams,
    poll_interval: float = 2.0,
    timeout: float = 20 * 60.0,
    cancel: Optional[threading.Event] = None,
) -> ParticipationKey:
    """Ask the node to generate a key and wait until it appears."""
    response = client.generate_participation_keys(address, params)
    if response.status_code != 200:
        raise ApiError(_status_line(response) or "something went wrong", response.status_code)

    deadline = time.monotonic() + timeout
    while True:
        if cancel is not None:
            if cancel.wait(poll_interval):
                raise InterruptedError("key generation was cancelled")
        else:
            time.sleep(poll_interval)
        try:
            keys = get_part_keys(client)
        except Exception as error:
            raise ApiError("failed to get participation keys") from error
        for key in keys:
            if (
                key.address == address
                and key.key.vote_first_valid == params.first
                and key.key.vote_last_valid == params.last
            ):
                return key
        if time.monotonic() >= deadline:
            raise TimeoutError("timeout waiting for key to be created")


def delete_part_key(client: Any, participation_id: str) -> None:
    """Remove a participation key from the node."""
    _check(client.delete_participation_key_by_id(participation_id))


def remove_part_key_by_id(keys: List[ParticipationKey], key_id: str) -> None:
    """Remove the first key with ``key_id`` from ``keys`` in place."""
    for index, key in enumerate(keys):
        if key.id == key_id:
            del keys[index]
            return


def find_participation_id_for_vote_key(
    keys: List[ParticipationKey], vote_key: bytes
) -> Optional[str]:
    """Return the id of the key whose vote key equals ``vote_key``."""
    return next((key.id for key in keys if key.key.vote_participation_key == vote_key), None)


def _lora_network(network: str) -> str:
    name = network.replace("-v1.0", "", 1).replace("-v1", "", 1)
    return "localnet" if name in ("dockernet", "tuinet") else name


def to_lora_deep_link(
    network: str, offline: bool, incentive_eligible: bool, part: ParticipationKey
) -> str:
    """Build a transaction wizard link registering ``part`` online or offline."""
    if offline:
        query = f"type[0]=keyreg&sender[0]={part.address}"
    else:
        if part.key.state_proof_key is None:
            raise ValueError("participation key has no state proof key")
        query = (
            f"type[0]=keyreg&sender[0]={part.address}"
            f"&selkey[0]={_b64url(part.key.selection_participation_key)}"
            f"&sprfkey[0]={_b64url(part.key.state_proof_key)}"
            f"&votekey[0]={_b64url(part.key.vote_participation_key)}"
            f"&votefst[0]={part.key.vote_first_valid}"
            f"&votelst[0]={part.key.vote_last_valid}"
            f"&votekd[0]={part.key.vote_key_dilution}"
        )
    query = query.replace("[0]", quote_plus("[0]"))
    return f"{LORA_BASE}{_lora_network(network)}/transaction-wizard?{query}"


def _post_short_link(http: Any, url: str, body: Any) -> ShortLinkResponse:
    response = http.post(url, "application/json", _wire(body))
    payload = json.loads(response.text)
    if not isinstance(payload, dict):
        raise ValueError("unexpected short link response")
    return ShortLinkResponse(id=str(payload.get("id", "")))


def get_online_short_link(http: Any, body: OnlineShortLinkBody) -> ShortLinkResponse:
    """Create a short link for an online registration."""
    return _post_short_link(http, ONLINE_SHORT_LINK_URL, body)


def get_offline_short_link(http: Any, body: OfflineShortLinkBody) -> ShortLinkResponse:
    """Create a short link for an offline registration."""
    return _post_short_link(http, OFFLINE_SHORT_LINK_URL, body)


def to_short_link(link: ShortLinkResponse) -> str:
    """Full URL of a short link."""
    return f"{SHORT_LINK_BASE}{link.id}"