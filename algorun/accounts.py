"""Accounts derived from the participation keys installed on the node."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from cryptography.hazmat.primitives import hashes

from .api import AccountInfo, AccountParticipation, ApiError, ParticipationKey
from .status import State

_ADDRESS_LENGTH = 58
_CHECKSUM_LENGTH = 4
_PUBLIC_KEY_LENGTH = 32


@dataclass
class Account:
    """An account with keys on this node, enriched with on-chain data."""

    address: str = ""
    status: str = ""
    balance: int = 0
    keys: int = 0
    participation: Optional[AccountParticipation] = None
    incentive_eligible: bool = False
    non_resident_key: bool = False
    expires: Optional[datetime] = None


def get_account(client: Any, address: str) -> AccountInfo:
    """Fetch account information for ``address`` from the node."""
    response = client.account_information(address)
    if response.status_code != 200:
        raise ApiError(
            "Failed to get account information. "
            f"Received error code: {response.status_code}",
            response.status_code,
        )
    return AccountInfo.from_dict(response.json())


def get_expires_time(
    clock: Any, last_round: int, round_time: timedelta, account: Account
) -> Optional[datetime]:
    """Estimate when the account's registered key stops being valid."""
    now = clock.now()
    if (
        account.status == "Online"
        and account.participation is not None
        and last_round
        and round_time
    ):
        remaining = max(0, account.participation.vote_last_valid - int(last_round))
        return now + round_time * remaining
    return None


def participation_keys_to_accounts(
    keys: Optional[Iterable[ParticipationKey]],
) -> Dict[str, Account]:
    """Group keys by address into accounts counting their keys."""
    accounts: Dict[str, Account] = {}
    for key in keys or ():
        existing = accounts.get(key.address)
        if existing is None:
            accounts[key.address] = Account(address=key.address, status="Unknown", keys=1)
        else:
            existing.keys += 1
    return accounts


def update_account_from_rpc(account: Account, rpc_account: AccountInfo) -> Account:
    """Return ``account`` updated with status, balance and participation."""
    return replace(
        account,
        status=rpc_account.status,
        balance=rpc_account.amount // 1_000_000,
        participation=rpc_account.participation,
        incentive_eligible=bool(rpc_account.incentive_eligible),
    )


def is_participation_key_active(
    part: ParticipationKey, participation: AccountParticipation
) -> bool:
    """True when ``part`` is the key registered on chain."""
    return (
        part.key.vote_participation_key == participation.vote_participation_key
        and part.key.vote_last_valid == participation.vote_last_valid
        and part.key.vote_first_valid == participation.vote_first_valid
    )


def update_account_expired_time(clock: Any, account: Account, state: Any) -> Account:
    """Return ``account`` with residency and expiry recomputed from ``state``."""
    non_resident = True
    for key in state.participation_keys or ():
        if account.status == "Offline" or (
            key.address == account.address
            and account.participation is not None
            and is_participation_key_active(key, account.participation)
        ):
            non_resident = False
    return replace(
        account,
        non_resident_key=non_resident,
        expires=get_expires_time(
            clock, int(state.status.last_round), state.metrics.round_time, account
        ),
    )


def accounts_from_state(state: Any, clock: Any, client: Any) -> Dict[str, Account]:
    """Build the account map for the keys in ``state``."""
    if state is None:
        return {}
    accounts = participation_keys_to_accounts(state.participation_keys)
    if state.status.state != State.SYNCING:
        for address, account in list(accounts.items()):
            updated = update_account_from_rpc(account, get_account(client, address))
            accounts[address] = update_account_expired_time(clock, updated, state)
    return accounts


def _sha512_256(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA512_256())
    digest.update(data)
    return digest.finalize()


def validate_address(address: str) -> bool:
    """Check that ``address`` is a well-formed account address."""
    if len(address) != _ADDRESS_LENGTH:
        return False
    try:
        raw = base64.b32decode(address + "=" * 6)
    except (binascii.Error, ValueError):
        return False
    if len(raw) != _PUBLIC_KEY_LENGTH + _CHECKSUM_LENGTH:
        return False
    public_key, checksum = raw[:_PUBLIC_KEY_LENGTH], raw[_PUBLIC_KEY_LENGTH:]
    return _sha512_256(public_key)[-_CHECKSUM_LENGTH:] == checksum