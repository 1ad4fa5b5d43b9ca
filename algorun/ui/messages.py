"""Messages exchanged between views and the commands that produce them.

A command is a callable taking no arguments and returning a message.
Views return commands from ``handle_message``; the runtime calls them and
feeds the resulting messages back into the views.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, List, Optional

from ..accounts import Account
from ..api import HttpClient, ParticipationKey
from ..clock import RangeType
from ..participation import (
    KeyGenerationParams,
    OfflineShortLinkBody,
    OnlineShortLinkBody,
    _b64url,
    _lora_network,
    delete_part_key,
    generate_key_pair,
    get_offline_short_link,
    get_online_short_link,
)

Command = Callable[[], Any]


@dataclass(frozen=True)
class KeyMsg:
    """A key press, named the way the terminal reports it (``enter``, ``esc``, ``q``)."""

    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class WindowSizeMsg:
    """The space available to a view changed."""

    width: int
    height: int


class Page(str, Enum):
    """Pages shown in the main viewport."""

    ACCOUNTS = "accounts"
    KEYS = "keys"

    def __str__(self) -> str:
        return self.value


class ModalType(str, Enum):
    """Kinds of modal dialog, and the close/cancel requests."""

    CLOSE = ""
    CANCEL = "cancel"
    INFO = "info"
    CONFIRM = "confirm"
    TRANSACTION = "transaction"
    GENERATE = "generate"
    EXCEPTION = "exception"

    def __str__(self) -> str:
        return self.value


@dataclass
class ModalEvent:
    """Request to open, change or close the modal."""

    key: Optional[ParticipationKey] = None
    active: bool = False
    address: str = ""
    err: Optional[Exception] = None
    type: ModalType = ModalType.CLOSE


@dataclass
class AccountSelected(Account):
    """An account was chosen on the accounts page."""


@dataclass
class DeleteFinished:
    """Outcome of deleting a participation key."""

    err: Optional[Exception] = None
    id: str = ""


def batch(*args: Optional[Command]) -> Optional[Command]:
    """Combine commands into one; the combined command returns a list of messages."""
    commands = [command for command in args if command is not None]
    if not commands:
        return None
    if len(commands) == 1:
        return commands[0]

    def run() -> List[Any]:
        return [command() for command in commands]

    return run


def emit_account_selected(account: Account) -> Command:
    """Command announcing that ``account`` was selected."""
    selected = AccountSelected(**{f.name: getattr(account, f.name) for f in fields(Account)})
    return lambda: selected


def emit_delete_key(client: Any, key_id: str) -> Command:
    """Command deleting a key on the node and reporting the outcome."""

    def run() -> DeleteFinished:
        try:
            delete_part_key(client, key_id)
        except Exception as error:
            return DeleteFinished(err=error, id="")
        return DeleteFinished(err=None, id=key_id)

    return run


def generate_cmd(account: str, range_type: RangeType, duration: Any, state: Any) -> Command:
    """Command generating a key for ``account``.

    For a time range ``duration`` is a timedelta (or a number of seconds) and is
    converted to rounds with the average round time; otherwise it is a number
    of rounds.
    """

    def run() -> ModalEvent:
        first = int(state.status.last_round)
        if range_type == RangeType.TIME:
            span = duration if isinstance(duration, timedelta) else timedelta(seconds=duration)
            rounds = int(span // state.metrics.round_time)
        else:
            rounds = int(duration)
        params = KeyGenerationParams(first=first, last=first + rounds)
        try:
            key = generate_key_pair(state.client, account, params)
        except Exception as error:
            return ModalEvent(err=error, type=ModalType.EXCEPTION)
        return ModalEvent(key=key, address=key.address, type=ModalType.INFO)

    return run


def emit_show_modal(modal: ModalType) -> Command:
    """Command switching the modal to ``modal``."""
    return lambda: modal


def emit_modal_event(event: ModalEvent) -> Command:
    """Command delivering ``event``."""
    return lambda: event


def emit_create_short_link(
    offline: bool, part: Optional[ParticipationKey], state: Any
) -> Optional[Command]:
    """Create a registration short link now; the command yields the link or the error."""
    if part is None or state is None:
        return None
    network = _lora_network(state.status.network)
    http = state.http or HttpClient()
    try:
        if offline:
            result: Any = get_offline_short_link(
                http, OfflineShortLinkBody(account=part.address, network=network)
            )
        else:
            if part.key.state_proof_key is None:
                raise ValueError("participation key has no state proof key")
            result = get_online_short_link(
                http,
                OnlineShortLinkBody(
                    account=part.address,
                    vote_key_b64=_b64url(part.key.vote_participation_key),
                    selection_key_b64=_b64url(part.key.selection_participation_key),
                    state_proof_key_b64=_b64url(part.key.state_proof_key),
                    vote_first_valid=part.key.vote_first_valid,
                    vote_last_valid=part.key.vote_last_valid,
                    key_dilution=part.key.vote_key_dilution,
                    network=network,
                ),
            )
    except Exception as error:
        result = error
    return lambda: result


def emit_show_page(page: Page) -> Command:
    """Command switching the viewport to ``page``."""
    return lambda: page