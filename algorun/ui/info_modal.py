"""Modal showing the details of a participation key."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..api import ParticipationKey
from .messages import (
    Command,
    KeyMsg,
    ModalEvent,
    ModalType,
    WindowSizeMsg,
    emit_create_short_link,
    emit_modal_event,
    emit_show_modal,
)
from .style import CYAN, GREEN, LEFT, RED, YELLOW, hardwrap, join_vertical, purple
from .utils import int_to_str, url_encode_bytes_or_none


def _default_controls() -> str:
    return "( " + RED.render("(d)elete") + " | " + GREEN.render("(o)nline") + " )"


def _encoded(data: Optional[bytes]) -> str:
    return url_encode_bytes_or_none(data) or "N/A"


@dataclass
class InfoModal:
    """Key details; ``d`` asks to delete, ``o`` registers online or offline."""

    state: Any = None
    width: int = 0
    height: int = 0
    title: str = "Key Information"
    border_color: str = "3"
    controls: str = field(default_factory=_default_controls)
    active: bool = False
    participation: Optional[ParticipationKey] = None

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Apply ``msg`` to the modal and return a command, if any."""
        if isinstance(msg, KeyMsg):
            key = str(msg)
            if key == "esc":
                return emit_modal_event(ModalEvent(type=ModalType.CANCEL))
            if key == "d" and not self.active:
                return emit_show_modal(ModalType.CONFIRM)
            if key == "o":
                return emit_create_short_link(self.active, self.participation, self.state)
        elif isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        self.update_state()
        return None

    def update_state(self) -> None:
        """Refresh border colour and controls from the key's registration."""
        if self.participation is None:
            return
        accounts = (self.state.accounts if self.state is not None else None) or {}
        account = accounts.get(self.participation.address)
        status = account.status if account is not None else ""

        if status == "Online" and self.active:
            self.border_color = "1"
            self.controls = "( take " + RED.render(RED.render("(o)ffline")) + " )"
        if not self.active:
            self.border_color = "3"
            self.controls = (
                "( " + RED.render("(d)elete") + " | take " + GREEN.render("(o)nline") + " )"
            )

    def view(self) -> str:
        part = self.participation
        if part is None:
            return "No key selected"
        return hardwrap(
            join_vertical(
                LEFT,
                "",
                CYAN.render("Account: ") + part.address,
                CYAN.render("Participation ID: ") + part.id,
                "",
                YELLOW.render("Selection Key: ") + _encoded(part.key.selection_participation_key),
                YELLOW.render("Vote Key: ") + _encoded(part.key.vote_participation_key),
                YELLOW.render("State Proof Key: ") + _encoded(part.key.state_proof_key),
                "",
                purple("Vote First Valid: ") + int_to_str(part.key.vote_first_valid),
                purple("Vote Last Valid: ") + int_to_str(part.key.vote_last_valid),
                purple("Vote Key Dilution: ") + int_to_str(part.key.vote_key_dilution),
                "",
            ),
            self.width,
            True,
        )