"""Modal asking for confirmation before deleting a key."""

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
    batch,
    emit_delete_key,
    emit_modal_event,
)
from .style import CENTER, CYAN, GREEN, RED, Style, join_vertical

_PADDED = Style(padding_top=1, padding_right=1, padding_bottom=1, padding_left=1)


@dataclass
class ConfirmModal:
    """Delete confirmation: ``y`` deletes the active key, ``n``/``esc`` cancels."""

    data: Any = None
    width: int = 0
    height: int = 0
    title: str = "Delete Key"
    border_color: str = "9"
    controls: str = field(
        default_factory=lambda: "( " + GREEN.render("(y)es") + " | " + RED.render("(n)o") + " )"
    )
    active_key: Optional[ParticipationKey] = None

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Apply ``msg`` to the modal and return a command, if any."""
        if isinstance(msg, KeyMsg):
            key = str(msg)
            if key in ("esc", "n"):
                return emit_modal_event(ModalEvent(type=ModalType.CANCEL))
            if key == "y" and self.active_key is not None:
                client = self.data.client if self.data is not None else None
                return batch(emit_delete_key(client, self.active_key.id))
        elif isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        return None

    def view(self) -> str:
        if self.active_key is None:
            return "No key selected"
        return _PADDED.render(
            join_vertical(
                CENTER,
                "Are you sure you want to delete this key from your node?\n",
                CYAN.render("Account Address:"),
                self.active_key.address + "\n",
                CYAN.render("Participation Key:"),
                self.active_key.id,
            )
        )