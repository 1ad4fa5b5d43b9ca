"""Modal showing an error message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .messages import Command, KeyMsg, ModalEvent, ModalType, WindowSizeMsg, emit_modal_event
from .style import BORDER, RED, hardwrap, height, visible_width


@dataclass
class ExceptionModal:
    """Error dialog; ``esc`` dismisses it."""

    message: str = ""
    height: int = 0
    width: int = 0
    title: str = "Error"
    border_color: str = "1"
    controls: str = "( esc )"
    navigation: str = ""

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Apply ``msg`` to the modal and return a command, if any."""
        if isinstance(msg, Exception):
            self.message = str(msg)
        elif isinstance(msg, KeyMsg):
            if str(msg) == "esc":
                return emit_modal_event(ModalEvent(type=ModalType.CANCEL))
        elif isinstance(msg, WindowSizeMsg):
            border = BORDER.render("")
            self.width = max(0, msg.width - visible_width(border))
            self.height = max(0, msg.height - height(border))
        return None

    def view(self) -> str:
        return hardwrap(RED.render(self.message), self.width, False)