"""Header panel showing node version, network and protocol voting."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..status import StatusModel
from .messages import Command, WindowSizeMsg
from .style import BLUE, GREEN, LEFT, apply_border, join_horizontal, join_vertical, visible_width, with_title


def _bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class ProtocolView:
    """Protocol panel of the header."""

    data: StatusModel = field(default_factory=StatusModel)
    terminal_width: int = 0
    terminal_height: int = 0
    is_visible: bool = True

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Track status updates and terminal size."""
        if isinstance(msg, StatusModel):
            self.data = msg
        elif isinstance(msg, WindowSizeMsg):
            self.terminal_width = msg.width
            self.terminal_height = msg.height
        return None

    def view(self) -> str:
        if not self.is_visible:
            return ""
        if self.terminal_width <= 0:
            return "Loading...\n\n\n\n\n\n"
        beginning = BLUE.render(" Node: ") + self.data.version

        compact = self.terminal_width < 90
        if compact and self.terminal_height < 26:
            return ""

        end = ""
        if self.data.needs_update and not compact:
            end += GREEN.render("[UPDATE AVAILABLE] ")

        size = self.terminal_width if compact else self.terminal_width // 2
        middle = " " * max(0, size - (visible_width(beginning) + visible_width(end) + 2))

        rows = [join_horizontal(beginning, middle, end)]
        if not compact:
            rows.append("")
        rows.append(BLUE.render(" Network: ") + self.data.network)
        if not compact:
            rows.append("")
        rows.append(BLUE.render(" Protocol Voting: ") + _bool(self.data.voting))
        if compact and self.data.needs_update:
            rows.append(
                BLUE.render(" Upgrade Available: ") + GREEN.render(_bool(self.data.needs_update))
            )
        return with_title(
            "Protocol",
            apply_border(max(0, size - 2), 5, "5").render(join_vertical(LEFT, *rows)),
        )


def make_protocol_view(state: Any) -> ProtocolView:
    """Protocol panel for the status held in ``state``."""
    return ProtocolView(data=replace(state.status), terminal_width=0, terminal_height=0, is_visible=True)