"""Header panel showing the latest round, round time and network traffic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..state import StateModel
from ..status import State
from .messages import Command, WindowSizeMsg
from .style import BLUE, CYAN, GREEN, LEFT, YELLOW, apply_border, join_horizontal, join_vertical, visible_width, with_title


def get_bit_rate(rate: int) -> str:
    """Format a byte rate as B/s, KB/s, MB/s or GB/s."""
    text = f"{rate} B/s "
    if rate >= 1024:
        text = f"{rate // (1 << 10)} KB/s "
    if rate >= 1024**2:
        text = f"{rate // (1 << 20)} MB/s "
    if rate >= 1024**3:
        text = f"{rate // (1 << 30)} GB/s "
    return text


def _row(beginning: str, end: str, size: int) -> str:
    middle = " " * max(0, size - (visible_width(beginning) + visible_width(end) + 2))
    return join_horizontal(beginning, middle, end)


@dataclass
class StatusView:
    """Status panel of the header."""

    data: Any = None
    terminal_width: int = 0
    terminal_height: int = 0
    is_visible: bool = True

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Track state updates and terminal size."""
        if isinstance(msg, StateModel):
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

        compact = self.terminal_width < 90
        size = self.terminal_width if compact else self.terminal_width // 2
        status = self.data.status
        metrics = self.data.metrics
        stable = status.state == State.STABLE

        label = str(status.state).upper()
        colour = GREEN if stable else YELLOW
        row1 = _row(
            BLUE.render(" Latest Round: ") + str(int(status.last_round)),
            colour.render(label) + " ",
            size,
        )

        round_time = f"{metrics.round_time.total_seconds():.2f}s" if stable else "--"
        row2 = _row(
            BLUE.render(" Round time: ") + round_time,
            get_bit_rate(metrics.tx) + GREEN.render("TX "),
            size,
        )

        tps = f"{metrics.tps:.2f}" if stable else "--"
        row3 = _row(
            BLUE.render(" TPS: ") + tps,
            get_bit_rate(metrics.rx) + GREEN.render("RX "),
            size,
        )

        return with_title(
            "Status",
            apply_border(max(0, size - 2), 5, "5").render(
                join_vertical(
                    LEFT,
                    row1,
                    "",
                    CYAN.render(f" -- {metrics.window} round average --"),
                    row2,
                    row3,
                )
            ),
        )


def make_status_view(state: Any) -> StatusView:
    """Status panel bound to ``state``."""
    return StatusView(data=state, terminal_width=80, is_visible=True)