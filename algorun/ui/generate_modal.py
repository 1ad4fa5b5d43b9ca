"""Modal walking the user through generating participation keys."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

from ..accounts import validate_address
from ..clock import RangeType
from .messages import (
    Command,
    KeyMsg,
    ModalEvent,
    ModalType,
    WindowSizeMsg,
    batch,
    emit_modal_event,
    emit_show_modal,
    generate_cmd,
)
from .style import LEFT, RED, Style, join_vertical

FOCUSED_STYLE = Style(foreground="205")
CURSOR_STYLE = FOCUSED_STYLE
NO_STYLE = Style()
_PLACEHOLDER_STYLE = Style(foreground="240")

DEFAULT_CONTROLS = "( esc to cancel )"
DEFAULT_TITLE = "Generate Consensus Participation Keys"
DEFAULT_BORDER_COLOR = "2"

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Step(str, Enum):
    """Stages of the generation dialog."""

    ADDRESS = "address"
    DURATION = "duration"
    WAITING = "waiting"

    def __str__(self) -> str:
        return self.value


class Range(str, Enum):
    """Unit the validity duration is entered in."""

    DAY = "day"
    MONTH = "month"
    ROUND = "round"

    def __str__(self) -> str:
        return self.value


_NEXT_RANGE = {Range.DAY: Range.MONTH, Range.MONTH: Range.ROUND, Range.ROUND: Range.DAY}


@dataclass
class TextInput:
    """Single-line text field fed by key messages while focused."""

    placeholder: str = ""
    char_limit: int = 0
    value: str = ""
    focused: bool = False
    prompt: str = "> "
    prompt_style: Style = NO_STYLE
    text_style: Style = NO_STYLE
    cursor_style: Style = CURSOR_STYLE

    def set_value(self, value: str) -> None:
        """Replace the text, respecting the character limit."""
        self.value = value[: self.char_limit] if self.char_limit > 0 else value

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def handle_key(self, msg: Any) -> None:
        """Edit the text for a key press; other messages are ignored."""
        if not self.focused or not isinstance(msg, KeyMsg):
            return
        key = str(msg)
        if key == "backspace":
            self.value = self.value[:-1]
        elif len(key) == 1 and key.isprintable():
            if self.char_limit <= 0 or len(self.value) < self.char_limit:
                self.value += key

    def view(self) -> str:
        if not self.value and self.placeholder:
            text = _PLACEHOLDER_STYLE.render(self.placeholder)
        else:
            text = self.text_style.render(self.value)
        return self.prompt_style.render(self.prompt) + text


def _address_input() -> TextInput:
    return TextInput(
        placeholder="Wallet Address",
        char_limit=58,
        focused=True,
        prompt_style=FOCUSED_STYLE,
        text_style=FOCUSED_STYLE,
    )


def _duration_input() -> TextInput:
    return TextInput(placeholder="Length of time", char_limit=58)


@dataclass
class GenerateModal:
    """Asks for an address and a validity duration, then generates keys."""

    address: str = ""
    state: Any = None
    width: int = 0
    height: int = 0
    input: TextInput = field(default_factory=_address_input)
    input_error: str = ""
    input_two: TextInput = field(default_factory=_duration_input)
    input_two_error: str = ""
    step: Step = Step.ADDRESS
    range: Range = Range.DAY
    title: str = DEFAULT_TITLE
    controls: str = DEFAULT_CONTROLS
    border_color: str = DEFAULT_BORDER_COLOR

    def set_address(self, address: str) -> None:
        """Prefill the address field."""
        self.address = address
        self.input.set_value(address)

    def set_step(self, step: Step) -> None:
        """Move to ``step`` and update title, controls and inputs."""
        self.step = step
        if step == Step.ADDRESS:
            self.controls = DEFAULT_CONTROLS
            self.title = DEFAULT_TITLE
            self.input_error = ""
            self.border_color = DEFAULT_BORDER_COLOR
        elif step == Step.DURATION:
            self.controls = "( (s)witch range )"
            self.title = "Validity Range"
            self.input_two.set_value("")
            self.input_two.focus()
            self.input_two.prompt_style = FOCUSED_STYLE
            self.input_two.text_style = FOCUSED_STYLE
            self.input_two_error = ""
            self.input.blur()
        elif step == Step.WAITING:
            self.controls = ""
            self.title = "Generating Keys"
            self.border_color = "9"

    def _submit_duration(self) -> Optional[Command]:
        text = self.input_two.value
        value = int(text) if _INTEGER.fullmatch(text) else 0
        if value <= 0:
            self.input_two_error = "Error: duration must be a positive number"
            return None
        self.input_two_error = ""
        self.set_step(Step.WAITING)
        duration: Any
        if self.range == Range.DAY:
            duration = timedelta(days=value)
            range_type = RangeType.TIME
        elif self.range == Range.MONTH:
            duration = timedelta(days=30 * value)
            range_type = RangeType.TIME
        else:
            duration = value
            range_type = RangeType.ROUND
        return batch(
            emit_show_modal(ModalType.GENERATE),
            generate_cmd(self.input.value, range_type, duration, self.state),
        )

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Apply ``msg`` to the dialog and return a command, if any."""
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        elif isinstance(msg, KeyMsg):
            key = str(msg)
            if key == "esc":
                if self.step != Step.WAITING:
                    return emit_modal_event(ModalEvent(type=ModalType.CANCEL))
            elif key == "s" and self.step == Step.DURATION:
                self.range = _NEXT_RANGE[self.range]
                return None
            elif key == "enter":
                if self.step == Step.ADDRESS:
                    if not validate_address(self.input.value):
                        self.input_error = "Error: invalid address"
                        return None
                    self.input_error = ""
                    self.set_step(Step.DURATION)
                    return emit_show_modal(ModalType.GENERATE)
                if self.step == Step.DURATION:
                    return self._submit_duration()

        if self.step == Step.ADDRESS:
            self.input.handle_key(msg)
        elif self.step == Step.DURATION:
            self.input_two.handle_key(msg)
        return None

    def view(self) -> str:
        render = ""
        if self.step == Step.ADDRESS:
            render = join_vertical(
                LEFT,
                "",
                "Create keys required to participate in Algorand consensus.",
                "",
                "Account address:",
                self.input.view(),
                "",
            )
            if self.input_error:
                render = join_vertical(LEFT, render, RED.render(self.input_error))
        elif self.step == Step.DURATION:
            render = join_vertical(
                LEFT,
                "",
                "How long should the keys be valid for?",
                "",
                f"Duration in {self.range.value}s:",
                self.input_two.view(),
                "",
            )
            if self.input_two_error:
                render = join_vertical(LEFT, render, RED.render(self.input_two_error))
        elif self.step == Step.WAITING:
            render = join_vertical(
                LEFT,
                "",
                "Generating Participation Keys...",
                "",
                "Please wait. This operation can take a few minutes.",
                "",
            )
        return Style(width=70).render(render)