"""Terminal styling, borders and layout helpers working on ANSI strings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from wcwidth import wcwidth

LEFT = 0.0
CENTER = 0.5
RIGHT = 1.0

_ESCAPE = r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
_ESCAPE_RE = re.compile(_ESCAPE)
_TOKEN_RE = re.compile(f"({_ESCAPE})|(.)", re.S)
_SGR_RE = re.compile(r"\x1b[[\d;]*m")
_RESET = "\x1b[0m"

_ROUNDED = {"tl": "╭", "tr": "╮", "bl": "╰", "br": "╯", "h": "─", "v": "│"}


def _color_code(color: str, background: bool) -> str:
    number = int(color)
    if number < 8:
        return str((40 if background else 30) + number)
    if number < 16:
        return str((100 if background else 90) + number - 8)
    return f"{48 if background else 38};5;{number}"


def _char_width(ch: str) -> int:
    return max(0, wcwidth(ch))


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``."""
    return _ESCAPE_RE.sub("", text)


def _line_width(line: str) -> int:
    return sum(_char_width(ch) for ch in strip_ansi(line))


def visible_width(text: str) -> int:
    """Widest line of ``text`` in terminal cells."""
    return max(_line_width(line) for line in text.split("\n"))


def height(text: str) -> int:
    """Number of lines in ``text``."""
    return text.count("\n") + 1


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to ``width`` cells, keeping escape sequences."""
    out: List[str] = []
    used = 0
    full = False
    for escape, ch in _TOKEN_RE.findall(text):
        if escape:
            out.append(escape)
            continue
        w = _char_width(ch)
        if full or used + w > width:
            full = True
            continue
        out.append(ch)
        used += w
    return "".join(out)


def hardwrap(text: str, width: int, preserve_space: bool) -> str:
    """Break lines longer than ``width`` cells."""
    if width < 1:
        return text
    out: List[str] = []
    used = 0
    wrapped = False
    for escape, ch in _TOKEN_RE.findall(text):
        if escape:
            out.append(escape)
            continue
        if ch == "\n":
            out.append(ch)
            used = 0
            wrapped = False
            continue
        w = _char_width(ch)
        if used + w > width:
            out.append("\n")
            used = 0
            wrapped = True
        if wrapped and ch == " " and not preserve_space:
            continue
        wrapped = False
        out.append(ch)
        used += w
    return "".join(out)


def _pad_line(line: str, width: int, position: float) -> str:
    gap = width - _line_width(line)
    if gap <= 0:
        return line
    left = int(round(gap * position))
    return " " * left + line + " " * (gap - left)


def join_horizontal(*args: str) -> str:
    """Place blocks side by side, aligned to the top."""
    if not args:
        return ""
    blocks = [block.split("\n") for block in args]
    rows = max(len(lines) for lines in blocks)
    padded = []
    for lines in blocks:
        width = max(_line_width(line) for line in lines)
        lines = lines + [""] * (rows - len(lines))
        padded.append([_pad_line(line, width, LEFT) for line in lines])
    return "\n".join("".join(parts) for parts in zip(*padded))


def join_vertical(position: float, *args: str) -> str:
    """Stack blocks, aligning lines at ``position`` (0 left, 1 right)."""
    if not args:
        return ""
    lines = [line for block in args for line in block.split("\n")]
    width = max(_line_width(line) for line in lines)
    return "\n".join(_pad_line(line, width, position) for line in lines)


@dataclass(frozen=True)
class Style:
    """Immutable text style; derive variants with ``dataclasses.replace``."""

    foreground: Optional[str] = None
    background: Optional[str] = None
    bold: bool = False
    underline: bool = False
    border: bool = False
    border_foreground: Optional[str] = None
    width: int = 0
    height: int = 0
    padding_top: int = 0
    padding_right: int = 0
    padding_bottom: int = 0
    padding_left: int = 0

    def _sgr(self) -> str:
        codes = []
        if self.bold:
            codes.append("1")
        if self.underline:
            codes.append("4")
        if self.foreground is not None:
            codes.append(_color_code(self.foreground, False))
        if self.background is not None:
            codes.append(_color_code(self.background, True))
        return f"\x1b[{';'.join(codes)}m" if codes else ""

    def render(self, text: str) -> str:
        """Apply the style to ``text``."""
        content_width = self.width - self.padding_left - self.padding_right
        if self.width and content_width > 0:
            text = hardwrap(text, content_width, False)
        sgr = self._sgr()
        lines = [sgr + line + _RESET if sgr and line else line for line in text.split("\n")]
        lines = [" " * self.padding_left + line + " " * self.padding_right for line in lines]
        lines = [""] * self.padding_top + lines + [""] * self.padding_bottom
        if self.height > len(lines):
            lines += [""] * (self.height - len(lines))
        width = max([self.width] + [_line_width(line) for line in lines])
        lines = [_pad_line(line, width, LEFT) for line in lines]
        if not self.border:
            return "\n".join(lines)

        def paint(piece: str) -> str:
            if self.border_foreground is None:
                return piece
            return f"\x1b[{_color_code(self.border_foreground, False)}m{piece}{_RESET}"

        top = paint(_ROUNDED["tl"] + _ROUNDED["h"] * width + _ROUNDED["tr"])
        bottom = paint(_ROUNDED["bl"] + _ROUNDED["h"] * width + _ROUNDED["br"])
        side = paint(_ROUNDED["v"])
        return "\n".join([top] + [side + line + side for line in lines] + [bottom])


BORDER = Style(border=True)
BLUE = Style(foreground="12")
CYAN = Style(foreground="14")
YELLOW = Style(foreground="11")
GREEN = Style(foreground="10")
RED = Style(foreground="9")


def magenta(text: str) -> str:
    return Style(foreground="5").render(text)


def purple(text: str) -> str:
    return Style(foreground="63").render(text)


def light_blue(text: str) -> str:
    return Style(foreground="12").render(text)


def bold(text: str) -> str:
    return Style(bold=True).render(text)


def bold_underline(text: str) -> str:
    return Style(bold=True, underline=True).render(text)


def apply_border(width: int, height: int, color: str) -> Style:
    """Rounded border of the given content size and colour."""
    return Style(border=True, width=width, height=height, border_foreground=color)


def with_hyperlink(text: str, url: str) -> str:
    """Wrap ``text`` in an OSC 8 hyperlink to ``url``."""
    return f"\x1b]8;;{url}\x07{text}\x1b]8;;\x07"


def with_title(title: str, view: str) -> str:
    """Write ``title`` into the top border of ``view``."""
    if visible_width(view) >= len(title) + 4:
        index = view.find(_ROUNDED["h"])
        if index >= 0:
            return view[:index] + title + view[index + len(title):]
    return view


def with_controls(nav: str, view: str) -> str:
    """Write ``nav`` into the bottom border near the left edge."""
    if nav == "":
        return view
    lines = view.split("\n")
    if visible_width(view) >= visible_width(nav) + 4:
        line = lines[-1]
        left_edge = 5
        lines[-1] = (
            truncate(line, left_edge) + nav + truncate_left(line, left_edge + visible_width(nav))
        )
    return "\n".join(lines)


def with_navigation(controls: str, view: str) -> str:
    """Write ``controls`` into the bottom border near the right edge."""
    if controls == "":
        return view
    control_width = visible_width(controls)
    lines = view.split("\n")
    if visible_width(view) >= control_width + 4:
        line = lines[-1]
        left_edge = _line_width(line) - (control_width + 5)
        lines[-1] = (
            truncate(line, left_edge) + controls + truncate_left(line, left_edge + control_width)
        )
    return "\n".join(lines)


def _centre_offsets(overlay: str, view: str):
    row = height(view) // 2 - height(overlay) // 2
    col = visible_width(view) // 2 - visible_width(overlay) // 2
    return row, col


def with_overlay(overlay: str, view: str) -> str:
    """Draw ``overlay`` centred on top of ``view``."""
    if overlay == "":
        return view
    background = view.split("\n")
    row, col = _centre_offsets(overlay, view)

    if col < 0 or row < 0:
        text = "Resize terminal to see content"
        overlay = with_navigation(
            "( esc )",
            with_title(
                "Screen Size",
                Style(
                    border=True,
                    width=visible_width(text) + 4,
                    height=height(text) + 2,
                    border_foreground="1",
                    padding_top=1,
                    padding_right=1,
                    padding_bottom=1,
                    padding_left=1,
                ).render(text),
            ),
        )
        row, col = _centre_offsets(overlay, view)
        if col < 0 or row < 0:
            return text

    for offset, overlay_line in enumerate(overlay.split("\n")):
        target = offset + row
        while len(background) <= target:
            background.append("")
        line = background[target]
        line_width = _line_width(line)
        if line_width < col:
            line += " " * (col - line_width)
        background[target] = (
            truncate(line, col) + overlay_line + truncate_left(line, col + _line_width(overlay_line))
        )
    return "\n".join(background)


def truncate_left(line: str, padding: int) -> str:
    """Drop the first ``padding`` cells of ``line``, keeping its last style."""
    wrapped = hardwrap(line, padding, True).split("\n")
    if len(wrapped) == 1:
        return ""
    styles = _SGR_RE.findall(wrapped[0])
    prefix = styles[-1] if styles else ""
    return prefix + "".join(wrapped[1:])