"""Page listing the participation keys of one account."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..api import AccountParticipation, ParticipationKey
from ..participation import find_participation_id_for_vote_key, remove_part_key_by_id
from ..state import StateModel
from .messages import (
    AccountSelected,
    Command,
    DeleteFinished,
    KeyMsg,
    ModalEvent,
    ModalType,
    Page,
    WindowSizeMsg,
    emit_modal_event,
    emit_show_page,
)
from .style import BORDER, GREEN, Style, apply_border, height, visible_width, with_controls, with_navigation, with_title
from .table import Column, Table
from .utils import str_or_na


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def _make_columns(width: int) -> List[Column]:
    avg = _trunc_div(width - visible_width(BORDER.render("")) - 9, 5)
    titles = ("ID", "Address", "Active", "Last Vote", "Last Block Proposal")
    return [Column(title, avg) for title in titles]


class KeysPage:
    """Table of the keys for ``address``; ``enter`` shows key details."""

    def __init__(self, address: str, keys: Optional[List[ParticipationKey]]) -> None:
        self.address = address
        self.participation: Optional[AccountParticipation] = None
        self.data = keys
        self.width = 0
        self.height = 0
        self.title = "Keys"
        self.controls = "( (g)enerate )"
        self.navigation = "| accounts | " + GREEN.render("keys") + " |"
        self.border_color = "4"
        self._table = Table(
            columns=_make_columns(80),
            rows=self._make_rows(keys),
            focused=True,
            height=self.height,
            width=self.width,
            selected_style=Style(foreground="229", background=self.border_color),
        )

    def _make_rows(self, keys: Optional[List[ParticipationKey]]) -> List[List[str]]:
        if keys is None or self.address == "":
            return []
        active_id = None
        if self.participation is not None:
            active_id = find_participation_id_for_vote_key(
                keys, self.participation.vote_participation_key
            )
        rows = [
            [
                key.id,
                key.address,
                "YES" if active_id is not None and active_id == key.id else "N/A",
                str_or_na(key.last_vote),
                str_or_na(key.last_block_proposal),
            ]
            for key in keys
            if key.address == self.address
        ]
        rows.sort(key=lambda row: row[0])
        return rows

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Apply ``msg`` to the page and return a command, if any."""
        if isinstance(msg, StateModel):
            self.data = msg.participation_keys
            self._table.set_rows(self._make_rows(self.data))
            account = (msg.accounts or {}).get(self.address)
            self.participation = account.participation if account is not None else None
        elif isinstance(msg, AccountSelected):
            self.address = msg.address
            self.participation = msg.participation
            self._table.set_rows(self._make_rows(self.data))
        elif isinstance(msg, DeleteFinished):
            if self.data is not None:
                remaining = remove_part_key_by_id(self.data, msg.id)
                if remaining is not None:
                    self.data = remaining
            self._table.set_rows(self._make_rows(self.data))
        elif isinstance(msg, KeyMsg):
            key = str(msg)
            if key == "esc":
                return emit_show_page(Page.ACCOUNTS)
            if key == "enter":
                selected, active = self.selected_key()
                if selected is not None:
                    return emit_modal_event(
                        ModalEvent(
                            key=selected,
                            active=active,
                            address=selected.address,
                            type=ModalType.INFO,
                        )
                    )
                return None
        elif isinstance(msg, WindowSizeMsg):
            border = BORDER.render("")
            self.width = max(0, msg.width - visible_width(border))
            self.height = max(0, msg.height - height(border))
            self._table.width = self.width
            self._table.height = self.height
            self._table.set_columns(_make_columns(self.width))

        self._table.handle_message(msg)
        return None

    def rows(self) -> List[List[str]]:
        """Rows currently shown in the table."""
        return self._table.rows

    def selected_key(self) -> Tuple[Optional[ParticipationKey], bool]:
        """The key under the cursor and whether it is the registered one."""
        if self.data is None:
            return None, False
        selected = self._table.selected_row()
        part_key: Optional[ParticipationKey] = None
        active = False
        for key in self.data:
            if selected and key.id == selected[0]:
                part_key = key
                active = selected[2] == "YES"
        return part_key, active

    def view(self) -> str:
        table = apply_border(self.width, self.height, self.border_color).render(self._table.view())
        return with_navigation(
            self.navigation,
            with_controls(self.controls, with_title(self.title, table)),
        )