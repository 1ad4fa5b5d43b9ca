"""Page listing the accounts that have keys on the node."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, List, Optional

from ..accounts import Account
from ..state import StateModel
from ..status import State
from .messages import (
    Command,
    KeyMsg,
    Page,
    WindowSizeMsg,
    batch,
    emit_account_selected,
    emit_show_page,
)
from .style import BORDER, GREEN, Style, apply_border, height, visible_width, with_controls, with_navigation, with_title
from .table import Column, Table

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def _rfc822(moment: datetime) -> str:
    zone = moment.tzname() or ""
    text = f"{moment.day:02d} {_MONTHS[moment.month - 1]} {moment.year % 100:02d} {moment.hour:02d}:{moment.minute:02d}"
    return f"{text} {zone}" if zone else text


def _make_columns(width: int) -> List[Column]:
    avg = _trunc_div(width - visible_width(BORDER.render("")) - 9, 5)
    return [Column(title, avg) for title in ("Account", "Keys", "Status", "Expires", "Balance")]


class AccountsPage:
    """Table of accounts; ``enter`` opens the keys of the selected account."""

    def __init__(self, state: Any) -> None:
        self.data = state
        self.title = "Accounts"
        self.width = 0
        self.height = 0
        self.border_color = "6"
        self.controls = "( (g)enerate )"
        self.navigation = "| " + GREEN.render("accounts") + " | keys |"
        self._table = Table(
            columns=_make_columns(0),
            rows=self.rows(),
            focused=True,
            selected_style=Style(foreground="229", background=self.border_color),
        )

    def handle_message(self, msg: Any) -> Optional[Command]:
        """Apply ``msg`` to the page and return a command, if any."""
        if isinstance(msg, StateModel):
            self.data = msg
            self._table.set_rows(self.rows())
        elif isinstance(msg, KeyMsg):
            if str(msg) == "enter":
                selected = self.selected_account()
                if selected is not None:
                    return batch(emit_account_selected(selected), emit_show_page(Page.KEYS))
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

    def selected_account(self) -> Optional[Account]:
        """A copy of the account under the cursor, or None."""
        row = self._table.selected_row()
        if row is None:
            return None
        accounts = (self.data.accounts if self.data is not None else None) or {}
        account = accounts.get(row[0])
        return replace(account) if account is not None else Account()

    def rows(self) -> List[List[str]]:
        """Table rows for the current accounts, sorted by address."""
        if self.data is None:
            return []
        stable = self.data.status.state == State.STABLE
        rows = []
        for account in (self.data.accounts or {}).values():
            expires = "N/A"
            if account.expires is not None:
                now = datetime.now(account.expires.tzinfo)
                expires = "EXPIRED" if account.expires < now else _rfc822(account.expires)
                if account.expires < now + timedelta(days=7):
                    expires = "⚠ " + expires
            if not stable:
                expires = "SYNCING"
            if account.non_resident_key and expires not in ("⚠ EXPIRED", "EXPIRED"):
                expires = "⚠ NON-RESIDENT-KEY"
            rows.append(
                [account.address, str(account.keys), account.status, expires, str(account.balance)]
            )
        rows.sort(key=lambda row: row[0])
        return rows

    def view(self) -> str:
        table = apply_border(self.width, self.height, self.border_color).render(self._table.view())
        controls = self.controls
        if self.data.status.last_round < self.data.metrics.window:
            controls = "( Insufficient Data )"
        return with_navigation(
            self.navigation,
            with_controls(controls, with_title(self.title, table)),
        )