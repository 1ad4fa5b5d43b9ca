# algorun

Models and terminal views for watching an Algorand node (`algod`) and
managing the participation keys it holds.

## What is in the package

**Node data**

- `algorun.api` — dataclasses for algod payloads (`ParticipationKey`,
  `AccountParticipation`, `AccountInfo`), the `ApiError` exception and
  `HttpClient`, a small `requests`-based transport with `get` and `post`.
- `algorun.status` — `StatusModel` with `update(...)` and `fetch(client, http)`,
  and the `State` enum (`FAST_CATCHUP`, `SYNCING`, `STABLE`).
- `algorun.metrics` — `parse_metrics_content`, `get_metrics` and `MetricsModel`.
- `algorun.block` — `get_block_metrics(client, round_number, window)` returning
  a `BlockMetrics` with the average round time and transactions per second.
- `algorun.github` — `get_go_algorand_release(channel, http)`, the newest
  release tag containing the channel name.
- `algorun.participation` — listing, reading, generating and deleting keys,
  `to_lora_deep_link`, and the short-link helpers `get_online_short_link`,
  `get_offline_short_link` and `to_short_link`.
- `algorun.accounts` — `Account`, `accounts_from_state`, expiry estimation and
  `validate_address`.
- `algorun.state` — `StateModel`, which ties the above together; its
  `watch(callback, client)` method follows the chain round by round until
  `stop()` is called, calling `callback(state, None)` on each update and
  `callback(None, error)` on failures.
- `algorun.clock` — `Clock` and the `RangeType` enum.

**Terminal views** (`algorun.ui`)

- `style` — ANSI-aware rendering: `Style`, `apply_border`, `with_title`,
  `with_controls`, `with_navigation`, `with_overlay`, `truncate`,
  `truncate_left`, `hardwrap`, `join_horizontal`, `join_vertical`.
- `status_view`, `protocol_view` — the two header panels.
- `accounts_page`, `keys_page` (built on `table.Table`) — the two pages.
- `info_modal`, `confirm_modal`, `generate_modal`, `exception_modal` — dialogs.
- `messages` — the messages passed between views (`KeyMsg`, `WindowSizeMsg`,
  `ModalEvent`, `DeleteFinished`, ...) and the commands that produce them.

Every view takes messages through `handle_message(msg)`, which may return a
command (a callable with no arguments that yields the next message), and
renders itself as a string with `view()`.

## The algod client

Functions that talk to the node take a `client` object supplied by you. It
must offer the algod endpoints as methods — `get_status()`, `get_version()`,
`metrics()`, `get_block(round)`, `wait_for_block(round)`,
`get_participation_keys()`, `get_participation_key_by_id(id)`,
`generate_participation_keys(address, params)`,
`delete_participation_key_by_id(id)` and `account_information(address)` —
each returning a response with `status_code`, `reason`, `text` and `json()`
(as `requests` responses do). Non-200 answers raise `ApiError`.

## Examples

Parsing the text that algod serves on `/metrics`:

```python
from algorun.metrics import parse_metrics_content

metrics = parse_metrics_content("# TYPE algod_ram_usage gauge\nalgod_ram_usage 0\n")
assert metrics == {"algod_ram_usage": 0}
```

Content that does not start with `#`, or whose values are not integers,
raises `ValueError`.

Tracking the node's sync state:

```python
from algorun.status import State, StatusModel

status = StatusModel()
status.update(5, 10, None, True)   # catching up without a catchpoint
assert status.state == State.SYNCING
status.update(10, 0, None, None)
assert status.state == State.STABLE
```

Building a link that registers an account offline:

```python
from algorun.api import ParticipationKey
from algorun.participation import to_lora_deep_link

link = to_lora_deep_link("tuinet-v1", True, False, ParticipationKey(address="ABC"))
# https://lora.algokit.io/localnet/transaction-wizard?type%5B0%5D=keyreg&sender%5B0%5D=ABC
```

Formatting a byte rate for the status header:

```python
from algorun.ui.status_view import get_bit_rate

get_bit_rate(2048)   # "2 KB/s "
```

## What the package does not do

- It has no command-line program and no terminal event loop: nothing reads
  the keyboard, draws to the screen or runs the commands views return. You
  drive the views yourself with `handle_message` and `view`.
- It has no top-level viewport combining header, pages and modals, no modal
  controller switching between dialogs, and no screen for signing the
  registration transaction (no QR code).
- It ships no algod client; you provide one as described above.

## Requirements

Python 3.10 or later, with `requests`, `wcwidth` and `cryptography`.
The tests run under `pytest` (install the `test` extra).