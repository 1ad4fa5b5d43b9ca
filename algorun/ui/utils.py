"""Small formatting helpers and explanatory messages."""

from __future__ import annotations

import base64
from typing import Optional

from .style import bold_underline


def is_zeros(data: bytes) -> bool:
    """True when every byte is zero (also for empty input)."""
    return not any(data)


def url_encode_bytes_or_none(data: Optional[bytes]) -> Optional[str]:
    """Unpadded URL-safe base64 of ``data``, or None if empty or all zero."""
    if not data or is_zeros(data):
        return None
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def int_to_str(number: int) -> str:
    return str(number)


def str_or_na(value: Optional[int]) -> str:
    """Format ``value`` or return ``N/A`` when it is missing."""
    return "N/A" if value is None else int_to_str(value)


NODE_NOT_FOUND = (
    "\n\nExplanation: algorun could not find your node automatically. Provide "
    "--algod-endpoint and --algod-token, or set the goal-compatible ALGORAND_DATA "
    "environment variable to the algod data directory, e.g. /var/lib/algorand\n"
)

UNREACHABLE = (
    "\n\nExplanation: Could not reach algod. Check that algod is running and the "
    "provided connection arguments.\n"
)

TOKEN_INVALID = (
    "\n\nExplanation: algod token is invalid. Algorun requires the "
    + bold_underline("admin token")
    + " for algod. You can find this in the algod.admin.token file in the algod data directory.\n"
)

TOKEN_NOT_ADMIN = (
    "\n\nExplanation: algorun requires the "
    + bold_underline("admin token")
    + " for algod. You can find this in the algod.admin.token file in the algod data directory.\n"
)