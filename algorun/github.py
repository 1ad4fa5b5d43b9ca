"""Lookup of the latest node release for a channel."""

from __future__ import annotations

import json
from typing import Any, Optional

RELEASES_URL = "https://api.github.com/repos/algorand/go-algorand/releases"


def get_go_algorand_release(channel: str, http: Any) -> Optional[str]:
    """Return the newest release tag containing ``channel``, or None."""
    response = http.get(RELEASES_URL)
    releases = json.loads(response.text)
    for release in releases:
        tag_name = release["tag_name"]
        if channel in tag_name:
            return tag_name
    return None