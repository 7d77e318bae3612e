"""
Video availability checks on watch-page HTML.

Runs before caption extraction: a blocked video's page carries no usable
caption data, and reporting that as a parse failure would be misleading.
"""

from __future__ import annotations

import json
import logging
import re
from typing import NamedTuple

from .errors import ErrorKind, TranscriptError

logger = logging.getLogger(__name__)

_BLOCK_RE = re.compile(r'"playabilityStatus":\s*\{')
_STATUS_RE = re.compile(r'"status":\s*"([^"]+)"')
_REASON_RE = re.compile(r'"reason":\s*"([^"]+)"')


class PlayabilityStatus(NamedTuple):
    """Status and optional reason embedded in the player response."""
    status: str
    reason: str | None = None


def _flat_head(html: str, start: int) -> str:
    """Text of the object from ``start`` up to its first nested or closing brace."""
    end = len(html)
    for brace in ("{", "}"):
        found = html.find(brace, start)
        if found != -1:
            end = min(end, found)
    return html[start:end]


def playability_status(html: str) -> PlayabilityStatus | None:
    """
    Read the embedded playability status.

    Only the ``playabilityStatus`` object is consulted; ``status`` and
    ``reason`` keys elsewhere in the page belong to other objects.

    Returns:
        The status, or None when the page carries no ``playabilityStatus``.
    """
    block = _BLOCK_RE.search(html)
    if not block:
        return None

    try:
        data, _ = json.JSONDecoder().raw_decode(html, block.end() - 1)
    except ValueError:
        data = None

    if isinstance(data, dict):
        status, reason = data.get("status"), data.get("reason")
        if not isinstance(status, str):
            return None
        return PlayabilityStatus(status=status, reason=reason if isinstance(reason, str) else None)

    # Not valid JSON here (escaped or truncated page); read the object's leading keys.
    head = _flat_head(html, block.end())
    status_match = _STATUS_RE.search(head)
    if not status_match:
        return None

    reason_match = _REASON_RE.search(head)
    return PlayabilityStatus(
        status=status_match.group(1),
        reason=reason_match.group(1) if reason_match else None,
    )


def classify_playability(html: str) -> None:
    """
    Raise a categorized error if the page says the video cannot be played.

    Raises:
        TranscriptError: VIDEO_PRIVATE, VIDEO_UNAVAILABLE or VIDEO_NOT_FOUND.
    """
    found = playability_status(html)
    if found is None or found.status == "OK":
        return

    logger.info(f"Playability status {found.status} (reason: {found.reason})")

    if found.status == "LOGIN_REQUIRED":
        raise TranscriptError("Video requires login or is private", ErrorKind.VIDEO_PRIVATE)
    if found.status == "UNPLAYABLE":
        raise TranscriptError(found.reason or "Video unavailable", ErrorKind.VIDEO_UNAVAILABLE)
    if found.status == "ERROR":
        raise TranscriptError("Video not found", ErrorKind.VIDEO_NOT_FOUND)
