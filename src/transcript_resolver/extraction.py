"""
Caption-track discovery in watch-page HTML.

The watch page embeds its player configuration as JSON whose layout and
escaping change without notice, so several independent strategies are tried
in priority order. Each strategy is a plain ``(html) -> list | None``
function; add new ones to ``STRATEGIES`` without touching the others.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional, Sequence

from .models import CaptionTrack

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[list]]

_HEX_ESCAPE_RE = re.compile(r"\\x([0-9A-Fa-f]{2})")

_FIELD_RE = re.compile(r'"captionTracks":\s*(\[.*?\])')
_PLAYER_RESPONSE_RE = re.compile(r"ytInitialPlayerResponse\s*=\s*(\{.+?\});")
_BOUNDED_RE = re.compile(r'\{"captionTracks":(.*?),"audioTracks"')
_LOOKAHEAD_RE = re.compile(r'"captionTracks":\s*(\[[\s\S]*?\])(?=\s*,\s*"[a-zA-Z])')


def decode_hex_escapes(text: str) -> str:
    """Turn ``\\xNN`` byte escapes into the characters they encode."""
    return _HEX_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), text)


def _unescape_quotes(text: str) -> str:
    return text.replace('\\"', '"').replace("\\\\", "\\")


def field_scoped(html: str) -> list[Any] | None:
    """Non-greedy match of the ``captionTracks`` array itself."""
    match = _FIELD_RE.search(html)
    if not match:
        return None
    return json.loads(_unescape_quotes(decode_hex_escapes(match.group(1))))


def player_response(html: str) -> list[Any] | None:
    """Parse the whole ``ytInitialPlayerResponse`` object and walk to the tracks."""
    match = _PLAYER_RESPONSE_RE.search(html)
    if not match:
        return None
    data = json.loads(decode_hex_escapes(match.group(1)))
    return (
        ((data.get("captions") or {})
         .get("playerCaptionsTracklistRenderer") or {})
        .get("captionTracks")
    )


def bounded_context(html: str) -> list[Any] | None:
    """Match between ``captionTracks`` and its ``audioTracks`` neighbour."""
    match = _BOUNDED_RE.search(html)
    if not match:
        return None
    return json.loads(decode_hex_escapes(match.group(1)))


def flexible_lookahead(html: str) -> list[Any] | None:
    """Match the array up to whichever JSON key follows it."""
    match = _LOOKAHEAD_RE.search(html)
    if not match:
        return None
    return json.loads(_unescape_quotes(decode_hex_escapes(match.group(1))))


STRATEGIES: tuple[Strategy, ...] = (
    field_scoped,
    player_response,
    bounded_context,
    flexible_lookahead,
)


def extract_caption_tracks(
    html: str,
    strategies: Sequence[Strategy] = STRATEGIES,
) -> list[CaptionTrack] | None:
    """
    Recover the list of caption tracks from watch-page HTML.

    Args:
        html: Watch page markup.
        strategies: Extraction functions, tried in order.

    Returns:
        Tracks from the first strategy yielding a non-empty list, or None
        when every strategy comes up empty.
    """
    for strategy in strategies:
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            raw = strategy(html)
            if not isinstance(raw, list) or not raw:
                logger.debug(f"Caption strategy {name} found nothing")
                continue
            tracks = [CaptionTrack.from_json(item) for item in raw]
        except Exception as e:
            logger.debug(f"Caption strategy {name} failed: {type(e).__name__}: {e}")
            continue

        logger.info(f"Caption strategy {name} found {len(tracks)} track(s)")
        return tracks

    return None


def select_track(tracks: Sequence[CaptionTrack]) -> CaptionTrack | None:
    """
    Pick the best caption track.

    Preference: manual English, then any manual track, then any English
    track, then the first one listed. Ties go to document order.
    """
    if not tracks:
        return None

    tiers = (
        lambda t: not t.is_generated and t.is_english,
        lambda t: not t.is_generated,
        lambda t: t.is_english,
    )
    for matches in tiers:
        for track in tracks:
            if matches(track):
                return track
    return tracks[0]
