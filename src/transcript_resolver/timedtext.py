"""
Timed-text caption parsing.

The format is simple enough that a regex scan over ``<text>`` elements is
sufficient; no XML parser is involved. Captions are requested as ``srv1``,
which carries ``<text start="seconds">`` elements. Payloads in ``srv3``
(``<p t="milliseconds">``) are read as a fallback for track URLs that already
pin that format.
"""

from __future__ import annotations

import logging
import math
import re

from .models import TranscriptSegment

logger = logging.getLogger(__name__)

_TEXT_RE = re.compile(r'<text start="([^"]+)"[^>]*>([^<]*)</text>')
_SRV3_RE = re.compile(r'<p t="([^"]+)"[^>]*>(.*?)</p>', re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))

XML_FORMAT = "srv1"


def decode_entities(text: str) -> str:
    """
    Decode the standard HTML entities found in caption bodies.

    Single pass, so ``&amp;lt;`` decodes to ``&lt;`` and not ``<``.
    """
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def clean_text(text: str) -> str:
    """Decode entities, collapse newlines to spaces and trim."""
    return decode_entities(text).replace("\r\n", " ").replace("\n", " ").strip()


def ensure_xml_format(url: str) -> str:
    """Force the timed-text endpoint to answer in XML."""
    if "fmt=" in url:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}fmt={XML_FORMAT}"


def _segments(matches, scale: float) -> list[TranscriptSegment]:
    segments = []

    for raw_start, body in matches:
        try:
            start = float(raw_start) / scale
        except ValueError:
            logger.debug(f"Skipping caption with bad start attribute: {raw_start!r}")
            continue

        if math.isnan(start) or math.isinf(start):
            continue

        text = clean_text(body)
        if text:
            segments.append(TranscriptSegment(start=max(0, math.floor(start)), text=text))

    return segments


def parse_timed_text(xml: str) -> list[TranscriptSegment]:
    """
    Parse timed-text XML into ordered transcript segments.

    Args:
        xml: Raw caption payload.

    Returns:
        Segments in document order, with empty texts dropped.
    """
    segments = _segments(_TEXT_RE.findall(xml), 1)
    if segments or "<text " in xml:
        return segments

    # srv3: millisecond offsets, body split across <s> word spans
    return _segments(
        ((t, _TAG_RE.sub("", body)) for t, body in _SRV3_RE.findall(xml)), 1000
    )
