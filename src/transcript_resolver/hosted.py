"""
Hosted transcript API strategy.

Delegates to a third-party service that deals with bot detection itself.
Without an API key the strategy is simply switched off.
"""

from __future__ import annotations

import logging
import math

import requests
from requests.exceptions import RequestException

from .config import config
from .models import TranscriptSegment

logger = logging.getLogger(__name__)


class HostedExtractionStrategy:
    """Fetch transcripts from the hosted transcript API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else config.SUPADATA_API_KEY
        self.base_url = (base_url or config.SUPADATA_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.HOSTED_TIMEOUT

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def fetch(self, video_id: str) -> list[TranscriptSegment] | None:
        """
        Fetch transcript segments for a video.

        Args:
            video_id: YouTube video ID.

        Returns:
            Non-empty segment list, or None when the strategy is not
            configured or yielded nothing.
        """
        if not self.configured:
            logger.debug("Hosted transcript API key not configured, skipping")
            return None

        try:
            response = self.session.get(
                f"{self.base_url}/youtube/transcript",
                params={"url": f"https://youtube.com/watch?v={video_id}"},
                headers={"x-api-key": self.api_key},
                timeout=self.timeout,
            )
        except RequestException as e:
            logger.warning(f"Hosted transcript request failed for {video_id}: {e}")
            return None

        if not response.ok:
            logger.warning(
                f"Hosted transcript API error for {video_id} ({response.status_code}): {response.text[:200]}"
            )
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Hosted transcript API returned invalid JSON for {video_id}: {e}")
            return None

        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list) or not content:
            logger.info(f"Hosted transcript API returned no content for {video_id}")
            return None

        segments = []
        for item in content:
            try:
                text = str(item.get("text") or "").strip()
                offset_ms = float(item.get("offset") or 0)
            except (AttributeError, TypeError, ValueError):
                logger.debug(f"Skipping malformed hosted segment: {item!r}")
                continue
            if text:
                segments.append(TranscriptSegment(start=max(0, math.floor(offset_ms / 1000)), text=text))

        if not segments:
            return None

        # Stable sort keeps utterances sharing a start second in API order
        segments.sort(key=lambda s: s.start)

        logger.info(f"Hosted transcript API returned {len(segments)} segments for {video_id} (lang: {data.get('lang')})")
        return segments
