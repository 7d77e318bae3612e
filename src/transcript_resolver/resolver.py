"""
Transcript resolution orchestrator.

Tries the hosted API first and falls back to scraping the watch page.
Always returns a TranscriptResult; nothing escapes as an exception.
"""

from __future__ import annotations

import logging

from .direct import DirectPageStrategy
from .errors import ErrorKind, TranscriptError
from .hosted import HostedExtractionStrategy
from .models import TranscriptResult

logger = logging.getLogger(__name__)


class TranscriptResolver:
    """Resolve a video ID into transcript segments or a categorized failure."""

    def __init__(
        self,
        hosted: HostedExtractionStrategy | None = None,
        direct: DirectPageStrategy | None = None,
    ):
        self.hosted = hosted or HostedExtractionStrategy()
        self.direct = direct or DirectPageStrategy()

    def resolve(self, video_id: str | None) -> TranscriptResult:
        """
        Resolve a transcript for a video.

        Args:
            video_id: 11-character YouTube video ID.

        Returns:
            Success, no-captions or failure result.
        """
        if not video_id or not str(video_id).strip():
            return TranscriptResult.failure(ErrorKind.MISSING_VIDEO_ID, "No videoId provided")

        video_id = str(video_id).strip()

        try:
            segments = self.hosted.fetch(video_id)
            if segments:
                logger.info(f"Fetched transcript for {video_id} via hosted API")
                return TranscriptResult.success(segments)

            logger.info(f"Hosted API unavailable for {video_id}, falling back to direct fetch")
            result = self.direct.fetch(video_id)

        except TranscriptError as e:
            logger.error(f"Transcript fetch failed for {video_id}: [{e.kind}] {e}")
            return TranscriptResult.failure(e.kind, str(e))

        except Exception as e:
            logger.exception(f"Unexpected error resolving transcript for {video_id}")
            return TranscriptResult.failure(ErrorKind.UNKNOWN_ERROR, str(e) or "Failed to fetch transcript")

        if result.ok and not result.no_captions:
            logger.info(f"Fetched {len(result.segments)} segments for {video_id} via watch page")
        return result
