"""
Direct watch-page strategy.

Scrapes the public watch page, checks playability, discovers caption tracks
and fetches the chosen track's timed-text XML.
"""

from __future__ import annotations

import logging

import requests
from requests.exceptions import RequestException

from .config import config
from .errors import ErrorKind, TranscriptError
from .extraction import extract_caption_tracks, select_track
from .models import TranscriptResult
from .playability import classify_playability
from .timedtext import ensure_xml_format, parse_timed_text

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class DirectPageStrategy:
    """Resolve transcripts by scraping the watch page."""

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.YOUTUBE_TIMEOUT

    def page_headers(self) -> dict[str, str]:
        # The consent cookie keeps the EU cookie interstitial from replacing the page
        return {
            "Accept-Language": "en-US,en;q=0.9",
            "User-Agent": config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
            "Cookie": config.CONSENT_COOKIE,
        }

    def fetch_page(self, video_id: str) -> str:
        """
        Download the watch page HTML.

        Raises:
            TranscriptError: VIDEO_NOT_FOUND on 404, FETCH_ERROR otherwise.
        """
        url = WATCH_URL.format(video_id=video_id)
        try:
            response = self.session.get(url, headers=self.page_headers(), timeout=self.timeout)
        except RequestException as e:
            raise TranscriptError(f"Failed to fetch video page: {e}", ErrorKind.FETCH_ERROR) from e

        if response.status_code == 404:
            raise TranscriptError("Video not found", ErrorKind.VIDEO_NOT_FOUND)
        if not response.ok:
            raise TranscriptError(
                f"Failed to fetch video page: {response.status_code}", ErrorKind.FETCH_ERROR
            )
        return response.text

    def fetch_captions(self, url: str) -> str:
        """
        Download timed-text XML for a caption track.

        Raises:
            TranscriptError: TRANSCRIPT_FETCH_ERROR on any failure.
        """
        try:
            response = self.session.get(
                ensure_xml_format(url),
                headers={"User-Agent": config.USER_AGENT},
                timeout=self.timeout,
            )
        except RequestException as e:
            raise TranscriptError(f"Failed to fetch transcript: {e}", ErrorKind.TRANSCRIPT_FETCH_ERROR) from e

        if not response.ok:
            raise TranscriptError(
                f"Failed to fetch transcript: {response.status_code}", ErrorKind.TRANSCRIPT_FETCH_ERROR
            )
        return response.text

    def fetch(self, video_id: str) -> TranscriptResult:
        """
        Resolve a transcript from the watch page.

        Returns:
            Success or no-captions result.

        Raises:
            TranscriptError: For fetch failures and unplayable videos.
        """
        html = self.fetch_page(video_id)

        classify_playability(html)

        tracks = extract_caption_tracks(html)
        if not tracks:
            logger.info(f"No caption tracks found for {video_id}")
            return TranscriptResult.no_captions_found()

        track = select_track(tracks)
        if not track.url:
            raise TranscriptError("No caption URL found in track", ErrorKind.PARSE_ERROR)

        logger.debug(f"Selected caption track lang={track.language_code} kind={track.kind} for {video_id}")

        segments = parse_timed_text(self.fetch_captions(track.url))
        if not segments:
            logger.info(f"Caption track for {video_id} contained no text")
            return TranscriptResult.no_captions_found()

        return TranscriptResult.success(segments)
