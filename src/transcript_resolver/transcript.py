"""
Caller-side transcript helpers.

Wraps a resolver (local, or a remote transcript service) with video ID
parsing, a deadline, and retries with exponential backoff for retryable
failures.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from typing import NamedTuple, Sequence

import requests
from requests.exceptions import RequestException

from .config import config
from .direct import DirectPageStrategy
from .errors import ErrorKind, TranscriptError
from .hosted import HostedExtractionStrategy
from .models import TranscriptResult, TranscriptSegment
from .resolver import TranscriptResolver

logger = logging.getLogger(__name__)

# Video ID extraction regex
_VIDEO_ID_RE = re.compile(
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)([\w\-]{11})"
)
_BARE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")


class VideoMetadata(NamedTuple):
    """Basic video information from the oEmbed endpoint."""
    title: str
    author: str
    thumbnail_url: str
    error: str | None = None


def extract_video_id(url_or_id: str) -> str:
    """
    Extract YouTube video ID from URL or return the ID if already extracted.

    Args:
        url_or_id: YouTube URL or video ID.

    Returns:
        11-character video ID.

    Raises:
        TranscriptError: If unable to extract valid video ID.
    """
    cleaned = (url_or_id or "").strip()
    if not cleaned:
        raise TranscriptError("Empty video URL/ID provided", ErrorKind.MISSING_VIDEO_ID)

    match = _VIDEO_ID_RE.search(cleaned)
    if match:
        return match.group(1)

    if _BARE_ID_RE.match(cleaned):
        return cleaned

    raise TranscriptError(f"Unable to extract video ID from: {url_or_id}", ErrorKind.INVALID_REQUEST)


class RemoteResolver:
    """Resolve transcripts through a running transcript service (``POST /transcript``)."""

    def __init__(
        self,
        service_url: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.url = f"{service_url.rstrip('/')}/transcript"
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.HOSTED_TIMEOUT

    def resolve(self, video_id: str | None) -> TranscriptResult:
        try:
            response = self.session.post(self.url, json={"videoId": video_id}, timeout=self.timeout)
            data = response.json()
        except (RequestException, ValueError) as e:
            logger.warning(f"Transcript service call failed for {video_id}: {e}")
            return TranscriptResult.failure(ErrorKind.INVOKE_ERROR, str(e) or "Failed to fetch transcript")

        if not isinstance(data, dict) or (not response.ok and not data.get("error")):
            return TranscriptResult.failure(
                ErrorKind.INVOKE_ERROR, f"Unexpected transcript service response ({response.status_code})"
            )

        try:
            return TranscriptResult.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed transcript service response for {video_id}: {e}")
            return TranscriptResult.failure(ErrorKind.INVOKE_ERROR, f"Malformed transcript service response: {e}")


def default_resolver(deadline: float | None = None, service_url: str | None = None):
    """
    Build the resolver ``fetch_transcript`` uses when none is given.

    Every outbound request is capped at the deadline, so work abandoned by a
    timed-out attempt stops shortly after it.

    Args:
        deadline: Per-attempt deadline in seconds; falsy for no cap.
        service_url: Transcript service to call, defaults to
            config.TRANSCRIPT_SERVICE_URL. Without one, resolve locally.
    """
    service_url = service_url or config.TRANSCRIPT_SERVICE_URL
    hosted_timeout = config.HOSTED_TIMEOUT
    page_timeout = config.YOUTUBE_TIMEOUT
    if deadline:
        hosted_timeout = min(hosted_timeout, deadline)
        page_timeout = min(page_timeout, deadline)

    if service_url:
        return RemoteResolver(service_url, timeout=hosted_timeout)

    return TranscriptResolver(
        hosted=HostedExtractionStrategy(timeout=hosted_timeout),
        direct=DirectPageStrategy(timeout=page_timeout),
    )


def _resolve_with_deadline(resolver, video_id: str, deadline: float | None) -> TranscriptResult:
    if not deadline:
        return resolver.resolve(video_id)

    outcome = {}

    def run():
        try:
            outcome["result"] = resolver.resolve(video_id)
        except Exception as e:
            outcome["error"] = e

    # Daemon worker: an abandoned request must not hold up interpreter exit
    worker = threading.Thread(target=run, name=f"resolve-{video_id}", daemon=True)
    worker.start()
    worker.join(deadline)

    if worker.is_alive():
        logger.warning(f"Transcript resolution for {video_id} timed out after {deadline}s")
        return TranscriptResult.failure(ErrorKind.INVOKE_ERROR, f"Request timed out after {deadline}s")

    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]


def fetch_transcript(
    video_id: str,
    max_attempts: int | None = None,
    base_delay: float | None = None,
    deadline: float | None = None,
    resolver=None,
    service_url: str | None = None,
) -> TranscriptResult:
    """
    Fetch a transcript, retrying transient failures.

    Args:
        video_id: YouTube video ID.
        max_attempts: Total attempts, defaults to config.MAX_ATTEMPTS.
        base_delay: First backoff delay in seconds, doubled per attempt.
        deadline: Per-attempt timeout in seconds, defaults to config.FETCH_DEADLINE.
        resolver: Object with a ``resolve(video_id)`` method, defaults to
            ``default_resolver(deadline, service_url)``.
        service_url: Transcript service to call instead of resolving locally.

    Returns:
        The first success, no-captions or non-retryable result, otherwise
        the last failure.
    """
    if max_attempts is None:
        max_attempts = config.MAX_ATTEMPTS
    if base_delay is None:
        base_delay = config.RETRY_BASE_DELAY
    if deadline is None:
        deadline = config.FETCH_DEADLINE
    if resolver is None:
        resolver = default_resolver(deadline, service_url)

    result = TranscriptResult.failure(ErrorKind.UNKNOWN_ERROR, "Failed to fetch transcript")

    for attempt in range(1, max(1, max_attempts) + 1):
        try:
            result = _resolve_with_deadline(resolver, video_id, deadline)
        except Exception as e:
            result = TranscriptResult.failure(ErrorKind.NETWORK_ERROR, str(e) or "Network error")

        if result.ok or not result.retryable:
            return result

        if attempt < max_attempts:
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(
                f"Transcript fetch for {video_id} failed with {result.error_code} "
                f"(attempt {attempt}/{max_attempts}), retrying in {delay:.1f}s"
            )
            time.sleep(delay)

    logger.error(f"Giving up on transcript for {video_id}: [{result.error_code}] {result.error}")
    return result


def fetch_video_metadata(video_id: str) -> VideoMetadata:
    """
    Fetch video title and author from YouTube using oembed API.

    Args:
        video_id: YouTube video ID.

    Returns:
        VideoMetadata, with placeholder values and ``error`` set on failure.
    """
    try:
        url = f"https://www.youtube.com/oembed?url=https://www.youtube.com/watch?v={video_id}&format=json"

        response = requests.get(url, timeout=config.YOUTUBE_TIMEOUT)
        response.raise_for_status()

        data = response.json()
        logger.debug(f"Fetched metadata for {video_id}: {data.get('title')}")
        return VideoMetadata(
            title=data.get("title") or "Unknown Title",
            author=data.get("author_name") or "Unknown Author",
            thumbnail_url=f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg",
        )

    except Exception as e:
        logger.warning(f"Failed to fetch metadata for {video_id}: {e}")
        return VideoMetadata(
            title="Unknown Title",
            author="Unknown Author",
            thumbnail_url=f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg",
            error=str(e),
        )


def transcript_context(
    segments: Sequence[TranscriptSegment],
    timestamp: float,
    window: float = 30,
) -> str:
    """
    Get transcript text around a timestamp.

    Args:
        segments: Transcript segments.
        timestamp: Position in seconds.
        window: Seconds to include on either side.

    Returns:
        Space-joined text of segments starting inside the window.
    """
    if not segments:
        return ""

    start = max(0, timestamp - window)
    end = timestamp + window

    return " ".join(s.text for s in segments if start <= s.start <= end)
