"""
Utility functions for slugification, transcript formatting and file output.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Sequence

from .models import TranscriptResult, TranscriptSegment

OUTPUT_FORMATS = ("text", "timestamps", "json")


def slugify(text: str, max_length: int = 50) -> str:
    """
    Convert text to a filesystem-safe slug.

    Args:
        text: Text to slugify.
        max_length: Maximum length of the resulting slug.

    Returns:
        Slugified string safe for use as filename.
    """
    slug = re.sub(r'[^\w\s-]', '', text.lower())
    slug = re.sub(r'[-\s]+', '-', slug)
    slug = slug.strip('-')

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip('-')

    if not slug:
        slug = "untitled"

    return slug


def format_timestamp(seconds: int) -> str:
    """Format seconds as M:SS, or H:MM:SS past the hour."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_segments(segments: Sequence[TranscriptSegment]) -> str:
    """One ``[M:SS] text`` line per segment."""
    return "\n".join(f"[{format_timestamp(s.start)}] {s.text}" for s in segments)


def format_transcript(result: TranscriptResult, output_format: str = "text") -> str:
    """
    Render a transcript result for display or saving.

    Args:
        result: Resolved transcript.
        output_format: One of ``text``, ``timestamps`` or ``json``.

    Returns:
        Rendered transcript.

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "json":
        return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if output_format == "timestamps":
        return format_segments(result.segments)
    if output_format == "text":
        return result.raw_text
    raise ValueError(f"Unknown output format: {output_format}")


def save_transcript(result: TranscriptResult, file_path: Path, output_format: str = "text") -> Path:
    """
    Write a rendered transcript to disk.

    Returns:
        Path to the saved file.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(format_transcript(result, output_format) + "\n", encoding="utf-8")
    return file_path


def read_video_list(file_path: Path) -> list[str]:
    """
    Read and parse a video list file.

    Args:
        file_path: Path to the video list file.

    Returns:
        List of video URLs/IDs.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file is empty or invalid.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Video list file not found: {file_path}")

    content = file_path.read_text(encoding="utf-8").strip()
    if not content:
        raise ValueError(f"Video list file is empty: {file_path}")

    # Skip empty lines and comments
    videos = []
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            videos.append(line)

    if not videos:
        raise ValueError(f"No valid video URLs/IDs found in: {file_path}")

    return videos
