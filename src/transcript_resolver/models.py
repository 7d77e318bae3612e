"""
Data containers shared across the transcript pipeline.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from .errors import ErrorKind


class CaptionTrack(NamedTuple):
    """One subtitle track advertised on a watch page."""
    url: str
    language_code: str | None = None
    kind: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> CaptionTrack:
        """Build a track from a raw ``captionTracks`` entry."""
        if not isinstance(data, dict):
            raise TypeError(f"Caption track entry is not an object: {data!r}")
        return cls(
            url=data.get("baseUrl") or "",
            language_code=data.get("languageCode"),
            kind=data.get("kind"),
        )

    @property
    def is_generated(self) -> bool:
        return self.kind == "asr"

    @property
    def is_english(self) -> bool:
        return bool(self.language_code) and self.language_code.startswith("en")


class TranscriptSegment(NamedTuple):
    """A single timed utterance."""
    start: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "text": self.text}


class TranscriptResult(NamedTuple):
    """
    Outcome of resolving a transcript.

    Exactly one of three shapes is populated: segments (success),
    ``no_captions`` (the video has no captions), or ``error`` with an
    ``error_code`` (failure). Use the constructors rather than building
    instances by hand.
    """
    segments: tuple[TranscriptSegment, ...] = ()
    raw_text: str = ""
    no_captions: bool = False
    error: str | None = None
    error_code: ErrorKind | None = None

    @classmethod
    def success(cls, segments: list[TranscriptSegment]) -> TranscriptResult:
        segments = tuple(segments)
        return cls(segments=segments, raw_text=" ".join(s.text for s in segments))

    @classmethod
    def no_captions_found(cls) -> TranscriptResult:
        return cls(no_captions=True)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str | None = None) -> TranscriptResult:
        return cls(error=message or kind.code, error_code=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def retryable(self) -> bool:
        return self.error_code is not None and self.error_code.retryable

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON wire shape."""
        if self.error is not None:
            return {
                "segments": [],
                "rawText": "",
                "error": self.error,
                "errorCode": self.error_code.code if self.error_code else ErrorKind.UNKNOWN_ERROR.code,
            }
        return {
            "segments": [s.to_dict() for s in self.segments],
            "rawText": self.raw_text,
            "noCaptions": self.no_captions,
            "error": None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TranscriptResult:
        """Parse the JSON wire shape produced by ``to_dict``."""
        if data.get("error"):
            return cls.failure(ErrorKind.parse(data.get("errorCode")), str(data["error"]))
        if data.get("noCaptions"):
            return cls.no_captions_found()
        segments = [
            TranscriptSegment(start=int(item["start"]), text=str(item["text"]))
            for item in data.get("segments") or []
        ]
        return cls(
            segments=tuple(segments),
            raw_text=data.get("rawText") or " ".join(s.text for s in segments),
        )
