"""
Error taxonomy for transcript resolution.

Every failure the resolver reports is tagged with an ErrorKind. Whether a
caller should retry is a property of the kind itself.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Categorized failure reasons, with retryability and HTTP status."""

    # Client mistakes
    MISSING_VIDEO_ID = ("MISSING_VIDEO_ID", False, 400)
    INVALID_REQUEST = ("INVALID_REQUEST", False, 400)

    # Permanent video states
    VIDEO_NOT_FOUND = ("VIDEO_NOT_FOUND", False, 404)
    VIDEO_PRIVATE = ("VIDEO_PRIVATE", False, 403)
    VIDEO_UNAVAILABLE = ("VIDEO_UNAVAILABLE", False, 403)

    # Presumed transient
    FETCH_ERROR = ("FETCH_ERROR", True, 502)
    PARSE_ERROR = ("PARSE_ERROR", True, 500)
    TRANSCRIPT_FETCH_ERROR = ("TRANSCRIPT_FETCH_ERROR", True, 502)
    INVOKE_ERROR = ("INVOKE_ERROR", True, 500)
    NETWORK_ERROR = ("NETWORK_ERROR", True, 503)
    UNKNOWN_ERROR = ("UNKNOWN_ERROR", True, 500)

    def __init__(self, code: str, retryable: bool, http_status: int):
        self.code = code
        self.retryable = retryable
        self.http_status = http_status

    def __str__(self) -> str:
        return self.code

    @classmethod
    def parse(cls, value: str | ErrorKind | None) -> ErrorKind:
        """
        Map a wire error code to an ErrorKind.

        Unrecognized codes (including a remote ``INTERNAL_ERROR``) become
        UNKNOWN_ERROR so they are still treated as retryable.
        """
        if isinstance(value, ErrorKind):
            return value
        if value:
            for kind in cls:
                if kind.code == value:
                    return kind
        return cls.UNKNOWN_ERROR


class TranscriptError(Exception):
    """Raised inside the pipeline for a categorized failure."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNKNOWN_ERROR):
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind.retryable
