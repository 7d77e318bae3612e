"""
Tests for playability classification.
"""

import pytest

from transcript_resolver.errors import ErrorKind, TranscriptError
from transcript_resolver.playability import (
    PlayabilityStatus,
    classify_playability,
    playability_status,
)


def _page(status, reason=None):
    body = f'"status":"{status}"'
    if reason:
        body += f',"reason":"{reason}"'
    return '<script>var ytInitialPlayerResponse = {"playabilityStatus":{' + body + "}};</script>"


class TestPlayabilityStatus:
    """Test reading the embedded status."""

    def test_reads_status_and_reason(self):
        assert playability_status(_page("UNPLAYABLE", "Blocked in your country")) == PlayabilityStatus(
            status="UNPLAYABLE", reason="Blocked in your country"
        )

    def test_absent_status_block(self):
        assert playability_status('<html>"status":"ERROR"</html>') is None

    def test_ignores_status_outside_block(self):
        html = '{"uploadJob":{"status":"ERROR"}}' + _page("OK")
        assert playability_status(html) == PlayabilityStatus(status="OK")

    def test_ignores_reason_outside_block(self):
        html = '{"videoDetails":{"reason":"unrelated"}}' + _page("UNPLAYABLE", "Blocked in your country")
        assert playability_status(html).reason == "Blocked in your country"

    def test_reason_after_nested_object(self):
        html = (
            '{"playabilityStatus":{"status":"UNPLAYABLE","errorScreen":{"status":"x"},'
            '"reason":"Private video"}}'
        )
        assert playability_status(html) == PlayabilityStatus(status="UNPLAYABLE", reason="Private video")

    def test_unparseable_block_reads_leading_keys(self):
        html = '"playabilityStatus":{"status":"LOGIN_REQUIRED","reason":"Sign in",\\x22broken'
        assert playability_status(html) == PlayabilityStatus(status="LOGIN_REQUIRED", reason="Sign in")

    def test_unparseable_block_stops_at_nested_object(self):
        html = '"playabilityStatus":{"errorScreen":{"status":"ERROR"} broken'
        assert playability_status(html) is None


class TestClassifyPlayability:
    """Test mapping statuses to error kinds."""

    def test_ok_passes(self):
        classify_playability(_page("OK"))

    def test_login_required_is_private(self):
        with pytest.raises(TranscriptError) as exc_info:
            classify_playability(_page("LOGIN_REQUIRED"))
        assert exc_info.value.kind is ErrorKind.VIDEO_PRIVATE

    def test_unplayable_uses_page_reason(self):
        with pytest.raises(TranscriptError, match="Blocked in your country") as exc_info:
            classify_playability(_page("UNPLAYABLE", "Blocked in your country"))
        assert exc_info.value.kind is ErrorKind.VIDEO_UNAVAILABLE

    def test_unplayable_default_reason(self):
        with pytest.raises(TranscriptError, match="Video unavailable"):
            classify_playability(_page("UNPLAYABLE"))

    def test_error_is_not_found(self):
        with pytest.raises(TranscriptError) as exc_info:
            classify_playability(_page("ERROR"))
        assert exc_info.value.kind is ErrorKind.VIDEO_NOT_FOUND

    def test_other_status_passes(self):
        classify_playability(_page("LIVE_STREAM_OFFLINE"))

    def test_page_without_status(self):
        classify_playability("<html><body>plain</body></html>")

    def test_unrelated_error_status_does_not_block(self):
        classify_playability('{"uploadJob":{"status":"ERROR"}}' + _page("OK"))

    def test_unplayable_reason_comes_from_block(self):
        html = '{"videoDetails":{"reason":"unrelated"}}' + _page("UNPLAYABLE", "Blocked in your country")
        with pytest.raises(TranscriptError, match="Blocked in your country"):
            classify_playability(html)
