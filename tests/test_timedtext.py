"""
Tests for timed-text XML parsing and entity decoding.
"""

from transcript_resolver.models import TranscriptSegment
from transcript_resolver.timedtext import (
    clean_text,
    decode_entities,
    ensure_xml_format,
    parse_timed_text,
)


class TestDecodeEntities:
    """Test HTML entity decoding."""

    def test_standard_entities(self):
        assert decode_entities("&amp; &lt; &gt; &quot; &#39; &apos;") == "& < > \" ' '"

    def test_idempotent_on_decoded_text(self):
        samples = ["Tom & Jerry's <show>", 'She said "hi"', "plain text", ""]
        for text in samples:
            once = decode_entities(text)
            assert decode_entities(once) == once

    def test_single_pass(self):
        assert decode_entities("&amp;lt;") == "&lt;"


class TestCleanText:
    """Test whitespace handling."""

    def test_collapses_newlines_and_trims(self):
        assert clean_text("  line one\nline two\r\n ") == "line one line two"


class TestEnsureXmlFormat:
    """Test forcing the XML caption format."""

    def test_appends_format(self):
        url = "https://www.youtube.com/api/timedtext?v=x&lang=en"
        assert ensure_xml_format(url) == url + "&fmt=srv1"

    def test_keeps_existing_format(self):
        url = "https://www.youtube.com/api/timedtext?v=x&fmt=json3"
        assert ensure_xml_format(url) == url

    def test_url_without_query(self):
        assert ensure_xml_format("https://x/timedtext") == "https://x/timedtext?fmt=srv1"


class TestParseTimedText:
    """Test segment parsing."""

    def test_parses_segments(self, timed_text_xml):
        segments = parse_timed_text(timed_text_xml)

        assert segments == [
            TranscriptSegment(start=0, text="Hello everyone"),
            TranscriptSegment(start=2, text="Tom & Jerry's show"),
            TranscriptSegment(start=7, text='"Quoted" <b>'),
        ]

    def test_drops_empty_text(self, timed_text_xml):
        assert all(s.text for s in parse_timed_text(timed_text_xml))

    def test_starts_are_non_negative_and_ordered(self, timed_text_xml):
        starts = [s.start for s in parse_timed_text(timed_text_xml)]
        assert all(start >= 0 for start in starts)
        assert starts == sorted(starts)

    def test_negative_start_clamped(self):
        segments = parse_timed_text('<text start="-0.4" dur="1">early</text>')
        assert segments == [TranscriptSegment(start=0, text="early")]

    def test_bad_start_skipped(self):
        xml = '<text start="abc">bad</text><text start="3.9">good</text>'
        assert parse_timed_text(xml) == [TranscriptSegment(start=3, text="good")]

    def test_no_text_elements(self):
        assert parse_timed_text("<transcript></transcript>") == []

    def test_srv3_paragraphs(self):
        xml = (
            '<timedtext format="3"><body>'
            '<p t="1500" d="2000">Hello &amp; welcome</p>'
            '<p t="4200" d="900"><s ac="0">split</s><s t="300"> words</s></p>'
            '<p t="5000" d="100"></p>'
            "</body></timedtext>"
        )
        assert parse_timed_text(xml) == [
            TranscriptSegment(start=1, text="Hello & welcome"),
            TranscriptSegment(start=4, text="split words"),
        ]
