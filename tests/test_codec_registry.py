"""Tests for the codec registry."""

import pytest
from content_converter.codecs import (
    CODEC_REGISTRY,
    JSONCodec,
    XMLCodec,
    available_formats,
    detect_format,
    get_codec,
)
from content_converter.types import CodecInterface, ErrorType, UnsupportedFormatError


class TestCodecRegistry:
    """Tests for format selection."""

    def test_available_formats(self):
        """Test that JSON and XML are registered."""
        assert available_formats() == ["json", "xml"]
        assert set(CODEC_REGISTRY) == {"json", "xml"}

    def test_get_codec_is_case_insensitive(self):
        """Test codec lookup by name."""
        assert isinstance(get_codec("json"), JSONCodec)
        assert isinstance(get_codec("XML"), XMLCodec)

    def test_get_codec_returns_fresh_instances(self):
        """Test that every lookup creates a new codec."""
        first = get_codec("json")
        second = get_codec("json")

        assert first is not second
        assert isinstance(first, CodecInterface)

    def test_get_codec_passes_options(self):
        """Test that keyword arguments reach the codec factory."""
        codec = get_codec("xml", encoding="utf-16")

        assert codec.encoding == "utf-16"

    def test_unknown_format(self):
        """Test that unknown names raise UnsupportedFormatError."""
        with pytest.raises(UnsupportedFormatError, match="yaml") as exc_info:
            get_codec("yaml")

        assert exc_info.value.error_type == ErrorType.FORMAT
        assert "json, xml" in str(exc_info.value)

    def test_detect_format(self):
        """Test format detection from file suffixes."""
        assert detect_format("data/input.json") == "json"
        assert detect_format("REPORT.XML") == "xml"

    def test_detect_format_unknown_suffix(self):
        """Test that unknown or missing suffixes are rejected."""
        with pytest.raises(UnsupportedFormatError):
            detect_format("notes.txt")

        with pytest.raises(UnsupportedFormatError):
            detect_format("-")
