"""Testes para parse/formatação de timestamps."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from view_chats.utils.timestamps import ensure_utc, format_timestamp, parse_timestamp


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2024-05-10T12:00:00Z") == datetime(2024, 5, 10, 12, tzinfo=UTC)

    def test_offset_converted_to_utc(self):
        parsed = parse_timestamp("2024-05-10T09:00:00-03:00")
        assert parsed == datetime(2024, 5, 10, 12, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-05-10T12:00:00") == datetime(2024, 5, 10, 12, tzinfo=UTC)

    def test_microseconds(self):
        parsed = parse_timestamp("2024-05-10T12:00:00.123456Z")
        assert parsed is not None
        assert parsed.microsecond == 123456

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "   ",
            "yesterday",
            "2024-13-45",
            "0001-01-01T00:00:00+01:00",
            "9999-12-31T23:59:59-01:00",
        ],
    )
    def test_invalid_returns_none(self, raw):
        assert parse_timestamp(raw) is None


class TestFormatTimestamp:
    def test_milliseconds_when_exact(self):
        value = datetime(2024, 5, 10, 12, 0, 0, 120000, tzinfo=UTC)
        assert format_timestamp(value) == "2024-05-10T12:00:00.120Z"

    def test_microseconds_preserved(self):
        value = datetime(2024, 5, 10, 12, 0, 0, 123456, tzinfo=UTC)
        assert format_timestamp(value) == "2024-05-10T12:00:00.123456Z"

    def test_converts_offset_to_z(self):
        value = datetime(2024, 5, 10, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert format_timestamp(value) == "2024-05-10T12:00:00.000Z"

    def test_format_then_parse_is_exact(self):
        value = datetime(2024, 5, 10, 12, 0, 0, 987654, tzinfo=UTC)
        assert parse_timestamp(format_timestamp(value)) == value


def test_ensure_utc_naive():
    assert ensure_utc(datetime(2024, 1, 1)).tzinfo == UTC
