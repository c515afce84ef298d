"""Testes para normalização de busca, cursor e carga de resumos."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tests.factories import at, make_message
from view_chats.application.filters import build_session_filter
from view_chats.application.queries import load_session_summaries, normalize_search, parse_cursor
from view_chats.domain.chats import MessageQueryHints, VisitorSettings
from view_chats.domain.errors import ChatValidationError
from view_chats.infra.message_store_memory import (
    InMemoryCategorySettingsStore,
    InMemoryMessageStore,
)


class TestNormalizeSearch:
    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_absent(self, raw):
        assert normalize_search(raw) is None

    def test_trims(self):
        assert normalize_search("  abc  ") == "abc"

    def test_too_short_raises(self):
        with pytest.raises(ChatValidationError) as exc_info:
            normalize_search(" ab ")
        assert exc_info.value.code == "search_too_short"
        assert "3" in exc_info.value.message

    def test_custom_min_length(self):
        assert normalize_search("ab", min_length=2) == "ab"


class TestParseCursor:
    def test_timestamp_and_session_id(self):
        cursor = parse_cursor("2024-05-10T12:05:00.000Z", "abc")
        assert cursor is not None
        assert cursor.last_message_at == at(5)
        assert cursor.session_id == "abc"

    def test_timestamp_only(self):
        cursor = parse_cursor("2024-05-10T12:05:00Z", None)
        assert cursor is not None
        assert cursor.session_id is None

    def test_empty_session_id_is_none(self):
        cursor = parse_cursor("2024-05-10T12:05:00Z", "")
        assert cursor is not None
        assert cursor.session_id is None

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "not-a-date",
            "0001-01-01T00:30:00+01:00",
            "9999-12-31T23:59:59-01:00",
        ],
    )
    def test_invalid_timestamp_means_no_cursor(self, raw):
        assert parse_cursor(raw, "abc") is None


class TestLoadSessionSummaries:
    def test_passes_hints_and_batches_settings_lookup(self):
        message_store = MagicMock(spec=InMemoryMessageStore)
        message_store.fetch_all_messages.return_value = [
            make_message("abc_1", 1),
            make_message("abc_1", 2),
            make_message("xyz_1", 3),
        ]
        settings_store = MagicMock(spec=InMemoryCategorySettingsStore)
        settings_store.lookup_many.return_value = {
            "abc_1": VisitorSettings(session_id="abc_1", type="sales")
        }

        summaries = load_session_summaries(
            message_store, settings_store, build_session_filter(search="abc")
        )

        message_store.fetch_all_messages.assert_called_once_with(
            MessageQueryHints(session_id_prefix="abc", session_id_like="abc%")
        )
        settings_store.lookup_many.assert_called_once_with({"abc_1": None})
        assert [s.session_id for s in summaries] == ["abc_1"]
        assert summaries[0].is_sales is True

    def test_no_messages_skips_settings_lookup(self):
        settings_store = MagicMock(spec=InMemoryCategorySettingsStore)

        summaries = load_session_summaries(
            InMemoryMessageStore(), settings_store, build_session_filter()
        )

        assert summaries == []
        settings_store.lookup_many.assert_not_called()
