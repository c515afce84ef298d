"""Testes para a paginação por keyset."""

from __future__ import annotations

import pytest

from tests.factories import at, make_summary
from view_chats.application.pagination import (
    canonical_order,
    clamp_limit,
    cursor_from,
    is_after_cursor,
    paginate,
)
from view_chats.domain.chats import ChatListCursor


def _ids(summaries):
    return [summary.session_id for summary in summaries]


class TestClampLimit:
    """Interpretação do parâmetro limit."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, 50),
            ("", 50),
            ("abc", 50),
            ("10", 10),
            ("10abc", 10),
            (" 7", 7),
            ("0", 1),
            ("-5", 1),
            ("1000", 200),
            (200, 200),
            (3, 3),
        ],
    )
    def test_clamp(self, raw, expected):
        assert clamp_limit(raw, default=50, maximum=200) == expected

    def test_bool_uses_default(self):
        assert clamp_limit(True, default=25, maximum=200) == 25


class TestCanonicalOrder:
    def test_newest_first_then_session_id_desc(self):
        summaries = [
            make_summary("a", 1),
            make_summary("b", 5),
            make_summary("c", 5),
            make_summary("d", 3),
        ]
        assert _ids(canonical_order(summaries)) == ["c", "b", "d", "a"]

    def test_none_timestamps_last(self):
        summaries = [make_summary("x", None), make_summary("a", 1), make_summary("y", None)]
        assert _ids(canonical_order(summaries)) == ["a", "y", "x"]


class TestIsAfterCursor:
    def test_older_timestamp_is_after(self):
        cursor = ChatListCursor(last_message_at=at(5), session_id="m")
        assert is_after_cursor(make_summary("z", 4), cursor)

    def test_same_timestamp_uses_session_id(self):
        cursor = ChatListCursor(last_message_at=at(5), session_id="m")
        assert is_after_cursor(make_summary("a", 5), cursor)
        assert not is_after_cursor(make_summary("m", 5), cursor)
        assert not is_after_cursor(make_summary("z", 5), cursor)

    def test_newer_is_never_after(self):
        cursor = ChatListCursor(last_message_at=at(5), session_id="m")
        assert not is_after_cursor(make_summary("a", 6), cursor)

    def test_timestamp_only_cursor_is_strict(self):
        cursor = ChatListCursor(last_message_at=at(5))
        assert not is_after_cursor(make_summary("a", 5), cursor)
        assert is_after_cursor(make_summary("a", 4), cursor)

    def test_none_timestamp_never_after(self):
        cursor = ChatListCursor(last_message_at=at(5), session_id="m")
        assert not is_after_cursor(make_summary("a", None), cursor)


class TestPaginate:
    """Páginas, cursor de continuação e fronteiras."""

    def _summaries(self):
        return [make_summary("A", 30), make_summary("B", 20), make_summary("C", 10)]

    def test_first_page_full_emits_cursor(self):
        page = paginate(self._summaries(), None, 2)

        assert _ids(page.items) == ["A", "B"]
        assert page.next_cursor == ChatListCursor(last_message_at=at(20), session_id="B")

    def test_second_page_partial_has_no_cursor(self):
        cursor = ChatListCursor(last_message_at=at(20), session_id="B")

        page = paginate(self._summaries(), cursor, 2)

        assert _ids(page.items) == ["C"]
        assert page.next_cursor is None

    def test_exact_fit_yields_trailing_empty_page(self):
        first = paginate(self._summaries(), None, 3)
        assert len(first.items) == 3
        assert first.next_cursor is not None

        second = paginate(self._summaries(), first.next_cursor, 3)
        assert second.items == []
        assert second.next_cursor is None

    def test_walk_all_pages_without_duplicates(self):
        summaries = [make_summary(f"s{i:02d}", i % 4) for i in range(17)]
        seen: list[str] = []
        cursor = None

        for _ in range(20):
            page = paginate(summaries, cursor, 5)
            seen.extend(_ids(page.items))
            cursor = page.next_cursor
            if cursor is None:
                break

        assert seen == _ids(canonical_order(summaries))
        assert len(seen) == len(set(seen)) == 17

    def test_cursor_for_missing_session_still_positions(self):
        cursor = ChatListCursor(last_message_at=at(20), session_id="Bz")

        page = paginate(self._summaries(), cursor, 10)

        assert _ids(page.items) == ["B", "C"]

    def test_last_item_without_timestamp_has_no_cursor(self):
        summaries = [make_summary("A", 1), make_summary("B", None)]

        page = paginate(summaries, None, 2)

        assert _ids(page.items) == ["A", "B"]
        assert page.next_cursor is None

    def test_undated_sessions_unreachable_after_cursor(self):
        summaries = [make_summary("A", 1), make_summary("B", None)]
        cursor = cursor_from(summaries[0])

        page = paginate(summaries, cursor, 5)

        assert page.items == []

    def test_empty_input(self):
        page = paginate([], None, 10)
        assert page.items == []
        assert page.next_cursor is None
