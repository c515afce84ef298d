"""Testes para o filtro de sessões."""

from __future__ import annotations

from tests.factories import make_summary
from view_chats.application.filters import build_session_filter, escape_like


class TestEscapeLike:
    def test_escapes_wildcards(self):
        assert escape_like("50%_off") == "50\\%\\_off"

    def test_escapes_backslash(self):
        assert escape_like("a\\b") == "a\\\\b"

    def test_plain_text_unchanged(self):
        assert escape_like("abc") == "abc"


class TestBuildSessionFilter:
    """Predicado AND de busca por prefixo e flags."""

    def test_no_conditions_matches_everything(self):
        session_filter = build_session_filter()
        assert session_filter.is_match_all
        assert session_filter(make_summary("anything", 1))
        assert session_filter(make_summary("other", None))

    def test_prefix_is_case_insensitive(self):
        session_filter = build_session_filter(search="ABC")
        assert session_filter(make_summary("abc123", 1))
        assert session_filter(make_summary("AbC", 1))
        assert not session_filter(make_summary("xabc", 1))

    def test_prefix_is_literal(self):
        session_filter = build_session_filter(search="a_c")
        assert session_filter(make_summary("a_c1", 1))
        assert not session_filter(make_summary("abc1", 1))

        percent = build_session_filter(search="50%")
        assert not percent(make_summary("500", 1))
        assert percent(make_summary("50%x", 1))

    def test_flags_are_combined_with_and(self):
        session_filter = build_session_filter(search="abc", only_sales=True, only_whatsapp=True)
        assert session_filter(make_summary("abc_1", 1, is_sales=True, is_whatsapp=True))
        assert not session_filter(make_summary("abc_1", 1, is_sales=True))
        assert not session_filter(make_summary("abc_1", 1, is_whatsapp=True))
        assert not session_filter(make_summary("xyz_1", 1, is_sales=True, is_whatsapp=True))

    def test_only_sales(self):
        session_filter = build_session_filter(only_sales=True)
        assert session_filter(make_summary("s", 1, is_sales=True))
        assert not session_filter(make_summary("s", 1))

    def test_query_hints_carry_prefix_and_like_pattern(self):
        hints = build_session_filter(search="a_b").to_query_hints()
        assert hints.session_id is None
        assert hints.session_id_prefix == "a_b"
        assert hints.session_id_like == "a\\_b%"

    def test_query_hints_without_search(self):
        hints = build_session_filter(only_sales=True).to_query_hints()
        assert hints.session_id_prefix is None
        assert hints.session_id_like is None
