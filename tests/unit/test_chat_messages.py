"""Testes para histórico de mensagens de uma sessão."""

from __future__ import annotations

import pytest

from tests.factories import make_message
from view_chats.application.chat_messages import GetSessionMessagesUseCase
from view_chats.domain.errors import ChatNotFoundError
from view_chats.infra.message_store_memory import InMemoryMessageStore


class TestGetSessionMessages:
    def test_chronological_order_with_id_tie_break(self):
        store = InMemoryMessageStore(
            [
                make_message("s1", 5, message_id="m-c"),
                make_message("s1", 1, message_id="m-z"),
                make_message("s1", 5, message_id="m-a"),
                make_message("s2", 2, message_id="m-b"),
            ]
        )

        messages = GetSessionMessagesUseCase(store).execute(session_id="s1")

        assert [m.id for m in messages] == ["m-z", "m-a", "m-c"]

    def test_unknown_session_raises_not_found(self):
        store = InMemoryMessageStore([make_message("s1", 1)])

        with pytest.raises(ChatNotFoundError) as exc_info:
            GetSessionMessagesUseCase(store).execute(session_id="missing")

        assert exc_info.value.session_id == "missing"

    def test_payload_preserved(self):
        message = make_message("s1", 1, content={"text": "oi"}, author="tool")
        store = InMemoryMessageStore([message])

        result = GetSessionMessagesUseCase(store).execute(session_id="s1")

        assert result[0].payload == {"type": "tool", "content": {"text": "oi"}}
