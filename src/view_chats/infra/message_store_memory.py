"""Stores em memória (apenas dev/testes)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from view_chats.domain.chats import ChatMessage, MessageQueryHints, VisitorSettings
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class InMemoryMessageStore(MessageStoreProtocol):
    """Log de mensagens em memória (não usar em produção).

    Cada leitura devolve uma cópia da lista corrente, então appends
    concorrentes não alteram um resultado já retornado.
    """

    def __init__(self, messages: Iterable[ChatMessage] = ()) -> None:
        self._messages: list[ChatMessage] = list(messages)

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)
        logger.debug("Message appended (in-memory)", extra={"message_id": message.id})

    def fetch_all_messages(self, hints: MessageQueryHints) -> list[ChatMessage]:
        messages = list(self._messages)
        if hints.session_id is not None:
            messages = [m for m in messages if m.session_id == hints.session_id]
        if hints.session_id_prefix:
            prefix = hints.session_id_prefix.lower()
            messages = [m for m in messages if m.session_id.lower().startswith(prefix)]
        return messages


class InMemoryCategorySettingsStore(CategorySettingsStoreProtocol):
    """Configurações de sessão em memória (não usar em produção)."""

    def __init__(self, records: Iterable[VisitorSettings] = ()) -> None:
        self._records: dict[str, VisitorSettings] = {r.session_id: r for r in records}

    def put(self, record: VisitorSettings) -> None:
        self._records[record.session_id] = record

    def lookup(self, session_id: str) -> VisitorSettings | None:
        return self._records.get(session_id)
