"""Helpers compartilhados pelos casos de uso de leitura de chats."""

from __future__ import annotations

from view_chats.application.aggregator import aggregate_sessions
from view_chats.application.filters import SessionFilter
from view_chats.domain.chats import ChatListCursor, SessionSummary
from view_chats.domain.errors import ChatValidationError
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.observability.logging import get_logger
from view_chats.utils.timestamps import parse_timestamp

logger = get_logger(__name__)

MIN_SEARCH_LENGTH = 3


def normalize_search(raw_search: str | None, min_length: int = MIN_SEARCH_LENGTH) -> str | None:
    """Aplica trim; vazio vira None e buscas curtas são rejeitadas."""

    if raw_search is None:
        return None
    search = raw_search.strip()
    if not search:
        return None
    if len(search) < min_length:
        raise ChatValidationError(
            "search_too_short",
            f"Search query must be at least {min_length} characters long.",
        )
    return search


def parse_cursor(
    raw_last_message_at: str | None, raw_session_id: str | None
) -> ChatListCursor | None:
    """Interpreta o cursor recebido.

    Timestamp ausente ou inválido resulta em "sem cursor" (não é erro).
    Sem session_id o cursor vale só pelo timestamp.
    """

    last_message_at = parse_timestamp(raw_last_message_at)
    if last_message_at is None:
        if raw_last_message_at:
            logger.debug("chat_cursor_ignored", extra={"reason": "unparseable_timestamp"})
        return None
    return ChatListCursor(last_message_at=last_message_at, session_id=raw_session_id or None)


def load_session_summaries(
    message_store: MessageStoreProtocol,
    settings_store: CategorySettingsStoreProtocol,
    session_filter: SessionFilter,
) -> list[SessionSummary]:
    """Busca mensagens, resolve categorias e agrega/filtra por sessão."""

    messages = message_store.fetch_all_messages(session_filter.to_query_hints())

    session_ids = dict.fromkeys(message.session_id for message in messages)
    if session_filter.search:
        prefix = session_filter.search.lower()
        session_ids = {sid: None for sid in session_ids if sid.lower().startswith(prefix)}

    categories = settings_store.lookup_many(session_ids) if session_ids else {}
    return aggregate_sessions(messages, session_filter, categories)
