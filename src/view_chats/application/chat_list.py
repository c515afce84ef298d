"""Caso de uso da listagem paginada de sessões de chat."""

from __future__ import annotations

from dataclasses import dataclass

from view_chats.application.filters import build_session_filter
from view_chats.application.pagination import clamp_limit, paginate
from view_chats.application.queries import (
    MIN_SEARCH_LENGTH,
    load_session_summaries,
    normalize_search,
    parse_cursor,
)
from view_chats.domain.auth import AuthUser
from view_chats.domain.chats import ChatListResponse
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.observability.logging import email_domain, get_logger
from view_chats.observability.timing import timed

logger = get_logger(__name__)

LIST_DEFAULT_LIMIT = 50
LIST_MAX_LIMIT = 200


@dataclass(slots=True)
class ListChatsUseCase:
    """Filtra, agrega e pagina sessões em ordem cronológica reversa.

    Sem estado entre requisições: cada chamada lê uma visão nova do store.
    """

    message_store: MessageStoreProtocol
    settings_store: CategorySettingsStoreProtocol
    min_search_length: int = MIN_SEARCH_LENGTH
    default_limit: int = LIST_DEFAULT_LIMIT
    max_limit: int = LIST_MAX_LIMIT

    def execute(
        self,
        *,
        search: str | None = None,
        only_sales: bool = False,
        only_whatsapp: bool = False,
        cursor_last_message_at: str | None = None,
        cursor_session_id: str | None = None,
        limit: int | str | None = None,
        principal: AuthUser | None = None,
    ) -> ChatListResponse:
        """Retorna a página pedida e o cursor de continuação.

        Raises:
            ChatValidationError: busca com menos caracteres que o mínimo
            StoreUnavailableError: falha do store (propagada sem retry)
        """

        normalized_search = normalize_search(search, self.min_search_length)
        page_size = clamp_limit(limit, self.default_limit, self.max_limit)
        cursor = parse_cursor(cursor_last_message_at, cursor_session_id)
        session_filter = build_session_filter(
            search=normalized_search,
            only_sales=only_sales,
            only_whatsapp=only_whatsapp,
        )

        with timed("chat_list", limit=page_size):
            summaries = load_session_summaries(
                self.message_store, self.settings_store, session_filter
            )
            page = paginate(summaries, cursor, page_size)

        logger.info(
            "chat_list_served",
            extra={
                "item_count": len(page.items),
                "limit": page_size,
                "has_cursor": cursor is not None,
                "has_next_cursor": page.next_cursor is not None,
                "has_search": normalized_search is not None,
                "only_sales": only_sales,
                "only_whatsapp": only_whatsapp,
                "principal_domain": email_domain(principal.email) if principal else None,
            },
        )

        return ChatListResponse(items=page.items, next_cursor=page.next_cursor)
