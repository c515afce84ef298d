"""Consulta de resumos por session_id exato ou por prefixo."""

from __future__ import annotations

from dataclasses import dataclass

from view_chats.application.aggregator import aggregate_sessions
from view_chats.application.filters import build_session_filter
from view_chats.application.pagination import canonical_order, clamp_limit
from view_chats.application.queries import (
    MIN_SEARCH_LENGTH,
    load_session_summaries,
    normalize_search,
)
from view_chats.domain.auth import AuthUser
from view_chats.domain.chats import MessageQueryHints, SessionSummary
from view_chats.domain.errors import ChatValidationError
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.observability.logging import email_domain, get_logger, mask_session_id

logger = get_logger(__name__)

SUMMARY_DEFAULT_LIMIT = 25
SUMMARY_MAX_LIMIT = 200


@dataclass(slots=True)
class LookupChatSummariesUseCase:
    """Resumos com preview da última mensagem."""

    message_store: MessageStoreProtocol
    settings_store: CategorySettingsStoreProtocol
    min_search_length: int = MIN_SEARCH_LENGTH
    default_limit: int = SUMMARY_DEFAULT_LIMIT
    max_limit: int = SUMMARY_MAX_LIMIT

    def execute(
        self,
        *,
        session_id: str | None = None,
        search: str | None = None,
        limit: int | str | None = None,
        principal: AuthUser | None = None,
    ) -> list[SessionSummary]:
        exact_id = session_id.strip() if session_id else None
        if exact_id:
            return self._by_session_id(exact_id, principal)

        normalized_search = normalize_search(search, self.min_search_length)
        if normalized_search is None:
            raise ChatValidationError(
                "search_required",
                "Provide a sessionId or search query to look up chat summaries.",
            )

        page_size = clamp_limit(limit, self.default_limit, self.max_limit)
        summaries = load_session_summaries(
            self.message_store,
            self.settings_store,
            build_session_filter(search=normalized_search),
        )
        result = canonical_order(summaries)[:page_size]

        logger.info(
            "chat_summaries_searched",
            extra={
                "item_count": len(result),
                "limit": page_size,
                "principal_domain": email_domain(principal.email) if principal else None,
            },
        )
        return result

    def _by_session_id(self, session_id: str, principal: AuthUser | None) -> list[SessionSummary]:
        messages = [
            message
            for message in self.message_store.fetch_all_messages(
                MessageQueryHints(session_id=session_id)
            )
            if message.session_id == session_id
        ]
        categories = self.settings_store.lookup_many([session_id]) if messages else {}
        result = aggregate_sessions(messages, categories=categories)

        logger.info(
            "chat_summary_lookup",
            extra={
                "session_id": mask_session_id(session_id),
                "found": bool(result),
                "principal_domain": email_domain(principal.email) if principal else None,
            },
        )
        return result
