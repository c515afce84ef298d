"""Histórico completo de mensagens de uma sessão."""

from __future__ import annotations

from dataclasses import dataclass

from view_chats.domain.auth import AuthUser
from view_chats.domain.chats import ChatMessage, MessageQueryHints
from view_chats.domain.errors import ChatNotFoundError
from view_chats.domain.protocols import MessageStoreProtocol
from view_chats.observability.logging import email_domain, get_logger, mask_session_id

logger = get_logger(__name__)


@dataclass(slots=True)
class GetSessionMessagesUseCase:
    """Mensagens de uma sessão em ordem cronológica (created_at, id)."""

    message_store: MessageStoreProtocol

    def execute(self, *, session_id: str, principal: AuthUser | None = None) -> list[ChatMessage]:
        """Retorna as mensagens ordenadas.

        Raises:
            ChatNotFoundError: sessão sem nenhuma mensagem
        """

        messages = [
            message
            for message in self.message_store.fetch_all_messages(
                MessageQueryHints(session_id=session_id)
            )
            if message.session_id == session_id
        ]
        if not messages:
            logger.info(
                "chat_session_not_found",
                extra={"session_id": mask_session_id(session_id)},
            )
            raise ChatNotFoundError(session_id)

        messages.sort(key=lambda message: (message.created_at, message.id))
        logger.info(
            "chat_messages_served",
            extra={
                "session_id": mask_session_id(session_id),
                "message_count": len(messages),
                "principal_domain": email_domain(principal.email) if principal else None,
            },
        )
        return messages
