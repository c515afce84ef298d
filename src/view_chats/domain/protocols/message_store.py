"""Protocolo de leitura do log de mensagens."""

from __future__ import annotations

from abc import ABC, abstractmethod

from view_chats.domain.chats import ChatMessage, MessageQueryHints


class MessageStoreProtocol(ABC):
    """Contrato mínimo de leitura do log de mensagens.

    O núcleo nunca escreve nem altera mensagens.
    """

    @abstractmethod
    def fetch_all_messages(self, hints: MessageQueryHints) -> list[ChatMessage]:
        """Retorna todas as mensagens das sessões compatíveis com as dicas.

        Raises:
            StoreUnavailableError: Em caso de falha do backend
        """
        ...
