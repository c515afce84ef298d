"""Re-exports dos Protocolos de domínio para uso por Application."""

from __future__ import annotations

from view_chats.domain.protocols.category_settings import CategorySettingsStoreProtocol
from view_chats.domain.protocols.message_store import MessageStoreProtocol

__all__ = [
    "CategorySettingsStoreProtocol",
    "MessageStoreProtocol",
]
