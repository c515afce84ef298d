"""Protocolo do store de configurações de categoria por sessão."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from view_chats.domain.chats import VisitorSettings


class CategorySettingsStoreProtocol(ABC):
    """Contrato de consulta das configurações de uma sessão."""

    @abstractmethod
    def lookup(self, session_id: str) -> VisitorSettings | None:
        """Retorna o registro da sessão, se existir."""
        ...

    def lookup_many(self, session_ids: Iterable[str]) -> dict[str, VisitorSettings]:
        """Consulta em lote; implementações podem sobrescrever para um round-trip."""

        found: dict[str, VisitorSettings] = {}
        for session_id in dict.fromkeys(session_ids):
            record = self.lookup(session_id)
            if record is not None:
                found[session_id] = record
        return found
