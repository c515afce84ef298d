"""Implementação Firestore dos stores de mensagens e configurações.

Coleções:
- chat_messages/{message_id}: session_id, message (map), created_at
- visitors_settings/{session_id}: is_whatsapp, type
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from pydantic import ValidationError

from view_chats.domain.chats import ChatMessage, MessageQueryHints, VisitorSettings
from view_chats.domain.errors import StoreUnavailableError
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.observability.logging import get_logger, mask_session_id

logger: logging.Logger = get_logger(__name__)


class FirestoreMessageStore(MessageStoreProtocol):
    """Log de mensagens em Firestore.

    Apenas a dica de session_id exato é aplicada no servidor; prefixo
    case-insensitive não é suportado por consultas Firestore e fica a
    cargo do núcleo.
    """

    def __init__(self, client: firestore.Client, collection: str = "chat_messages") -> None:
        self._client = client
        self._collection = collection

    def fetch_all_messages(self, hints: MessageQueryHints) -> list[ChatMessage]:
        query: Any = self._client.collection(self._collection)
        if hints.session_id is not None:
            query = query.where("session_id", "==", hints.session_id)

        try:
            docs = list(query.stream())
        except GoogleAPIError as e:
            logger.error(
                "Failed to fetch messages from Firestore",
                extra={"collection": self._collection, "error": type(e).__name__},
            )
            raise StoreUnavailableError(
                f"Firestore fetch failed: {type(e).__name__}", backend="firestore"
            ) from e

        messages: list[ChatMessage] = []
        for doc in docs:
            try:
                messages.append(_to_message(doc.id, doc.to_dict() or {}))
            except (KeyError, ValidationError) as e:
                # Documento sem session_id ou created_at válido é ignorado.
                logger.warning(
                    "firestore_message_skipped",
                    extra={
                        "collection": self._collection,
                        "doc_id": doc.id,
                        "error": type(e).__name__,
                    },
                )
        return messages


def _to_message(doc_id: str, data: dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=doc_id,
        session_id=data["session_id"],
        created_at=data["created_at"],
        payload=data.get("message"),
    )


class FirestoreCategorySettingsStore(CategorySettingsStoreProtocol):
    """Configurações por sessão em Firestore (documento = session_id)."""

    def __init__(
        self, client: firestore.Client, collection: str = "visitors_settings"
    ) -> None:
        self._client = client
        self._collection = collection

    def _ref(self, session_id: str) -> firestore.DocumentReference:
        return self._client.collection(self._collection).document(session_id)

    def lookup(self, session_id: str) -> VisitorSettings | None:
        try:
            snapshot = self._ref(session_id).get()
        except GoogleAPIError as e:
            logger.error(
                "Failed to load visitor settings from Firestore",
                extra={"session_id": mask_session_id(session_id), "error": type(e).__name__},
            )
            raise StoreUnavailableError(
                f"Firestore lookup failed: {type(e).__name__}", backend="firestore"
            ) from e

        if not snapshot.exists:
            return None
        return _to_settings(session_id, snapshot.to_dict() or {})

    def lookup_many(self, session_ids: Iterable[str]) -> dict[str, VisitorSettings]:
        refs = [self._ref(session_id) for session_id in dict.fromkeys(session_ids)]
        if not refs:
            return {}

        try:
            snapshots = list(self._client.get_all(refs))
        except GoogleAPIError as e:
            logger.error(
                "Failed to load visitor settings batch from Firestore",
                extra={"batch_size": len(refs), "error": type(e).__name__},
            )
            raise StoreUnavailableError(
                f"Firestore batch lookup failed: {type(e).__name__}", backend="firestore"
            ) from e

        return {
            snapshot.id: _to_settings(snapshot.id, snapshot.to_dict() or {})
            for snapshot in snapshots
            if snapshot.exists
        }


def _to_settings(session_id: str, data: dict[str, Any]) -> VisitorSettings:
    return VisitorSettings(
        session_id=session_id,
        is_whatsapp=data.get("is_whatsapp"),
        type=data.get("type"),
    )
