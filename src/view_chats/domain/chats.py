"""Contratos de domínio para mensagens e resumos de sessões de chat."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from view_chats.domain.enums import AuthorKind
from view_chats.utils.timestamps import ensure_utc, format_timestamp


class CamelModel(BaseModel):
    """Base dos modelos expostos na API (JSON em camelCase)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def json_text(value: Any) -> str | None:
    """Texto de um valor JSON, equivalente ao operador ->> do Postgres."""

    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class MessagePayload:
    """Visão tipada do payload livre de uma mensagem.

    kind é a tag (conjunto fechado + OTHER) e type guarda o valor bruto.
    Os demais campos continuam apenas no payload original, repassado sem
    alteração. Payload que não é objeto JSON não tem type nem content.
    """

    kind: AuthorKind
    type: str | None = None
    content: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> MessagePayload:
        if not isinstance(raw, dict):
            return cls(kind=AuthorKind.OTHER)
        raw_type = raw.get("type")
        return cls(
            kind=AuthorKind.from_raw(raw_type),
            type=json_text(raw_type),
            content=raw.get("content"),
        )

    @property
    def preview(self) -> str | None:
        return json_text(self.content)


class ChatMessage(CamelModel):
    """Mensagem imutável do log (append-only).

    payload é preservado exatamente como veio do store (qualquer valor JSON).
    """

    id: str
    session_id: str
    created_at: datetime
    payload: Any = Field(default_factory=dict)

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)

    @property
    def author(self) -> MessagePayload:
        return MessagePayload.from_raw(self.payload)


class SessionSummary(CamelModel):
    """Resumo derivado de uma sessão (recalculado a cada consulta)."""

    session_id: str
    message_count: int = Field(ge=1)
    last_message_at: datetime | None = None
    last_message_preview: str | None = None
    last_message_type: str | None = None
    last_message_author: AuthorKind | None = None
    is_sales: bool = False
    is_whatsapp: bool = False

    @field_validator("last_message_at")
    @classmethod
    def _last_message_at_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @field_serializer("last_message_at")
    def _serialize_last_message_at(self, value: datetime | None) -> str | None:
        return format_timestamp(value) if value is not None else None


class ChatListCursor(CamelModel):
    """Chave de ordenação do último item emitido na página anterior.

    session_id é None apenas em cursores recebidos só com timestamp.
    """

    last_message_at: datetime
    session_id: str | None = None

    @field_validator("last_message_at")
    @classmethod
    def _cursor_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_serializer("last_message_at")
    def _serialize_cursor(self, value: datetime) -> str:
        return format_timestamp(value)


class ChatListResponse(CamelModel):
    """Envelope da listagem paginada."""

    items: list[SessionSummary] = Field(default_factory=list)
    next_cursor: ChatListCursor | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serializa omitindo nextCursor quando a paginação terminou."""

        payload = self.model_dump(by_alias=True, mode="json")
        if payload.get("nextCursor") is None:
            payload.pop("nextCursor", None)
        return payload


@dataclass(frozen=True, slots=True)
class CategoryFlags:
    """Categorias derivadas de uma sessão."""

    is_sales: bool = False
    is_whatsapp: bool = False


class VisitorSettings(BaseModel):
    """Registro opcional de configurações por sessão (store externo)."""

    session_id: str
    is_whatsapp: bool | None = None
    type: str | None = None


@dataclass(frozen=True, slots=True)
class MessageQueryHints:
    """Dicas de filtragem repassadas ao store de mensagens.

    Stores podem ignorar dicas que não sabem aplicar; o núcleo reaplica o
    filtro por sessão sobre o resultado.
    """

    session_id: str | None = None
    session_id_prefix: str | None = None
    session_id_like: str | None = None
