"""Enums de domínio para autores de mensagens."""

from __future__ import annotations

from enum import StrEnum


class AuthorKind(StrEnum):
    """Tipos de autor conhecidos no payload de mensagem.

    OTHER cobre qualquer valor fora do conjunto fechado (o valor bruto
    continua disponível em MessagePayload.type).
    """

    HUMAN = "human"
    AI = "ai"
    SYSTEM = "system"
    TOOL = "tool"
    OTHER = "other"

    @classmethod
    def from_raw(cls, raw: object) -> AuthorKind:
        if isinstance(raw, str):
            try:
                return cls(raw.lower())
            except ValueError:
                return cls.OTHER
        return cls.OTHER
