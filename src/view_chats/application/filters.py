"""Construção do predicado de filtro sobre sessões.

Busca por prefixo (case-insensitive, literal) e flags de categoria
combinadas por AND. Sem condições o filtro aceita tudo.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from view_chats.domain.chats import MessageQueryHints, SessionSummary

_LIKE_SPECIAL = re.compile(r"([_%\\])")

SessionPredicate = Callable[[SessionSummary], bool]


def escape_like(text: str) -> str:
    """Escapa %, _ e barra invertida para uso literal em LIKE/ILIKE."""

    return _LIKE_SPECIAL.sub(r"\\\1", text)


def _prefix_condition(prefix: str) -> SessionPredicate:
    lowered = prefix.lower()
    return lambda summary: summary.session_id.lower().startswith(lowered)


def _sales_condition(summary: SessionSummary) -> bool:
    return summary.is_sales


def _whatsapp_condition(summary: SessionSummary) -> bool:
    return summary.is_whatsapp


@dataclass(frozen=True, slots=True)
class SessionFilter:
    """Conjunção de condições sobre SessionSummary."""

    search: str | None = None
    only_sales: bool = False
    only_whatsapp: bool = False
    conditions: tuple[SessionPredicate, ...] = field(default=(), compare=False, repr=False)

    def __call__(self, summary: SessionSummary) -> bool:
        return all(condition(summary) for condition in self.conditions)

    @property
    def is_match_all(self) -> bool:
        return not self.conditions

    @property
    def like_pattern(self) -> str | None:
        if not self.search:
            return None
        return f"{escape_like(self.search)}%"

    def to_query_hints(self) -> MessageQueryHints:
        return MessageQueryHints(
            session_id_prefix=self.search or None,
            session_id_like=self.like_pattern,
        )


def build_session_filter(
    search: str | None = None,
    only_sales: bool = False,
    only_whatsapp: bool = False,
) -> SessionFilter:
    """Traduz busca e flags opcionais em um SessionFilter.

    A validação do tamanho mínimo da busca é responsabilidade do chamador.
    """

    conditions: list[SessionPredicate] = []
    if search:
        conditions.append(_prefix_condition(search))
    if only_sales:
        conditions.append(_sales_condition)
    if only_whatsapp:
        conditions.append(_whatsapp_condition)

    return SessionFilter(
        search=search or None,
        only_sales=only_sales,
        only_whatsapp=only_whatsapp,
        conditions=tuple(conditions),
    )
