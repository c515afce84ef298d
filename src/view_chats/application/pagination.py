"""Paginação por keyset (last_message_at DESC, session_id DESC).

A mesma ordem canônica é usada para a listagem completa e para todo
subconjunto filtrado, e também define a fronteira do cursor.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from view_chats.domain.chats import ChatListCursor, SessionSummary

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True, slots=True)
class ChatPage:
    """Página de resumos mais o cursor de continuação (se houver)."""

    items: list[SessionSummary] = field(default_factory=list)
    next_cursor: ChatListCursor | None = None


def clamp_limit(raw: int | str | None, default: int, maximum: int) -> int:
    """Interpreta e limita o tamanho de página ao intervalo [1, maximum].

    Strings seguem a semântica de parseInt (dígitos iniciais); valores
    ausentes ou inválidos usam o default.
    """

    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        parsed = raw
    else:
        match = _LEADING_INT.match(raw)
        if match is None:
            return default
        parsed = int(match.group(1))

    return min(max(parsed, 1), maximum)


def canonical_order(summaries: Iterable[SessionSummary]) -> list[SessionSummary]:
    """Ordena por last_message_at DESC (None por último) e session_id DESC."""

    dated: list[SessionSummary] = []
    undated: list[SessionSummary] = []
    for summary in summaries:
        (dated if summary.last_message_at is not None else undated).append(summary)

    dated.sort(key=lambda s: (s.last_message_at, s.session_id), reverse=True)
    undated.sort(key=lambda s: s.session_id, reverse=True)
    return dated + undated


def is_after_cursor(summary: SessionSummary, cursor: ChatListCursor) -> bool:
    """True se o resumo vem estritamente depois do cursor na ordem canônica.

    Comparação puramente estrutural: o session_id do cursor não precisa
    existir. Resumos sem timestamp nunca ficam depois de um cursor.
    """

    if summary.last_message_at is None:
        return False
    if summary.last_message_at < cursor.last_message_at:
        return True
    if cursor.session_id is None:
        return False
    return (
        summary.last_message_at == cursor.last_message_at
        and summary.session_id < cursor.session_id
    )


def cursor_from(summary: SessionSummary) -> ChatListCursor | None:
    """Cursor a partir do último item; None quando não há timestamp."""

    if summary.last_message_at is None:
        return None
    return ChatListCursor(last_message_at=summary.last_message_at, session_id=summary.session_id)


def paginate(
    summaries: Iterable[SessionSummary],
    cursor: ChatListCursor | None,
    limit: int,
) -> ChatPage:
    """Retorna até `limit` itens depois do cursor e o próximo cursor.

    next_cursor existe somente quando a página está cheia: uma página cheia
    que esgota os dados produz uma chamada extra vazia (comportamento
    mantido por compatibilidade).
    """

    ordered = canonical_order(summaries)
    if cursor is not None:
        ordered = [summary for summary in ordered if is_after_cursor(summary, cursor)]

    items = ordered[:limit]
    next_cursor = cursor_from(items[-1]) if items and len(items) == limit else None
    return ChatPage(items=items, next_cursor=next_cursor)
