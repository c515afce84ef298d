"""Agregação de mensagens em resumos por sessão."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from view_chats.application.categories import resolve_category_flags
from view_chats.domain.chats import ChatMessage, SessionSummary, VisitorSettings


def _message_rank(message: ChatMessage) -> tuple:
    # Empate de created_at resolvido pelo maior id (ordem total estável).
    return (message.created_at, message.id)


def group_by_session(messages: Iterable[ChatMessage]) -> dict[str, list[ChatMessage]]:
    """Agrupa mensagens por session_id preservando a ordem de chegada."""

    groups: dict[str, list[ChatMessage]] = {}
    for message in messages:
        groups.setdefault(message.session_id, []).append(message)
    return groups


def summarize_session(
    session_id: str,
    messages: list[ChatMessage],
    settings: VisitorSettings | None = None,
) -> SessionSummary:
    """Resume um grupo não vazio de mensagens de uma mesma sessão."""

    last = max(messages, key=_message_rank)
    payload = last.author
    flags = resolve_category_flags(session_id, settings)

    return SessionSummary(
        session_id=session_id,
        message_count=len(messages),
        last_message_at=last.created_at,
        last_message_preview=payload.preview,
        last_message_type=payload.type,
        last_message_author=payload.kind,
        is_sales=flags.is_sales,
        is_whatsapp=flags.is_whatsapp,
    )


def aggregate_sessions(
    messages: Iterable[ChatMessage],
    session_filter: Callable[[SessionSummary], bool] | None = None,
    categories: Mapping[str, VisitorSettings] | None = None,
) -> list[SessionSummary]:
    """Reduz mensagens a um SessionSummary por sessão.

    O filtro é aplicado por sessão, depois do agrupamento. Entrada vazia
    retorna lista vazia. A ordem de saída não é canônica.
    """

    categories = categories or {}
    summaries: list[SessionSummary] = []

    for session_id, group in group_by_session(messages).items():
        summary = summarize_session(session_id, group, categories.get(session_id))
        if session_filter is None or session_filter(summary):
            summaries.append(summary)

    return summaries
