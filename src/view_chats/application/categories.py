"""Resolução das categorias (vendas / WhatsApp) de uma sessão."""

from __future__ import annotations

from view_chats.domain.chats import CategoryFlags, VisitorSettings

SALES_TYPE = "sales"


def is_whatsapp_session_id(session_id: str) -> bool:
    """Sessões WhatsApp têm exatamente dois segmentos não vazios separados por '_'."""

    parts = session_id.split("_")
    return len(parts) == 2 and all(parts)


def resolve_category_flags(
    session_id: str, settings: VisitorSettings | None = None
) -> CategoryFlags:
    """Combina a forma do session_id com o registro de configurações.

    Precedência:
    - is_whatsapp = forma estrutural OR settings.is_whatsapp (o store só adiciona)
    - is_sales = settings.type == "sales" (sem registro => False)
    """

    structural = is_whatsapp_session_id(session_id)
    if settings is None:
        return CategoryFlags(is_sales=False, is_whatsapp=structural)

    is_sales = (settings.type or "").strip().lower() == SALES_TYPE
    return CategoryFlags(
        is_sales=is_sales,
        is_whatsapp=structural or settings.is_whatsapp is True,
    )
