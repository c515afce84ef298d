"""Parse e formatação de timestamps ISO-8601 (sempre em UTC)."""

from __future__ import annotations

from datetime import UTC, datetime

from dateutil.parser import isoparse


def ensure_utc(value: datetime) -> datetime:
    """Normaliza datetime para UTC; naive é interpretado como UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: str | None) -> datetime | None:
    """Converte string ISO-8601 em datetime UTC.

    Retorna None para entrada vazia ou inválida (nunca levanta).
    """

    if not value or not value.strip():
        return None
    try:
        return ensure_utc(isoparse(value.strip()))
    except (ValueError, OverflowError):
        # Inclui offsets que levam o instante para fora do intervalo de datetime.
        return None


def format_timestamp(value: datetime) -> str:
    """Formata datetime como ISO-8601 UTC com sufixo Z.

    Usa milissegundos quando não há perda de precisão; caso contrário
    mantém microssegundos para que o cursor seja uma fronteira exata.
    """

    utc_value = ensure_utc(value)
    timespec = "milliseconds" if utc_value.microsecond % 1000 == 0 else "microseconds"
    return utc_value.isoformat(timespec=timespec).replace("+00:00", "Z")
