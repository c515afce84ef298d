"""Configurações centralizadas do view_chats.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única

Uso típico:
    from view_chats.config import get_settings
"""

from view_chats.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
