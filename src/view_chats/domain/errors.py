"""Erros de domínio do serviço de chats."""

from __future__ import annotations


class ChatValidationError(Exception):
    """Requisição rejeitada por entrada inválida (nunca é falha de sistema)."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ChatNotFoundError(Exception):
    """Sessão solicitada não possui mensagens."""

    def __init__(self, session_id: str) -> None:
        super().__init__("Chat session not found")
        self.session_id = session_id


class StoreUnavailableError(Exception):
    """Falha no backend de armazenamento (não há retry interno)."""

    def __init__(self, message: str, backend: str | None = None) -> None:
        super().__init__(message)
        self.backend = backend


class AuthError(Exception):
    """Token ausente, inválido ou de domínio não permitido."""

    pass
