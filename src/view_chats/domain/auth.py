"""Credencial resolvida por request."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """Usuário autenticado da requisição corrente.

    Criado pela dependência de autenticação e repassado explicitamente aos
    casos de uso; não existe estado global de autenticação.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    name: str | None = None
    picture: str | None = None
