"""Autenticação Bearer por request."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from view_chats.api.dependencies import get_token_verifier
from view_chats.domain.auth import AuthUser
from view_chats.domain.errors import AuthError
from view_chats.infra.google_auth import GoogleTokenVerifier
from view_chats.observability.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def require_auth(
    authorization: str | None = Header(None),
    verifier: GoogleTokenVerifier = Depends(get_token_verifier),
) -> AuthUser:
    """Valida o header Authorization e devolve o usuário da requisição."""

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")

    try:
        return verifier.verify(token)
    except AuthError as exc:
        logger.warning("auth_verification_failed", extra={"reason": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized"
        ) from exc
