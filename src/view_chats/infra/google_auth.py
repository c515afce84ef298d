"""Validação de Google ID tokens via endpoint tokeninfo."""

from __future__ import annotations

import logging

import httpx

from view_chats.domain.auth import AuthUser
from view_chats.domain.errors import AuthError
from view_chats.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

DEFAULT_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


class GoogleTokenVerifier:
    """Valida o token e restringe acesso a e-mails verificados do domínio permitido.

    Regras:
    - aud deve ser igual ao client id configurado
    - email_verified deve ser "true"
    - e-mail deve terminar em @<allowed_domain>
    """

    def __init__(
        self,
        client_id: str | None,
        allowed_domain: str,
        tokeninfo_url: str = DEFAULT_TOKENINFO_URL,
        timeout_seconds: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client_id = client_id
        self._allowed_domain = allowed_domain.strip().lower()
        self._tokeninfo_url = tokeninfo_url
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    def _fetch_tokeninfo(self, token: str) -> httpx.Response:
        if self._http_client is not None:
            return self._http_client.get(
                self._tokeninfo_url,
                params={"id_token": token},
                timeout=self._timeout_seconds,
            )
        with httpx.Client(timeout=self._timeout_seconds) as client:
            return client.get(self._tokeninfo_url, params={"id_token": token})

    def verify(self, token: str) -> AuthUser:
        """Retorna o usuário autenticado.

        Raises:
            AuthError: token rejeitado ou validação indisponível
        """
        if not self._client_id:
            raise AuthError("GOOGLE_CLIENT_ID não configurado")

        try:
            response = self._fetch_tokeninfo(token)
        except httpx.HTTPError as e:
            logger.warning("tokeninfo_request_failed", extra={"error": type(e).__name__})
            raise AuthError(f"Token validation request failed: {type(e).__name__}") from e

        if response.status_code != 200:
            raise AuthError(f"Token validation failed with status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthError("Token validation returned invalid JSON") from e

        if payload.get("aud") != self._client_id:
            raise AuthError("Audience mismatch")

        if str(payload.get("email_verified", "")).lower() != "true":
            raise AuthError("Email is not verified")

        email = (payload.get("email") or "").lower()
        if not email or not email.endswith(f"@{self._allowed_domain}"):
            raise AuthError("Email domain not allowed")

        return AuthUser(email=email, name=payload.get("name"), picture=payload.get("picture"))
