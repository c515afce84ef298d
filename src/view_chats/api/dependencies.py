"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from view_chats.application.chat_list import ListChatsUseCase
from view_chats.application.chat_messages import GetSessionMessagesUseCase
from view_chats.application.chat_summaries import LookupChatSummariesUseCase
from view_chats.config.settings import Settings
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.infra.google_auth import GoogleTokenVerifier


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_message_store(request: Request) -> MessageStoreProtocol:
    """Retorna o store de mensagens ativo."""

    return request.app.state.message_store


def get_settings_store(request: Request) -> CategorySettingsStoreProtocol:
    """Retorna o store de configurações de sessão ativo."""

    return request.app.state.settings_store


def get_token_verifier(request: Request) -> GoogleTokenVerifier:
    """Retorna o validador de tokens."""

    return request.app.state.token_verifier


def get_list_chats_use_case(request: Request) -> ListChatsUseCase:
    settings = get_settings(request)
    return ListChatsUseCase(
        message_store=get_message_store(request),
        settings_store=get_settings_store(request),
        min_search_length=settings.min_search_length,
        default_limit=settings.chat_list_default_limit,
        max_limit=settings.chat_list_max_limit,
    )


def get_lookup_summaries_use_case(request: Request) -> LookupChatSummariesUseCase:
    settings = get_settings(request)
    return LookupChatSummariesUseCase(
        message_store=get_message_store(request),
        settings_store=get_settings_store(request),
        min_search_length=settings.min_search_length,
        default_limit=settings.chat_summary_default_limit,
        max_limit=settings.chat_summary_max_limit,
    )


def get_session_messages_use_case(request: Request) -> GetSessionMessagesUseCase:
    return GetSessionMessagesUseCase(message_store=get_message_store(request))
