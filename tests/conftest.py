from __future__ import annotations

from collections.abc import Iterable

import pytest
from fastapi.testclient import TestClient

from tests.factories import VALID_TOKEN, FakeTokenVerifier
from view_chats.api.app import create_app
from view_chats.config.settings import get_settings
from view_chats.domain.chats import ChatMessage, VisitorSettings
from view_chats.infra.message_store_memory import (
    InMemoryCategorySettingsStore,
    InMemoryMessageStore,
)


@pytest.fixture()
def message_store() -> InMemoryMessageStore:
    return InMemoryMessageStore()


@pytest.fixture()
def settings_store() -> InMemoryCategorySettingsStore:
    return InMemoryCategorySettingsStore()


@pytest.fixture()
def seed(message_store: InMemoryMessageStore, settings_store: InMemoryCategorySettingsStore):
    """Popula os stores em memória."""

    def _seed(
        messages: Iterable[ChatMessage], records: Iterable[VisitorSettings] = ()
    ) -> None:
        for message in messages:
            message_store.append(message)
        for record in records:
            settings_store.put(record)

    return _seed


@pytest.fixture()
def client(
    monkeypatch: pytest.MonkeyPatch,
    message_store: InMemoryMessageStore,
    settings_store: InMemoryCategorySettingsStore,
):
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("MESSAGE_STORE_BACKEND", "memory")
    monkeypatch.setenv("SETTINGS_STORE_BACKEND", "memory")
    get_settings.cache_clear()
    app = create_app()
    app.state.message_store = message_store
    app.state.settings_store = settings_store
    app.state.token_verifier = FakeTokenVerifier()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
