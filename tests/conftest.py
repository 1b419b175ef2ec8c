from enum import Enum
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from cmdbot.commands.builtins import BUILTIN_MANIFESTS
from cmdbot.commands.handler import CommandHandler
from cmdbot.commands.manifest import CommandManifest
from cmdbot.commands.models import ParameterSpec, Variant
from cmdbot.commands.registry import CommandRegistry, VariantCatalog, build_catalog, build_registry
from cmdbot.config import Settings
from cmdbot.main import app
from cmdbot.models import IncomingMessage
from cmdbot.telegram.client import TelegramClient

TEST_SETTINGS = Settings(
    telegram_bot_token="123456:test_token",
    telegram_webhook_secret="test_secret",
    allowed_chat_ids=[42],
    app_name="testbot",
    app_version="1.0",
)


class Mode(Enum):
    Fast = 1
    Slow = 2


async def noop_handler(context, *args):
    return None


def make_variant(name: str, *parameters: ParameterSpec) -> Variant:
    return Variant(name=name, usage=f"/{name}", parameters=tuple(parameters), handler=noop_handler)


def make_catalog(*variants: Variant, name: str = "cmd") -> VariantCatalog:
    manifest = CommandManifest(name, "Test command")
    for variant in variants:
        manifest.add_variant(variant)
    return build_catalog(manifest)


def make_message(text: str, chat_id: int = 42, sender: str = "alice") -> IncomingMessage:
    return IncomingMessage(chat_id=chat_id, message_id=1, text=text, sender=sender, sender_id=7)


def make_update(
    text: str | None = "/ping",
    chat_id: int = 42,
    update_id: int = 1000,
    username: str | None = "alice",
) -> dict:
    msg: dict = {
        "message_id": 1,
        "date": 1700000000,
        "chat": {"id": chat_id, "type": "private"},
        "from": {"id": 7, "is_bot": False, "first_name": "Alice"},
    }
    if username:
        msg["from"]["username"] = username
    if text is not None:
        msg["text"] = text
    else:
        msg["sticker"] = {"file_id": "abc"}
    return {"update_id": update_id, "message": msg}


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def command_registry() -> CommandRegistry:
    return build_registry(BUILTIN_MANIFESTS, title=TEST_SETTINGS.help_title)


@pytest.fixture
def send() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def command_handler(command_registry, send) -> CommandHandler:
    return CommandHandler(command_registry, send)


@pytest.fixture
def telegram_http() -> AsyncMock:
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock()
    mock_response.json.return_value = {"ok": True, "result": {"id": 1, "username": "testbot"}}

    mock_http = AsyncMock()
    mock_http.post = AsyncMock(return_value=mock_response)
    mock_http.get = AsyncMock(return_value=mock_response)
    return mock_http


@pytest.fixture
def client(settings: Settings, telegram_http, command_registry) -> TestClient:
    telegram_client = TelegramClient(
        http_client=telegram_http,
        bot_token=settings.telegram_bot_token,
    )
    app.state.settings = settings
    app.state.http_client = telegram_http
    app.state.telegram_client = telegram_client
    app.state.command_registry = command_registry
    app.state.command_handler = CommandHandler.from_settings(
        command_registry, telegram_client.send_message, settings
    )
    return TestClient(app, raise_server_exceptions=False)
