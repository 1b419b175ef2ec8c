import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cmdbot.commands.builtins import BUILTIN_MANIFESTS
from cmdbot.commands.handler import CommandHandler
from cmdbot.commands.registry import build_registry
from cmdbot.config import Settings
from cmdbot.health.router import router as health_router
from cmdbot.logging_config import configure_logging
from cmdbot.telegram.client import TelegramClient
from cmdbot.webhook.router import router as webhook_router, wait_for_in_flight

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    configure_logging(
        level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file
    )

    # Built once; a ConfigurationError here aborts startup.
    command_registry = build_registry(
        BUILTIN_MANIFESTS,
        help_command=settings.help_command,
        title=settings.help_title,
    )
    logger.info("Command registry ready with %d commands", len(command_registry))

    http_client = httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0))
    telegram_client = TelegramClient(
        http_client=http_client,
        bot_token=settings.telegram_bot_token,
        api_url=settings.telegram_api_url,
    )

    app.state.settings = settings
    app.state.http_client = http_client
    app.state.telegram_client = telegram_client
    app.state.command_registry = command_registry
    app.state.command_handler = CommandHandler.from_settings(
        command_registry, telegram_client.send_message, settings
    )

    yield

    await wait_for_in_flight(timeout=30.0)
    await http_client.aclose()


app = FastAPI(title="cmdbot", lifespan=lifespan)
app.include_router(health_router)
app.include_router(webhook_router)
