from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import Response

from cmdbot.commands.handler import CommandHandler
from cmdbot.dependencies import get_command_handler, get_settings
from cmdbot.models import IncomingMessage
from cmdbot.webhook.parser import extract_message
from cmdbot.webhook.security import validate_secret_token

logger = logging.getLogger(__name__)

router = APIRouter()

SECRET_TOKEN_HEADER = "X-Telegram-Bot-Api-Secret-Token"

_in_flight: set[asyncio.Task] = set()


def _track_task(task: asyncio.Task) -> asyncio.Task:
    """Track a background task for graceful shutdown."""
    _in_flight.add(task)
    task.add_done_callback(_in_flight.discard)
    return task


async def wait_for_in_flight(timeout: float = 30.0) -> None:
    """Wait for all in-flight command invocations to complete."""
    if not _in_flight:
        return
    logger.info("Waiting for %d in-flight tasks (timeout=%.1fs)", len(_in_flight), timeout)
    done, pending = await asyncio.wait(_in_flight, timeout=timeout)
    if pending:
        logger.warning("%d tasks still running after timeout", len(pending))


@router.post("/webhook")
async def incoming_webhook(request: Request, background_tasks: BackgroundTasks) -> Response:
    settings = get_settings(request)

    secret = request.headers.get(SECRET_TOKEN_HEADER, "")
    if not validate_secret_token(secret, settings.telegram_webhook_secret):
        logger.warning("Invalid webhook secret token")
        return Response(status_code=403)

    update = await request.json()
    msg = extract_message(update)
    if msg is None:
        logger.debug("Ignoring non-text update %s", update.get("update_id"))
        return Response(status_code=200)

    logger.info("Incoming [%s] (%s): %s", msg.chat_id, msg.sender, msg.text[:80])
    if settings.allowed_chat_ids and msg.chat_id not in settings.allowed_chat_ids:
        logger.warning("Message from non-whitelisted chat: %s", msg.chat_id)
        return Response(status_code=200)

    background_tasks.add_task(process_message, msg, get_command_handler(request))
    return Response(status_code=200)


async def process_message(msg: IncomingMessage, handler: CommandHandler) -> None:
    task = _track_task(asyncio.create_task(handler.handle_message(msg)))
    try:
        await task
    except Exception:
        logger.exception("Failed to process message %s from chat %s", msg.message_id, msg.chat_id)
