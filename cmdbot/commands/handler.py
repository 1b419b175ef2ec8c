from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from cmdbot.commands.context import CommandContext
from cmdbot.commands.dispatcher import (
    HelpRequested,
    NoSuitableVariant,
    Outcome,
    Resolved,
    UnknownCommand,
    dispatch,
)
from cmdbot.commands.registry import CommandRegistry
from cmdbot.config import Settings
from cmdbot.models import IncomingMessage

logger = logging.getLogger(__name__)

FAILURE_REPLY = "Sorry, that command failed. Please try again."

SendMessage = Callable[..., Awaitable[None]]


class CommandHandler:
    """Runs dispatch for incoming messages and invokes the resolved handler.

    ``send`` is called as ``send(chat_id, text, parse_mode=...)``; in
    production it is ``TelegramClient.send_message``.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        send: SendMessage,
        *,
        marker: str = "/",
        help_command: str = "help",
        help_parse_mode: str | None = "Markdown",
        reply_to_unknown_commands: bool = False,
    ) -> None:
        self._registry = registry
        self._send = send
        self._marker = marker
        self._help_command = help_command
        self._help_parse_mode = help_parse_mode
        self._reply_to_unknown = reply_to_unknown_commands

    @classmethod
    def from_settings(
        cls, registry: CommandRegistry, send: SendMessage, settings: Settings
    ) -> CommandHandler:
        return cls(
            registry,
            send,
            marker=settings.command_marker,
            help_command=settings.help_command,
            help_parse_mode=settings.reply_parse_mode or None,
            reply_to_unknown_commands=settings.reply_to_unknown_commands,
        )

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    async def handle_message(self, message: IncomingMessage) -> Outcome:
        outcome = dispatch(
            self._registry,
            message.text,
            marker=self._marker,
            help_command=self._help_command,
        )
        request = outcome.request
        logger.debug(
            "Handled request; sender=%s command=%s raw_parameters=%r",
            message.sender,
            request.command,
            request.raw_parameters,
        )

        if isinstance(outcome, HelpRequested):
            await self._reply(
                message,
                self._registry.help_text.select(outcome.verbose),
                parse_mode=self._help_parse_mode,
            )
            logger.info("Sent help information to chat %s", message.chat_id)
        elif isinstance(outcome, UnknownCommand):
            logger.info("No command registered for %r", request.command)
            if self._reply_to_unknown and request.command:
                await self._reply(
                    message,
                    f"Unknown command: {self._marker}{request.command}. "
                    f"Type {self._marker}{self._help_command} for available commands.",
                )
        elif isinstance(outcome, NoSuitableVariant):
            logger.info("No variant of /%s accepts %r", request.command, request.parameters)
            if self._reply_to_unknown:
                await self._reply(
                    message,
                    f"{self._marker}{request.command} does not accept these parameters. "
                    f"Type {self._marker}{self._help_command} for usage.",
                )
        else:
            await self._invoke(message, outcome)
        return outcome

    async def _invoke(self, message: IncomingMessage, outcome: Resolved) -> None:
        context = CommandContext(
            message=message,
            outcome=outcome,
            registry=self._registry,
            send=self._send,
        )
        logger.info(
            "Handling /%s with variant %s (%s match)",
            outcome.catalog.name,
            outcome.variant.name,
            outcome.match,
        )
        try:
            reply = outcome.variant.handler(context, *outcome.arguments)
            if inspect.isawaitable(reply):
                reply = await reply
        except Exception:
            logger.exception("Command /%s failed", outcome.catalog.name)
            reply = FAILURE_REPLY

        if reply:
            await self._reply(message, str(reply))

    async def _reply(
        self, message: IncomingMessage, text: str, parse_mode: str | None = None
    ) -> None:
        try:
            await self._send(message.chat_id, text, parse_mode=parse_mode)
        except Exception:
            logger.exception("Failed to send Telegram message to chat %s", message.chat_id)
