from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdbot.commands.dispatcher import Resolved
    from cmdbot.commands.parser import ParsedRequest
    from cmdbot.commands.registry import CommandRegistry
    from cmdbot.models import IncomingMessage


@dataclass
class CommandContext:
    """Per-invocation state handed to a command handler as its first argument."""

    message: IncomingMessage
    outcome: Resolved
    registry: CommandRegistry = field(repr=False)
    send: Callable[..., Awaitable[None]] = field(repr=False)

    @property
    def chat_id(self) -> int:
        return self.message.chat_id

    @property
    def sender(self) -> str:
        return self.message.sender

    @property
    def request(self) -> ParsedRequest:
        return self.outcome.request

    async def reply(self, text: str, parse_mode: str | None = None) -> None:
        await self.send(self.message.chat_id, text, parse_mode=parse_mode)
