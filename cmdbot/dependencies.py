from fastapi import Request

from cmdbot.commands.handler import CommandHandler
from cmdbot.commands.registry import CommandRegistry
from cmdbot.config import Settings
from cmdbot.telegram.client import TelegramClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_telegram_client(request: Request) -> TelegramClient:
    return request.app.state.telegram_client


def get_command_registry(request: Request) -> CommandRegistry:
    return request.app.state.command_registry


def get_command_handler(request: Request) -> CommandHandler:
    return request.app.state.command_handler
