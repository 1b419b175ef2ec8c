from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # Telegram Bot API
    telegram_bot_token: str
    telegram_api_url: str = "https://api.telegram.org"
    telegram_webhook_secret: str = ""  # empty disables the secret header check
    allowed_chat_ids: Annotated[list[int], NoDecode] = []  # empty allows every chat

    @field_validator("allowed_chat_ids", mode="before")
    @classmethod
    def parse_chat_ids(cls, v: object) -> object:
        if isinstance(v, str):
            return [int(n.strip()) for n in v.split(",") if n.strip()]
        if isinstance(v, (int, float)):
            return [int(v)]
        return v

    # Commands
    command_marker: str = "/"
    help_command: str = "help"
    reply_parse_mode: str = "Markdown"
    reply_to_unknown_commands: bool = False

    # Help header: "<app_name> <app_version> Help Text"
    app_name: str = "cmdbot"
    app_version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str = ""  # empty logs to stderr only

    model_config = {"env_file": ".env"}

    @property
    def help_title(self) -> str:
        return f"{self.app_name} {self.app_version} Help Text"
