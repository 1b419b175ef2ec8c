from cmdbot.config import Settings


def test_defaults():
    settings = Settings(telegram_bot_token="t")
    assert settings.command_marker == "/"
    assert settings.help_command == "help"
    assert settings.reply_to_unknown_commands is False
    assert settings.allowed_chat_ids == []


def test_chat_ids_from_comma_separated_string():
    settings = Settings(telegram_bot_token="t", allowed_chat_ids="42, -100123 ,")
    assert settings.allowed_chat_ids == [42, -100123]


def test_single_chat_id():
    assert Settings(telegram_bot_token="t", allowed_chat_ids=7).allowed_chat_ids == [7]


def test_chat_ids_from_env(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")
    monkeypatch.setenv("ALLOWED_CHAT_IDS", "1,2")
    settings = Settings()
    assert settings.telegram_bot_token == "from-env"
    assert settings.allowed_chat_ids == [1, 2]


def test_help_title():
    settings = Settings(telegram_bot_token="t", app_name="bot", app_version="2.1")
    assert settings.help_title == "bot 2.1 Help Text"
