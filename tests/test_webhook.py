from cmdbot.webhook.parser import extract_message
from cmdbot.webhook.router import SECRET_TOKEN_HEADER
from cmdbot.webhook.security import validate_secret_token
from tests.conftest import make_update

HEADERS = {SECRET_TOKEN_HEADER: "test_secret"}


def sent_texts(telegram_http) -> list[str]:
    return [call.kwargs["json"]["text"] for call in telegram_http.post.call_args_list]


# --- parser ---


def test_extract_text_message():
    msg = extract_message(make_update(text="/ping x"))
    assert msg.text == "/ping x"
    assert msg.chat_id == 42
    assert msg.sender == "alice"
    assert msg.sender_id == 7


def test_extract_falls_back_to_first_name():
    assert extract_message(make_update(username=None)).sender == "Alice"


def test_extract_ignores_non_text():
    assert extract_message(make_update(text=None)) is None


def test_extract_ignores_other_updates():
    assert extract_message({"update_id": 1, "callback_query": {"id": "x"}}) is None


def test_extract_ignores_edited_message():
    update = make_update(text="/roll")
    update["edited_message"] = update.pop("message")
    assert extract_message(update) is None


# --- security ---


def test_secret_token_valid():
    assert validate_secret_token("abc", "abc") is True


def test_secret_token_invalid():
    assert validate_secret_token("abd", "abc") is False
    assert validate_secret_token("", "abc") is False


def test_secret_token_disabled():
    assert validate_secret_token("", "") is True


# --- endpoint ---


def test_command_is_answered(client, telegram_http):
    resp = client.post("/webhook", json=make_update(text="/ping"), headers=HEADERS)
    assert resp.status_code == 200
    assert sent_texts(telegram_http) == ["pong"]
    payload = telegram_http.post.call_args.kwargs["json"]
    assert payload["chat_id"] == 42


def test_help_is_sent_as_markdown(client, telegram_http, command_registry):
    client.post("/webhook", json=make_update(text="/help verbose"), headers=HEADERS)
    payload = telegram_http.post.call_args.kwargs["json"]
    assert payload["text"] == command_registry.help_text.verbose
    assert payload["parse_mode"] == "Markdown"


def test_invalid_secret_rejected(client, telegram_http):
    resp = client.post(
        "/webhook",
        json=make_update(text="/ping"),
        headers={SECRET_TOKEN_HEADER: "wrong"},
    )
    assert resp.status_code == 403
    telegram_http.post.assert_not_called()


def test_non_whitelisted_chat_ignored(client, telegram_http):
    resp = client.post("/webhook", json=make_update(text="/ping", chat_id=99), headers=HEADERS)
    assert resp.status_code == 200
    telegram_http.post.assert_not_called()


def test_unknown_command_is_silent(client, telegram_http):
    resp = client.post("/webhook", json=make_update(text="/nonexistent"), headers=HEADERS)
    assert resp.status_code == 200
    telegram_http.post.assert_not_called()


def test_non_text_update_ignored(client, telegram_http):
    resp = client.post("/webhook", json=make_update(text=None), headers=HEADERS)
    assert resp.status_code == 200
    telegram_http.post.assert_not_called()


def test_typed_command_end_to_end(client, telegram_http):
    client.post("/webhook", json=make_update(text="/convert 0 C K"), headers=HEADERS)
    assert sent_texts(telegram_http) == ["0°C = 273.15°K"]
