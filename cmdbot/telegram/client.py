import logging

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bot_token: str,
        api_url: str = TELEGRAM_API_URL,
    ):
        self._http = http_client
        self._bot_token = bot_token
        self._api_url = api_url.rstrip("/")

    @property
    def _base_url(self) -> str:
        return f"{self._api_url}/bot{self._bot_token}"

    def _check_error(self, resp: httpx.Response) -> None:
        if resp.status_code == 401:
            logger.error(
                "Telegram API auth failed (401) — bot token revoked or invalid. "
                "Get a new one from @BotFather"
            )
        elif resp.status_code == 400 and "can't parse entities" in resp.text.lower():
            logger.error("Telegram rejected the message markup: %s", resp.text)
        resp.raise_for_status()

    async def send_message(
        self, chat_id: int | str, text: str, parse_mode: str | None = None
    ) -> None:
        url = f"{self._base_url}/sendMessage"
        payload: dict = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        resp = await self._http.post(url, json=payload)
        if resp.status_code != 200:
            logger.error("Send failed [%s] %s: %s", chat_id, resp.status_code, resp.text)
        self._check_error(resp)
        logger.info("Outgoing  [%s]: %s", chat_id, text[:80])

    async def get_me(self) -> dict:
        resp = await self._http.get(f"{self._base_url}/getMe")
        self._check_error(resp)
        return resp.json().get("result", {})

    async def is_available(self) -> bool:
        try:
            await self.get_me()
            return True
        except (httpx.HTTPError, ValueError):
            return False
