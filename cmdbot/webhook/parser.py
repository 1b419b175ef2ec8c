from cmdbot.models import IncomingMessage


def extract_message(update: dict) -> IncomingMessage | None:
    """Extract the text message from a Telegram update; edits and other update kinds are ignored."""
    msg = update.get("message")
    if not msg:
        return None
    text = msg.get("text")
    if not text:
        return None

    sender = msg.get("from") or {}
    chat = msg.get("chat") or {}
    if "id" not in chat or "message_id" not in msg:
        return None

    return IncomingMessage(
        chat_id=chat["id"],
        message_id=msg["message_id"],
        text=text,
        sender=sender.get("username") or sender.get("first_name") or "unknown",
        sender_id=sender.get("id"),
        date=msg.get("date", 0),
    )
