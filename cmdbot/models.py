from pydantic import BaseModel


class IncomingMessage(BaseModel):
    chat_id: int
    message_id: int
    text: str
    sender: str = "unknown"  # first name or username
    sender_id: int | None = None
    date: int = 0


class HealthResponse(BaseModel):
    status: str
    commands: int
