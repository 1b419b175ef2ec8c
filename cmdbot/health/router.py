from fastapi import APIRouter, Request

from cmdbot.dependencies import get_command_registry, get_telegram_client
from cmdbot.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    telegram_ok = await get_telegram_client(request).is_available()
    return HealthResponse(
        status="ok" if telegram_ok else "degraded",
        commands=len(get_command_registry(request)),
    )
