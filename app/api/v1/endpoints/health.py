from fastapi import APIRouter, Depends

from app.core.config import NotificationConfig
from app.api.deps import get_notification_config

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(
    config: NotificationConfig = Depends(get_notification_config),
) -> dict:
    """Liveness probe; also reports which notification channels are on."""
    return {
        "status": "ok",
        "channels": {
            "sheets": config.sheets_enabled,
            "email": config.email_enabled,
        },
    }
