import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from app.core.config import NotificationConfig, settings
from app.services.email_dispatch import EmailDispatchService
from app.services.lead_intake_service import LeadIntakeService
from app.services.lead_scoring import LeadScoringEngine
from app.services.sheet_logger import SheetLogService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@lru_cache
def get_notification_config() -> NotificationConfig:
    """Build the channel configuration once from environment settings."""
    config = NotificationConfig.from_settings(settings)
    logger.info(
        "Notification channels: sheets=%s email=%s",
        "on" if config.sheets_enabled else "off",
        "on" if config.email_enabled else "off",
    )
    return config


# ---------------------------------------------------------------------------
# Service factories
# ---------------------------------------------------------------------------


def get_scoring_engine() -> LeadScoringEngine:
    return LeadScoringEngine()


def get_sheet_logger(
    config: NotificationConfig = Depends(get_notification_config),
) -> Optional[SheetLogService]:
    if config.sheets is None:
        return None
    return SheetLogService(config.sheets)


def get_email_service(
    config: NotificationConfig = Depends(get_notification_config),
) -> Optional[EmailDispatchService]:
    if config.email is None:
        return None
    return EmailDispatchService(config.email)


def get_lead_intake_service(
    scoring_engine: LeadScoringEngine = Depends(get_scoring_engine),
    sheet_logger: Optional[SheetLogService] = Depends(get_sheet_logger),
    email_service: Optional[EmailDispatchService] = Depends(get_email_service),
) -> LeadIntakeService:
    """Build a :class:`LeadIntakeService` with injected collaborators."""
    return LeadIntakeService(
        scoring_engine=scoring_engine,
        sheet_logger=sheet_logger,
        email_service=email_service,
    )
