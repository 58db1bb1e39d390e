"""API-layer dependency functions.

Re-exports all dependency factories from ``app.dependencies`` so that
endpoint modules only need to import from ``app.api.deps``.
"""

from app.dependencies import (
    # Configuration
    get_notification_config,
    # Service factories
    get_scoring_engine,
    get_sheet_logger,
    get_email_service,
    get_lead_intake_service,
)

__all__ = [
    "get_notification_config",
    "get_scoring_engine",
    "get_sheet_logger",
    "get_email_service",
    "get_lead_intake_service",
]
