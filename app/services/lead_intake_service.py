import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from app.core.exceptions import DispatchError, LeadValidationError
from app.schemas.common import LeadStatus, RecommendedAction
from app.schemas.lead import LeadRecord, ScoreResult
from app.services.email_dispatch import EmailDispatchService
from app.services.lead_scoring import LeadScoringEngine
from app.services.lead_validation import LeadValidator, ValidationResult
from app.services.notification_content import (
    build_email,
    build_sheet_row,
    format_flags,
    recommended_action,
)
from app.services.sheet_logger import SheetLogService

logger = logging.getLogger(__name__)


class SubmissionOutcome(BaseModel):
    """What the intake endpoint needs after a lead was scored."""

    model_config = ConfigDict(frozen=True)

    record: LeadRecord
    result: ScoreResult
    recommended_action: RecommendedAction

    @property
    def status(self) -> LeadStatus:
        return self.result.status


class LeadIntakeService:
    """Orchestrates the lead-intake workflow.

    Dependencies are injected via the constructor so the class remains
    stateless and easily testable.  Either notification channel may be
    ``None`` when its credentials are not configured.
    """

    def __init__(
        self,
        scoring_engine: LeadScoringEngine,
        sheet_logger: Optional[SheetLogService] = None,
        email_service: Optional[EmailDispatchService] = None,
    ) -> None:
        self._scoring_engine = scoring_engine
        self._sheet_logger = sheet_logger
        self._email_service = email_service

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def process_submission(self, raw: Any) -> SubmissionOutcome:
        """Execute the complete intake pipeline for one submission.

        Steps:
        1. Validate the raw payload (every bad field is collected)
        2. Score the lead
        3. Build the email alert and sheet row
        4. Dispatch both channels concurrently, best-effort

        Raises:
            LeadValidationError: If the payload fails validation.
        """
        # 1. Validate
        validation: ValidationResult = LeadValidator.validate(raw)
        if not validation.is_valid:
            logger.warning(
                "Lead validation failed for fields: %s",
                ", ".join(validation.fields),
            )
            raise LeadValidationError(validation.errors)
        record = validation.record

        # 2. Score (pure business logic)
        result = self._scoring_engine.score(record)
        action = recommended_action(result.status)
        logger.info(
            "Lead scored: %s (%s) - Flags: %s",
            result.status.value,
            result.score,
            format_flags(result.flags),
        )

        # 3 + 4. Notify; failures never reach the caller
        await self._dispatch_notifications(record, result)

        return SubmissionOutcome(
            record=record,
            result=result,
            recommended_action=action,
        )

    @staticmethod
    def validate_step(step: int, raw: Any) -> ValidationResult:
        """Validate the fields of a single wizard step.

        Raises:
            InvalidWizardStepError: If *step* is not a wizard step.
        """
        return LeadValidator.validate_step(step, raw)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _dispatch_notifications(
        self, record: LeadRecord, result: ScoreResult
    ) -> None:
        tasks: List[Awaitable[None]] = []

        if self._sheet_logger is not None:
            row = build_sheet_row(record, result, datetime.now(timezone.utc))
            tasks.append(self._log_to_sheet(row))
        else:
            logger.debug("Sheet logging disabled; credentials not configured")

        if self._email_service is not None:
            tasks.append(self._send_email(record, result))
        else:
            logger.debug("Email alerts disabled; credentials not configured")

        if tasks:
            await asyncio.gather(*tasks)

    async def _log_to_sheet(self, row: Dict[str, Any]) -> None:
        try:
            await self._sheet_logger.append_lead_row(row)
        except DispatchError as exc:
            logger.warning("SHEET ERROR (non-fatal): %s", exc.detail, exc_info=True)
        except Exception:
            logger.warning("Unexpected sheet logging failure", exc_info=True)

    async def _send_email(self, record: LeadRecord, result: ScoreResult) -> None:
        try:
            await self._email_service.send(build_email(record, result))
        except DispatchError as exc:
            logger.warning("EMAIL ERROR (non-fatal): %s", exc.detail, exc_info=True)
        except Exception:
            logger.warning("Unexpected email dispatch failure", exc_info=True)
