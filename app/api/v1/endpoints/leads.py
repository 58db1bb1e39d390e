import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.constants import (
    FUNDING_CHOICES_BY_CATEGORY,
    UNCATEGORISED_FUNDING,
    WIZARD_STEP_TITLES,
    WIZARD_STEPS,
)
from app.core.rate_limit import limiter
from app.schemas.common import (
    PropertyType,
    RoofSteepness,
    ServiceType,
    Stories,
    Timeline,
)
from app.schemas.lead import (
    FormOptionsResponse,
    LeadSubmissionResponse,
    StepValidationErrorResponse,
    StepValidationResponse,
    WizardStepOut,
)
from app.services.lead_intake_service import LeadIntakeService
from app.api.deps import get_lead_intake_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["Leads"])

# Path the intake form posts to
legacy_router = APIRouter(prefix="/api", tags=["Leads"])


@router.post("/process", response_model=LeadSubmissionResponse)
@limiter.limit(settings.RATE_LIMIT)
async def process_lead(
    request: Request,
    payload: Any = Body(None),
    service: LeadIntakeService = Depends(get_lead_intake_service),
) -> LeadSubmissionResponse:
    """Validate, score and route a completed intake form.

    The body is taken as raw JSON so that every field violation is
    collected by :class:`LeadValidator` rather than FastAPI.  Failures
    surface through the ``LeadValidationError`` handler (HTTP 400);
    notification problems never affect the response.
    """
    outcome = await service.process_submission(payload)
    return LeadSubmissionResponse(
        status=outcome.status,
        recommended_action=outcome.recommended_action,
    )


legacy_router.add_api_route(
    "/process-lead",
    process_lead,
    methods=["POST"],
    response_model=LeadSubmissionResponse,
    include_in_schema=False,
)


@router.post(
    "/validate-step/{step}",
    response_model=StepValidationResponse,
    responses={400: {"model": StepValidationErrorResponse}},
)
async def validate_step(
    step: int,
    payload: Any = Body(None),
    service: LeadIntakeService = Depends(get_lead_intake_service),
):
    """Check the fields of one wizard step before the form advances.

    Only field names are returned on failure, never submitted values.
    """
    result = service.validate_step(step, payload)
    if not result.is_valid:
        logger.info("Wizard step %s invalid: %s", step, ", ".join(result.fields))
        body = StepValidationErrorResponse(
            error="Validation failed", step=step, fields=result.fields
        )
        return JSONResponse(status_code=400, content=body.model_dump())
    return StepValidationResponse(step=step)


@router.get("/form-options", response_model=FormOptionsResponse)
async def get_form_options() -> FormOptionsResponse:
    """Return wizard steps and every choice list the form renders."""
    return FormOptionsResponse(
        steps=[
            WizardStepOut(step=n, title=WIZARD_STEP_TITLES[n], fields=fields)
            for n, fields in sorted(WIZARD_STEPS.items())
        ],
        service_types=[s.value for s in ServiceType],
        property_types=[p.value for p in PropertyType],
        funding_categories={
            category.value: [f.value for f in choices]
            for category, choices in FUNDING_CHOICES_BY_CATEGORY.items()
        },
        uncategorised_funding=[f.value for f in UNCATEGORISED_FUNDING],
        roof_steepness=[r.value for r in RoofSteepness],
        stories=[s.value for s in Stories],
        timelines=[t.value for t in Timeline],
    )
