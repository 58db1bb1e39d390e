"""Lead-specific Pydantic schemas (submission, score result, responses)."""

from typing import Dict, List, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email

from app.schemas.common import (
    ErrorResponse,
    FundingSource,
    LeadStatus,
    PropertyType,
    RecommendedAction,
    RoofSteepness,
    ServiceType,
    Stories,
    SuccessResponse,
    Timeline,
)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class LeadRecord(BaseModel):
    """A roofing project submitted through the intake wizard.

    Field names are snake_case in Python and camelCase on the wire
    (``zipCode``, ``fundingSource`` ...).  Only the camelCase names are
    accepted as input.  Instances are frozen once validated.
    """

    model_config = ConfigDict(alias_generator=to_camel, frozen=True)

    # Step 1: basics
    service_type: ServiceType
    property_type: PropertyType
    zip_code: str = Field(..., min_length=5)

    # Step 2: urgency
    active_leak: StrictBool

    # Step 3: funding
    funding_source: FundingSource

    # Step 4: roof details
    roof_steepness: RoofSteepness
    stories: Stories

    # Step 5: timeline
    timeline: Timeline

    # Step 6: contact
    full_name: str = Field(..., min_length=2)
    phone: str = Field(..., min_length=10)
    email: str
    consent: StrictBool

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        # Checked only; the address is kept exactly as typed
        validate_email(value)
        return value

    @field_validator("consent")
    @classmethod
    def consent_must_be_given(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("Must accept terms")
        return value

    def to_payload(self) -> Dict:
        """Return the record as it arrived on the wire (camelCase, plain values)."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Scoring output
# ---------------------------------------------------------------------------


class ScoreBreakdown(BaseModel):
    """Sub-scores behind a lead score.  ``penalties`` is subtracted."""

    model_config = ConfigDict(frozen=True)

    service: int = Field(..., ge=0)
    funding: int = Field(..., ge=0)
    urgency: int = Field(..., ge=0)
    penalties: int = Field(..., ge=0)

    @property
    def raw_total(self) -> int:
        return self.service + self.funding + self.urgency - self.penalties


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    status: LeadStatus
    breakdown: ScoreBreakdown
    flags: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LeadSubmissionResponse(SuccessResponse):
    """Response body returned after a lead was scored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: LeadStatus
    recommended_action: RecommendedAction


class StepValidationResponse(SuccessResponse):
    """Response body for a wizard step that passed validation."""

    step: int


class StepValidationErrorResponse(ErrorResponse):
    """Names the fields of a wizard step that still need attention."""

    step: int
    fields: List[str] = Field(default_factory=list)


class WizardStepOut(BaseModel):
    step: int
    title: str
    fields: List[str]


class FormOptionsResponse(BaseModel):
    """Everything the intake wizard needs to render its choices."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    steps: List[WizardStepOut]
    service_types: List[str]
    property_types: List[str]
    funding_categories: Dict[str, List[str]]
    uncategorised_funding: List[str]
    roof_steepness: List[str]
    stories: List[str]
    timelines: List[str]
