"""Pydantic schemas package – re-exports for convenience."""

# Common enums
from app.schemas.common import (
    ServiceType as ServiceType,
    PropertyType as PropertyType,
    FundingSource as FundingSource,
    FundingCategory as FundingCategory,
    RoofSteepness as RoofSteepness,
    Stories as Stories,
    Timeline as Timeline,
    LeadStatus as LeadStatus,
    RecommendedAction as RecommendedAction,
    SuccessResponse as SuccessResponse,
    ErrorResponse as ErrorResponse,
)

# Lead schemas
from app.schemas.lead import (
    LeadRecord as LeadRecord,
    ScoreBreakdown as ScoreBreakdown,
    ScoreResult as ScoreResult,
    LeadSubmissionResponse as LeadSubmissionResponse,
    StepValidationResponse as StepValidationResponse,
    StepValidationErrorResponse as StepValidationErrorResponse,
    WizardStepOut as WizardStepOut,
    FormOptionsResponse as FormOptionsResponse,
)
