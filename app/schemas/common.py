from enum import Enum
from pydantic import BaseModel


class ServiceType(str, Enum):
    REPLACEMENT = "Replacement"
    STORM_DAMAGE = "Storm Damage"
    REPAIR = "Repair"
    OTHER = "Other"


class PropertyType(str, Enum):
    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"


class FundingSource(str, Enum):
    INSURANCE_APPROVED = "Insurance Approved"
    INSURANCE_WAITING = "Insurance Waiting"
    INSURANCE_DENIED = "Insurance Denied"
    CASH_OVER_20K = "Cash >$20k"
    CASH_10K_20K = "Cash $10k-$20k"
    CASH_5K_10K = "Cash $5k-$10k"
    CASH_UNDER_5K = "Cash <$5k"
    FINANCE_OVER_300 = "Finance >$300/mo"
    FINANCE_150_300 = "Finance $150-$300/mo"
    FINANCE_UNDER_150 = "Finance <$150/mo"
    NOT_SURE = "Not Sure"
    JUST_RESEARCHING = "Just Researching"


class FundingCategory(str, Enum):
    INSURANCE = "Insurance"
    CASH = "Cash"
    FINANCE = "Finance"


class RoofSteepness(str, Enum):
    FLAT = "Flat"
    LOW_SLOPE = "Low Slope"
    STEEP = "Steep"
    VERY_STEEP = "Very Steep"
    UNSURE = "Unsure"


class Stories(str, Enum):
    ONE = "1"
    TWO = "2"
    THREE_PLUS = "3+"


class Timeline(str, Enum):
    ASAP = "ASAP"
    ONE_TO_THREE_MONTHS = "1-3 Months"
    THREE_PLUS_MONTHS = "3+ Months"
    JUST_RESEARCHING = "Just Researching"


class LeadStatus(str, Enum):
    HOT = "HOT"
    REVIEW = "REVIEW"
    DECLINE = "DECLINE"


class RecommendedAction(str, Enum):
    CALL_IMMEDIATELY = "Call Immediately"
    MANUAL_REVIEW = "Manual Review"


class SuccessResponse(BaseModel):
    """Generic success response base."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Generic failure body returned to the intake form."""

    success: bool = False
    error: str
