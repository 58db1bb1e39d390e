from typing import Dict, FrozenSet, List, Tuple

from app.schemas.common import (
    FundingCategory,
    FundingSource,
    LeadStatus,
    RecommendedAction,
    ServiceType,
    Timeline,
)

# ---------------------------------------------------------------------------
# Scoring tables
# ---------------------------------------------------------------------------

SERVICE_POINTS: Dict[ServiceType, int] = {
    ServiceType.REPLACEMENT: 30,
    ServiceType.STORM_DAMAGE: 30,
    ServiceType.REPAIR: 20,
    ServiceType.OTHER: 5,
}

# Full-roof jobs; budget rules get stricter for these
BIG_JOB_SERVICES: FrozenSet[ServiceType] = frozenset(
    {ServiceType.REPLACEMENT, ServiceType.STORM_DAMAGE}
)

# Funding sources whose points do not depend on job size
FLAT_FUNDING_POINTS: Dict[FundingSource, int] = {
    FundingSource.INSURANCE_APPROVED: 40,
    FundingSource.CASH_OVER_20K: 35,
    FundingSource.CASH_10K_20K: 30,
    FundingSource.FINANCE_OVER_300: 30,
    FundingSource.INSURANCE_WAITING: 25,
    FundingSource.FINANCE_150_300: 20,
}

CASH_5K_10K_BIG_JOB_POINTS: int = 10
CASH_5K_10K_SMALL_JOB_POINTS: int = 30
CASH_UNDER_5K_BIG_JOB_POINTS: int = 0
CASH_UNDER_5K_SMALL_JOB_POINTS: int = 15
FINANCE_UNDER_150_POINTS: int = 5
DEFAULT_FUNDING_POINTS: int = 0

CASH_UNDER_5K_BIG_JOB_PENALTY: int = 25
FINANCE_UNDER_150_BIG_JOB_PENALTY: int = 15
INSURANCE_DENIED_PENALTY: int = 30

ACTIVE_LEAK_POINTS: int = 25
TIMELINE_POINTS: Dict[Timeline, int] = {
    Timeline.ASAP: 20,
    Timeline.ONE_TO_THREE_MONTHS: 10,
}

MIN_SCORE: int = 0
MAX_SCORE: int = 100
HOT_THRESHOLD: int = 75  # inclusive
DECLINE_THRESHOLD: int = 35  # exclusive: scores below this decline

FLAG_LOW_BUDGET_FULL_ROOF = "Low Budget for Full Roof"
FLAG_BUDGET_TOO_LOW = "Budget too low for Replacement"
FLAG_LOW_MONTHLY_BUDGET = "Low Monthly Budget"
FLAG_INSURANCE_DENIED = "Insurance Denied"
FLAG_TIMELINE_INDEFINITE = "Timeline Indefinite"

# ---------------------------------------------------------------------------
# Notification presentation
# ---------------------------------------------------------------------------

RECOMMENDED_ACTIONS: Dict[LeadStatus, RecommendedAction] = {
    LeadStatus.HOT: RecommendedAction.CALL_IMMEDIATELY,
    LeadStatus.REVIEW: RecommendedAction.MANUAL_REVIEW,
    LeadStatus.DECLINE: RecommendedAction.MANUAL_REVIEW,
}

# (emoji, header title, subject text) per tier
EMAIL_TIER_STYLES: Dict[LeadStatus, Tuple[str, str, str]] = {
    LeadStatus.HOT: ("🔥", "HOT LEAD", "HOT LEAD — Priority Response"),
    LeadStatus.REVIEW: ("📋", "REVIEW NEEDED", "New Lead — Review Needed"),
    LeadStatus.DECLINE: ("❄️", "COLD LEAD", "New Lead — Low Priority"),
}

INSURANCE_PREFIX = "Insurance"
INSURANCE_FUNDING_METHOD = "Insurance Claim"
NO_CLAIM_STATUS = "N/A"
NO_FLAGS = "None"

SHEET_HEADERS: List[str] = [
    "Timestamp",
    "Status",
    "Score",
    "Category",
    "Full Name",
    "Phone",
    "Email",
    "ZIP Code",
    "Timeline",
    "Active Leak",
    "Funding Method",
    "Insurance Claim Status",
    "Roof Steepness",
    "Stories",
    "Flags",
    "Recommended Action",
    "RawPayload",
]

# ---------------------------------------------------------------------------
# Intake wizard
# ---------------------------------------------------------------------------

# JSON field names collected on each wizard step
WIZARD_STEPS: Dict[int, List[str]] = {
    1: ["serviceType", "propertyType", "zipCode"],
    2: ["activeLeak"],
    3: ["fundingSource"],
    4: ["roofSteepness", "stories"],
    5: ["timeline"],
    6: ["fullName", "phone", "email", "consent"],
}

WIZARD_STEP_TITLES: Dict[int, str] = {
    1: "Let's start with the basics.",
    2: "Is there an active leak?",
    3: "How is this funded?",
    4: "Roof Details",
    5: "Timeline",
    6: "Final Details",
}

FUNDING_CHOICES_BY_CATEGORY: Dict[FundingCategory, List[FundingSource]] = {
    FundingCategory.INSURANCE: [
        FundingSource.INSURANCE_APPROVED,
        FundingSource.INSURANCE_WAITING,
        FundingSource.INSURANCE_DENIED,
    ],
    FundingCategory.CASH: [
        FundingSource.CASH_OVER_20K,
        FundingSource.CASH_10K_20K,
        FundingSource.CASH_5K_10K,
        FundingSource.CASH_UNDER_5K,
    ],
    FundingCategory.FINANCE: [
        FundingSource.FINANCE_OVER_300,
        FundingSource.FINANCE_150_300,
        FundingSource.FINANCE_UNDER_150,
    ],
}

# Offered outside the category picker
UNCATEGORISED_FUNDING: List[FundingSource] = [
    FundingSource.NOT_SURE,
    FundingSource.JUST_RESEARCHING,
]
