"""Build the email alert and sheet row for a scored lead.

Everything here is pure string/dict assembly; delivery lives in
``sheet_logger`` and ``email_dispatch``.
"""

import json
from datetime import datetime, timezone
from html import escape
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from app.core.constants import (
    EMAIL_TIER_STYLES,
    INSURANCE_FUNDING_METHOD,
    INSURANCE_PREFIX,
    NO_CLAIM_STATUS,
    NO_FLAGS,
    RECOMMENDED_ACTIONS,
    SHEET_HEADERS,
)
from app.schemas.common import FundingSource, LeadStatus, RecommendedAction
from app.schemas.lead import LeadRecord, ScoreResult


class FundingPresentation(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: str
    claim_status: str


class EmailMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject: str
    html: str


def split_funding_source(source: FundingSource) -> FundingPresentation:
    """Split insurance sources into a claim method and claim status.

    ``Insurance Approved`` becomes ``("Insurance Claim", "Approved")``;
    any other source is its own method with no claim status.
    """
    value = source.value
    if INSURANCE_PREFIX in value:
        return FundingPresentation(
            method=INSURANCE_FUNDING_METHOD,
            claim_status=value.replace(f"{INSURANCE_PREFIX} ", "", 1),
        )
    return FundingPresentation(method=value, claim_status=NO_CLAIM_STATUS)


def recommended_action(status: LeadStatus) -> RecommendedAction:
    return RECOMMENDED_ACTIONS[status]


def format_flags(flags: Sequence[str]) -> str:
    return ", ".join(flags) if flags else NO_FLAGS


def build_email(record: LeadRecord, result: ScoreResult) -> EmailMessage:
    emoji, header_title, subject_text = EMAIL_TIER_STYLES[result.status]
    funding = split_funding_source(record.funding_source)
    breakdown = result.breakdown

    details: List[str] = [
        f"👤 <strong>Name:</strong> {escape(record.full_name)}",
        f"📧 <strong>Email:</strong> {escape(record.email)}",
        f"📞 <strong>Phone:</strong> {escape(record.phone)}",
        f"📍 <strong>Location:</strong> {escape(record.zip_code)} "
        f"({record.property_type.value})",
        f"🛠️ <strong>Service:</strong> {record.service_type.value}",
        f"⏳ <strong>Timeline:</strong> {record.timeline.value}",
        f"📐 <strong>Roof Info:</strong> {record.roof_steepness.value}, "
        f"{record.stories.value} Story",
        f"💧 <strong>Active Leak:</strong> {'YES' if record.active_leak else 'No'}",
        f"💰 <strong>Funding:</strong> {escape(funding.method)}",
        f"📝 <strong>Claim Status:</strong> {escape(funding.claim_status)}",
        "🚩 <strong>FLAGS:</strong> "
        f'<span style="color:red; font-weight:bold;">'
        f"{escape(format_flags(result.flags))}</span>",
    ]

    html = (
        f"<h1>{emoji} {header_title}</h1>\n"
        f"<p><strong>Score: {result.score} / 100</strong></p>\n"
        "<h3>Lead Details:</h3>\n"
        f"<p>\n{'<br>'.join(details)}\n</p>\n"
        "<h3>📊 Score Breakdown</h3>\n"
        "<ul>\n"
        f"<li><strong>Service:</strong> {breakdown.service}</li>\n"
        f"<li><strong>Funding:</strong> {breakdown.funding}</li>\n"
        f"<li><strong>Urgency:</strong> {breakdown.urgency}</li>\n"
        f"<li><strong>Penalties:</strong> -{breakdown.penalties}</li>\n"
        "</ul>\n"
        "<hr>\n"
        "<p>This lead was automatically scored based on urgency, "
        "funding status, and service type.</p>"
    )

    return EmailMessage(
        subject=f"{emoji} {subject_text} (Score: {result.score})",
        html=html,
    )


def build_sheet_row(
    record: LeadRecord,
    result: ScoreResult,
    submitted_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Return one lead-log row keyed by :data:`SHEET_HEADERS`."""
    submitted_at = submitted_at or datetime.now(timezone.utc)
    funding = split_funding_source(record.funding_source)
    status = result.status.value

    row: Dict[str, Any] = {
        "Timestamp": submitted_at.isoformat(),
        "Status": status,
        "Score": result.score,
        "Category": status,
        "Full Name": record.full_name,
        "Phone": record.phone,
        "Email": record.email,
        "ZIP Code": record.zip_code,
        "Timeline": record.timeline.value,
        "Active Leak": "Yes" if record.active_leak else "No",
        "Funding Method": funding.method,
        "Insurance Claim Status": funding.claim_status,
        "Roof Steepness": record.roof_steepness.value,
        "Stories": record.stories.value,
        "Flags": format_flags(result.flags),
        "Recommended Action": recommended_action(result.status).value,
        "RawPayload": json.dumps(record.to_payload()),
    }
    # Keep header order so the row can be written positionally
    return {header: row[header] for header in SHEET_HEADERS}
