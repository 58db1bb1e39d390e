import json
from datetime import datetime, timezone

import pytest

from app.core.constants import SHEET_HEADERS
from app.schemas.common import (
    FundingSource,
    LeadStatus,
    RecommendedAction,
    ServiceType,
    Timeline,
)
from app.services.lead_scoring import score_lead
from app.services.lead_validation import LeadValidator
from app.services.notification_content import (
    build_email,
    build_sheet_row,
    format_flags,
    recommended_action,
    split_funding_source,
)


class TestFundingSplit:
    @pytest.mark.parametrize(
        "source,method,claim_status",
        [
            (FundingSource.INSURANCE_APPROVED, "Insurance Claim", "Approved"),
            (FundingSource.INSURANCE_WAITING, "Insurance Claim", "Waiting"),
            (FundingSource.INSURANCE_DENIED, "Insurance Claim", "Denied"),
            (FundingSource.CASH_OVER_20K, "Cash >$20k", "N/A"),
            (FundingSource.FINANCE_150_300, "Finance $150-$300/mo", "N/A"),
            (FundingSource.NOT_SURE, "Not Sure", "N/A"),
            (FundingSource.JUST_RESEARCHING, "Just Researching", "N/A"),
        ],
    )
    def test_split(self, source, method, claim_status):
        presentation = split_funding_source(source)
        assert presentation.method == method
        assert presentation.claim_status == claim_status


class TestSmallHelpers:
    def test_format_flags_joins_with_comma(self):
        assert format_flags(("Insurance Denied", "Timeline Indefinite")) == (
            "Insurance Denied, Timeline Indefinite"
        )

    def test_format_flags_empty_is_none(self):
        assert format_flags(()) == "None"

    @pytest.mark.parametrize(
        "status,action",
        [
            (LeadStatus.HOT, RecommendedAction.CALL_IMMEDIATELY),
            (LeadStatus.REVIEW, RecommendedAction.MANUAL_REVIEW),
            (LeadStatus.DECLINE, RecommendedAction.MANUAL_REVIEW),
        ],
    )
    def test_recommended_action(self, status, action):
        assert recommended_action(status) == action


class TestSheetRow:
    def test_row_follows_header_schema(self, make_record):
        record = make_record(
            service_type=ServiceType.STORM_DAMAGE,
            funding_source=FundingSource.INSURANCE_DENIED,
            active_leak=True,
            timeline=Timeline.ONE_TO_THREE_MONTHS,
        )
        result = score_lead(record)
        submitted_at = datetime(2026, 5, 4, 15, 30, tzinfo=timezone.utc)

        row = build_sheet_row(record, result, submitted_at)

        assert list(row.keys()) == SHEET_HEADERS
        assert row["Timestamp"] == "2026-05-04T15:30:00+00:00"
        assert row["Status"] == "REVIEW"
        assert row["Category"] == "REVIEW"
        assert row["Score"] == 35
        assert row["Full Name"] == "Dana Whitfield"
        assert row["ZIP Code"] == "75001"
        assert row["Timeline"] == "1-3 Months"
        assert row["Active Leak"] == "Yes"
        assert row["Funding Method"] == "Insurance Claim"
        assert row["Insurance Claim Status"] == "Denied"
        assert row["Roof Steepness"] == "Steep"
        assert row["Stories"] == "2"
        assert row["Flags"] == "Insurance Denied"
        assert row["Recommended Action"] == "Manual Review"

    def test_raw_payload_is_wire_json(self, make_record):
        record = make_record(active_leak=False)
        row = build_sheet_row(record, score_lead(record))

        payload = json.loads(row["RawPayload"])

        assert payload["fundingSource"] == "Insurance Approved"
        assert payload["activeLeak"] is False
        assert payload["consent"] is True

    def test_email_is_logged_as_typed(self, valid_submission):
        record = LeadValidator.validate(
            {**valid_submission, "email": "Dana.Whitfield@Example.COM"}
        ).record

        row = build_sheet_row(record, score_lead(record))

        assert row["Email"] == "Dana.Whitfield@Example.COM"
        assert json.loads(row["RawPayload"])["email"] == "Dana.Whitfield@Example.COM"

    def test_no_flags_written_as_none(self, make_record):
        record = make_record()
        row = build_sheet_row(record, score_lead(record))
        assert row["Flags"] == "None"
        assert row["Active Leak"] == "Yes"
        assert row["Recommended Action"] == "Call Immediately"


class TestEmail:
    def test_hot_subject(self, make_record):
        message = build_email(make_record(), score_lead(make_record()))
        assert message.subject == "🔥 HOT LEAD — Priority Response (Score: 100)"
        assert "<h1>🔥 HOT LEAD</h1>" in message.html

    def test_review_subject(self, make_record):
        record = make_record(
            service_type=ServiceType.REPAIR,
            funding_source=FundingSource.CASH_5K_10K,
            active_leak=False,
            timeline=Timeline.JUST_RESEARCHING,
        )
        message = build_email(record, score_lead(record))
        assert message.subject == "📋 New Lead — Review Needed (Score: 50)"

    def test_decline_subject(self, make_record):
        record = make_record(
            funding_source=FundingSource.CASH_UNDER_5K,
            active_leak=False,
            timeline=Timeline.THREE_PLUS_MONTHS,
        )
        message = build_email(record, score_lead(record))
        assert message.subject == "❄️ New Lead — Low Priority (Score: 5)"
        assert "COLD LEAD" in message.html

    def test_body_lists_details_and_breakdown(self, make_record):
        record = make_record(
            service_type=ServiceType.STORM_DAMAGE,
            funding_source=FundingSource.INSURANCE_DENIED,
            timeline=Timeline.ONE_TO_THREE_MONTHS,
        )
        html = build_email(record, score_lead(record)).html

        assert "Dana Whitfield" in html
        assert "dana.whitfield@example.com" in html
        assert "2145550134" in html
        assert "75001 (Residential)" in html
        assert "Storm Damage" in html
        assert "Steep, 2 Story" in html
        assert "Insurance Claim" in html
        assert "<strong>Claim Status:</strong> Denied" in html
        assert "Insurance Denied</span>" in html
        assert "<li><strong>Penalties:</strong> -30</li>" in html
        assert "<li><strong>Urgency:</strong> 35</li>" in html

    def test_user_values_are_escaped(self, make_record):
        record = make_record(full_name="<script>alert(1)</script>")
        html = build_email(record, score_lead(record)).html

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
