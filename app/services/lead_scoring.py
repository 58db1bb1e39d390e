from typing import List, Tuple

from app.core.constants import (
    ACTIVE_LEAK_POINTS,
    BIG_JOB_SERVICES,
    CASH_5K_10K_BIG_JOB_POINTS,
    CASH_5K_10K_SMALL_JOB_POINTS,
    CASH_UNDER_5K_BIG_JOB_PENALTY,
    CASH_UNDER_5K_BIG_JOB_POINTS,
    CASH_UNDER_5K_SMALL_JOB_POINTS,
    DECLINE_THRESHOLD,
    DEFAULT_FUNDING_POINTS,
    FINANCE_UNDER_150_BIG_JOB_PENALTY,
    FINANCE_UNDER_150_POINTS,
    FLAG_BUDGET_TOO_LOW,
    FLAG_INSURANCE_DENIED,
    FLAG_LOW_BUDGET_FULL_ROOF,
    FLAG_LOW_MONTHLY_BUDGET,
    FLAG_TIMELINE_INDEFINITE,
    FLAT_FUNDING_POINTS,
    HOT_THRESHOLD,
    INSURANCE_DENIED_PENALTY,
    MAX_SCORE,
    MIN_SCORE,
    SERVICE_POINTS,
    TIMELINE_POINTS,
)
from app.schemas.common import FundingSource, LeadStatus, Timeline
from app.schemas.lead import LeadRecord, ScoreBreakdown, ScoreResult


class LeadScoringEngine:
    """Deterministic rule-based scoring for roofing leads.

    The score is built from three sub-scores evaluated in a fixed
    order, minus any penalties, and clamped to 0-100:

        - ``service``  value of the job type
        - ``funding``  how the homeowner intends to pay, judged against
          the job size (a $5k cash budget is fine for a repair but not
          for a full roof)
        - ``urgency``  active leak and timeline

    Flags and penalties accumulate across stages and are never
    retracted.  The engine holds no state and performs no I/O, so the
    same record always yields an identical :class:`ScoreResult`.
    """

    def score(self, record: LeadRecord) -> ScoreResult:
        flags: List[str] = []

        service = SERVICE_POINTS[record.service_type]
        is_big_job = record.service_type in BIG_JOB_SERVICES

        funding, penalties = self._score_funding(
            record.funding_source, is_big_job, flags
        )
        urgency = self._score_urgency(record.active_leak, record.timeline, flags)

        breakdown = ScoreBreakdown(
            service=service,
            funding=funding,
            urgency=urgency,
            penalties=penalties,
        )

        # Final clamp: must be the LAST numeric operation
        total = min(MAX_SCORE, max(MIN_SCORE, breakdown.raw_total))

        return ScoreResult(
            score=total,
            status=self.status_for(total),
            breakdown=breakdown,
            flags=tuple(flags),
        )

    @staticmethod
    def status_for(score: int) -> LeadStatus:
        if score >= HOT_THRESHOLD:
            return LeadStatus.HOT
        if score < DECLINE_THRESHOLD:
            return LeadStatus.DECLINE
        return LeadStatus.REVIEW

    @staticmethod
    def _score_funding(
        source: FundingSource, is_big_job: bool, flags: List[str]
    ) -> Tuple[int, int]:
        """Return ``(funding_points, penalties)`` for *source*.

        Exactly one rule applies per source.  Not Sure and Just
        Researching have no rule and fall through to the default.
        """
        if source in FLAT_FUNDING_POINTS:
            return FLAT_FUNDING_POINTS[source], 0

        if source is FundingSource.CASH_5K_10K:
            if is_big_job:
                flags.append(FLAG_LOW_BUDGET_FULL_ROOF)
                return CASH_5K_10K_BIG_JOB_POINTS, 0
            return CASH_5K_10K_SMALL_JOB_POINTS, 0

        if source is FundingSource.CASH_UNDER_5K:
            if is_big_job:
                flags.append(FLAG_BUDGET_TOO_LOW)
                return CASH_UNDER_5K_BIG_JOB_POINTS, CASH_UNDER_5K_BIG_JOB_PENALTY
            return CASH_UNDER_5K_SMALL_JOB_POINTS, 0

        if source is FundingSource.FINANCE_UNDER_150:
            if is_big_job:
                flags.append(FLAG_LOW_MONTHLY_BUDGET)
                return FINANCE_UNDER_150_POINTS, FINANCE_UNDER_150_BIG_JOB_PENALTY
            return FINANCE_UNDER_150_POINTS, 0

        if source is FundingSource.INSURANCE_DENIED:
            flags.append(FLAG_INSURANCE_DENIED)
            return 0, INSURANCE_DENIED_PENALTY

        return DEFAULT_FUNDING_POINTS, 0

    @staticmethod
    def _score_urgency(active_leak: bool, timeline: Timeline, flags: List[str]) -> int:
        urgency = 0
        if active_leak:
            urgency += ACTIVE_LEAK_POINTS

        if timeline is Timeline.JUST_RESEARCHING:
            # Overrides the leak points as well; no numeric penalty
            flags.append(FLAG_TIMELINE_INDEFINITE)
            return 0

        return urgency + TIMELINE_POINTS.get(timeline, 0)


_default_engine = LeadScoringEngine()


def score_lead(record: LeadRecord) -> ScoreResult:
    """Score *record* with the default engine."""
    return _default_engine.score(record)
