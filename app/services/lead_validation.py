from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from app.core.constants import WIZARD_STEPS
from app.core.exceptions import InvalidWizardStepError
from app.schemas.lead import LeadRecord

# Location used when the body itself is not a JSON object
_BODY_FIELD = "body"


class FieldViolation(BaseModel):
    """One field that failed its constraint."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    error_type: str


class ValidationResult(BaseModel):
    """Outcome of validating a raw submission.

    Exactly one of ``record`` / ``errors`` is meaningful: a valid full
    submission carries the frozen :class:`LeadRecord`, an invalid one
    lists every violated field.
    """

    model_config = ConfigDict(frozen=True)

    record: Optional[LeadRecord] = None
    errors: List[FieldViolation] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class LeadValidator:
    """Shape and field-level checks for intake submissions.

    Malformed input is an expected outcome here, so nothing in this
    class raises for bad data; callers inspect the returned
    :class:`ValidationResult`.
    """

    @staticmethod
    def validate(raw: Any) -> ValidationResult:
        """Validate a complete submission, reporting every bad field."""
        if not isinstance(raw, dict):
            return ValidationResult(errors=[_not_an_object(raw)])

        try:
            record = LeadRecord.model_validate(raw)
        except ValidationError as exc:
            return ValidationResult(errors=_violations(exc))
        return ValidationResult(record=record)

    @staticmethod
    def validate_step(step: int, raw: Any) -> ValidationResult:
        """Validate only the fields collected on wizard *step*.

        Used by the wizard before it advances.  Violations on fields
        belonging to later steps are ignored.

        Raises:
            InvalidWizardStepError: If *step* is not a wizard step.
        """
        step_fields = WIZARD_STEPS.get(step)
        if step_fields is None:
            raise InvalidWizardStepError(f"Wizard step {step} does not exist")

        if not isinstance(raw, dict):
            return ValidationResult(errors=[_not_an_object(raw)])

        try:
            LeadRecord.model_validate(raw)
        except ValidationError as exc:
            errors = [v for v in _violations(exc) if v.field in step_fields]
            return ValidationResult(errors=errors)
        return ValidationResult()


def _not_an_object(raw: Any) -> FieldViolation:
    return FieldViolation(
        field=_BODY_FIELD,
        message=f"Expected a JSON object, got {type(raw).__name__}",
        error_type="model_type",
    )


def _violations(exc: ValidationError) -> List[FieldViolation]:
    """Flatten pydantic errors into one violation per field.

    The first message per field wins; pydantic may report several
    (e.g. a type error plus a custom validator) for the same location.
    """
    seen: Dict[str, FieldViolation] = {}
    for err in exc.errors():
        loc = err.get("loc") or (_BODY_FIELD,)
        field = str(loc[0])
        if field in seen:
            continue
        seen[field] = FieldViolation(
            field=field,
            message=err.get("msg", "Invalid value"),
            error_type=err.get("type", "value_error"),
        )
    return list(seen.values())
