from typing import List, Optional


class RoofLeadError(Exception):
    """Base class for all lead-intake domain exceptions.

    Every custom exception in this module inherits from here so that a
    single ``except RoofLeadError`` clause can catch any domain
    error.
    """

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(detail)


class LeadValidationError(RoofLeadError):
    """Raised when a submission fails schema validation.

    ``errors`` carries every field-level violation so it can be logged;
    the client only ever sees the generic ``detail``.
    """

    def __init__(
        self,
        errors: Optional[List] = None,
        detail: str = "Validation failed",
    ):
        self.errors = list(errors or [])
        super().__init__(detail)

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class InvalidWizardStepError(RoofLeadError):
    """Raised when a step number outside the intake wizard is requested."""

    def __init__(self, detail: str = "Unknown wizard step"):
        super().__init__(detail)


class DispatchError(RoofLeadError):
    """Raised when a notification channel fails.

    Always absorbed by the intake service; never reaches the client.
    """

    def __init__(self, detail: str = "Notification dispatch failed"):
        super().__init__(detail)


class SheetLogError(DispatchError):
    """Raised when appending to the Google Sheets lead log fails."""

    def __init__(self, detail: str = "Sheet logging failed"):
        super().__init__(detail)


class EmailDispatchError(DispatchError):
    """Raised when the email alert could not be delivered to Resend."""

    def __init__(self, detail: str = "Email dispatch failed"):
        super().__init__(detail)
