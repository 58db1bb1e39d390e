from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # CORS configuration, comma-separated origins
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"
    RATE_LIMIT: str = "10/minute"

    # Google Sheets lead log (all three required to enable the channel)
    GOOGLE_SHEET_ID: str = ""
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str = ""
    GOOGLE_PRIVATE_KEY: str = ""
    GOOGLE_SHEET_TITLE: str = "Leads"

    # Resend email alerts (API key + destination required)
    RESEND_API_KEY: str = ""
    ROOFER_EMAIL: str = ""
    EMAIL_FROM: str = "Roofing Leads <onboarding@resend.dev>"
    EMAIL_TIMEOUT_SECONDS: float = 10.0


class SheetsChannelConfig(BaseModel):
    """Credentials for the spreadsheet lead log."""

    model_config = ConfigDict(frozen=True)

    sheet_id: str
    service_account_email: str
    private_key: str
    sheet_title: str = "Leads"


class EmailChannelConfig(BaseModel):
    """Credentials for the email alert channel."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    to_address: str
    from_address: str = "Roofing Leads <onboarding@resend.dev>"
    timeout_seconds: float = 10.0


class NotificationConfig(BaseModel):
    """Which notification channels are enabled, with their credentials.

    A channel is ``None`` unless its full credential set is present.
    Built once from :class:`Settings` and handed to the dispatch
    collaborators; the scoring engine never sees it.
    """

    model_config = ConfigDict(frozen=True)

    sheets: Optional[SheetsChannelConfig] = None
    email: Optional[EmailChannelConfig] = None

    @classmethod
    def from_settings(cls, source: Settings) -> "NotificationConfig":
        sheets = None
        if (
            source.GOOGLE_SHEET_ID
            and source.GOOGLE_SERVICE_ACCOUNT_EMAIL
            and source.GOOGLE_PRIVATE_KEY
        ):
            sheets = SheetsChannelConfig(
                sheet_id=source.GOOGLE_SHEET_ID,
                service_account_email=source.GOOGLE_SERVICE_ACCOUNT_EMAIL,
                # Keys pasted into env files usually carry literal "\n"
                private_key=source.GOOGLE_PRIVATE_KEY.replace("\\n", "\n"),
                sheet_title=source.GOOGLE_SHEET_TITLE,
            )

        email = None
        if source.RESEND_API_KEY and source.ROOFER_EMAIL:
            email = EmailChannelConfig(
                api_key=source.RESEND_API_KEY,
                to_address=source.ROOFER_EMAIL,
                from_address=source.EMAIL_FROM,
                timeout_seconds=source.EMAIL_TIMEOUT_SECONDS,
            )

        return cls(sheets=sheets, email=email)

    @property
    def sheets_enabled(self) -> bool:
        return self.sheets is not None

    @property
    def email_enabled(self) -> bool:
        return self.email is not None


settings = Settings()
