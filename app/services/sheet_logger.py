import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from app.core.config import SheetsChannelConfig
from app.core.constants import SHEET_HEADERS
from app.core.exceptions import SheetLogError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
_TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_sheets_service(config: SheetsChannelConfig):
    """Return an authorised Sheets v4 client for the service account."""
    creds = service_account.Credentials.from_service_account_info(
        {
            "type": "service_account",
            "client_email": config.service_account_email,
            "private_key": config.private_key,
            "token_uri": _TOKEN_URI,
        },
        scopes=SCOPES,
    )
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


class SheetLogService:
    """Append-only lead log backed by a Google Sheet.

    The target tab is created with :data:`SHEET_HEADERS` as its first
    row the first time it is missing.  The Google client is blocking,
    so every call runs in a worker thread.
    """

    def __init__(
        self,
        config: SheetsChannelConfig,
        service_factory: Optional[Callable[[SheetsChannelConfig], Any]] = None,
    ) -> None:
        self._config = config
        self._service_factory = service_factory or build_sheets_service

    async def append_lead_row(self, row: Dict[str, Any]) -> None:
        """Append *row* (keyed by header) to the lead log.

        Raises:
            SheetLogError: On any authentication, API or transport failure.
        """
        try:
            await asyncio.to_thread(self._append_sync, row)
        except Exception as exc:
            raise SheetLogError(f"Could not append lead row: {exc}") from exc
        logger.info("Lead row appended to sheet '%s'", self._config.sheet_title)

    # ------------------------------------------------------------------
    # Private helpers (run in a worker thread)
    # ------------------------------------------------------------------

    def _append_sync(self, row: Dict[str, Any]) -> None:
        service = self._service_factory(self._config)
        spreadsheets = service.spreadsheets()
        self._ensure_sheet(spreadsheets)

        values: List[Any] = [row.get(header, "") for header in SHEET_HEADERS]
        spreadsheets.values().append(
            spreadsheetId=self._config.sheet_id,
            range=self._a1_range(),
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": [values]},
        ).execute()

    def _ensure_sheet(self, spreadsheets) -> None:
        title = self._config.sheet_title
        meta = spreadsheets.get(
            spreadsheetId=self._config.sheet_id,
            fields="sheets.properties.title",
        ).execute()
        titles = {
            s.get("properties", {}).get("title") for s in meta.get("sheets", [])
        }
        if title in titles:
            return

        logger.info("Sheet tab '%s' missing, creating it with headers", title)
        spreadsheets.batchUpdate(
            spreadsheetId=self._config.sheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": title}}}]},
        ).execute()
        spreadsheets.values().update(
            spreadsheetId=self._config.sheet_id,
            range=self._a1_range(),
            valueInputOption="RAW",
            body={"values": [list(SHEET_HEADERS)]},
        ).execute()

    def _a1_range(self) -> str:
        return f"'{self._config.sheet_title}'!A1"
