from typing import Any, AsyncGenerator, Dict
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.rate_limit import limiter
from app.dependencies import get_notification_config
from app.core.config import NotificationConfig
from app.main import app
from app.schemas.lead import LeadRecord


_VALID_SUBMISSION: Dict[str, Any] = {
    "serviceType": "Replacement",
    "propertyType": "Residential",
    "zipCode": "75001",
    "activeLeak": True,
    "fundingSource": "Insurance Approved",
    "roofSteepness": "Steep",
    "stories": "2",
    "timeline": "ASAP",
    "fullName": "Dana Whitfield",
    "phone": "2145550134",
    "email": "dana.whitfield@example.com",
    "consent": True,
}


@pytest.fixture(autouse=True)
def _no_rate_limit():
    """Keep slowapi from throttling the test client."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture(autouse=True)
def _no_notification_channels():
    """Run the app with both channels disabled unless a test overrides it."""
    app.dependency_overrides[get_notification_config] = lambda: NotificationConfig()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def valid_submission() -> Dict[str, Any]:
    """Return a fresh, fully valid wire payload (camelCase keys)."""
    return dict(_VALID_SUBMISSION)


@pytest.fixture
def make_record():
    """Factory copying the valid record with python-name field overrides."""

    base = LeadRecord.model_validate(_VALID_SUBMISSION)

    def _make(**overrides: Any) -> LeadRecord:
        return base.model_copy(update=overrides)

    return _make


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` wired to the FastAPI app."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_sheet_logger() -> AsyncMock:
    """Return an ``AsyncMock`` standing in for ``SheetLogService``."""
    sheet_logger = AsyncMock()
    sheet_logger.append_lead_row = AsyncMock(return_value=None)
    return sheet_logger


@pytest.fixture
def mock_email_service() -> AsyncMock:
    """Return an ``AsyncMock`` standing in for ``EmailDispatchService``."""
    email_service = AsyncMock()
    email_service.send = AsyncMock(return_value="msg_123")
    return email_service
