"""
Pytest configuration and fixtures.
"""

import os
import sys
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from scoping.config import Settings  # noqa: E402
from scoping.email.interfaces import EmailOutcome, NotificationDocument  # noqa: E402
from scoping.storage.memory import InMemoryStore  # noqa: E402

ADMIN_EMAIL = "anthony.osborn@cobry.co.uk"
VALID_API_KEY = "re_test_123456"


@pytest.fixture(autouse=True)
def reset_env():
    """Reset environment variables between tests."""
    original_env = os.environ.copy()
    for name in ("RESEND_API_KEY", "RESEND_FROM_EMAIL", "RESEND_FROM_NAME", "API_PREFIX"):
        os.environ.pop(name, None)
    os.environ["STORE_BACKEND"] = "memory"
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def settings() -> Settings:
    """Settings with a valid credential and a verified-looking sender."""
    return Settings(
        _env_file=None,
        resend_api_key=VALID_API_KEY,
        resend_from_email="survey@cobry.co.uk",
        resend_from_name="Cobry Scoping",
        admin_email=ADMIN_EMAIL,
        user_copy_delay_seconds=0,
        store_backend="memory",
    )


@pytest.fixture
def sample_form_data() -> dict[str, Any]:
    return {
        "part1": {
            "mission": "Give ops a single view of fulfilment",
            "decisions": "Staffing per shift",
            "painPoints": "Spreadsheets emailed daily",
            "successCriteria": "Weekly review uses the dashboard",
        },
        "part2": {
            "primaryAudience": "Operations managers",
            "dataLiteracy": 4,
            "consumption": ["Desktop", "Mobile"],
            "concurrency": "20",
        },
        "part3": {"kpis": "Orders per hour", "granularity": "Hourly", "latency": "Real-time"},
        "part4": {"sources": "BigQuery", "quality": "Clean", "security": "Row level by region"},
        "part5": {"vizTypes": "Line charts", "interactivity": ["Filters"], "layout": "Story"},
        "part6": {"assets": []},
    }


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def document() -> NotificationDocument:
    return NotificationDocument(html="<p>Survey</p>", text="Survey")


@pytest.fixture
def mock_notifier() -> AsyncMock:
    """Notifier whose deliveries all succeed."""
    notifier = AsyncMock()
    notifier.send = AsyncMock(return_value=EmailOutcome.sent("email-123"))
    return notifier
