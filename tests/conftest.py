"""Shared pytest configuration and fixtures.

- Markers: unit, integration
- Factories for devices, options and Session entities
- Session service wired to the in-memory store with a mock logger
- File-backed SQLite database for integration tests (fresh per test)
"""

import asyncio
import inspect
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from src.application.dtos import CreateSessionOptions
from src.application.services import SessionLifecycleService
from src.domain.entities import Session
from src.domain.value_objects import DeviceInfo
from src.infrastructure.persistence.repositories import InMemorySessionGateway

CHROME_WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SAFARI_IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with a real database"
    )


def pytest_collection_modifyitems(config, items):
    """Add the asyncio marker to async tests that forgot it."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Factories
# =============================================================================


def chrome_on_windows() -> DeviceInfo:
    return DeviceInfo(browser="Chrome", os="Windows", device="desktop", is_mobile=False)


def safari_on_iphone() -> DeviceInfo:
    return DeviceInfo(browser="Safari", os="iOS", device="mobile", is_mobile=True)


def make_options(
    device_info: DeviceInfo | None = None,
    **overrides,
) -> CreateSessionOptions:
    """CreateSessionOptions with a Chrome/Windows desktop by default."""
    values = {
        "device_info": device_info or chrome_on_windows(),
        "ip_address": "10.0.0.5",
        "user_agent": CHROME_WINDOWS_UA,
    }
    values.update(overrides)
    return CreateSessionOptions(**values)


def make_session(
    *,
    user_id: str = "u1",
    tenant_id: str = "t1",
    device_info: DeviceInfo | None = None,
    created_at: datetime | None = None,
    **overrides,
) -> Session:
    """Session entity with sensible defaults (8h cap, 30 min idle)."""
    values = {
        "id": uuid7(),
        "user_id": user_id,
        "tenant_id": tenant_id,
        "token": uuid7().hex * 4,
        "device_info": device_info or chrome_on_windows(),
        "ip_address": "10.0.0.5",
        "created_at": created_at or datetime.now(UTC),
    }
    values.update(overrides)
    return Session(**values)


async def drain_notifications() -> None:
    """Let fire-and-forget notifier tasks run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """MagicMock logger whose bind() returns itself (one place to assert on)."""
    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def memory_gateway():
    return InMemorySessionGateway()


@pytest.fixture
def service(memory_gateway, mock_logger):
    """Session service over the in-memory store."""
    return SessionLifecycleService(memory_gateway, logger=mock_logger)


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh file-backed SQLite database with all tables created."""
    from src.infrastructure.persistence.database import Database

    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'sessions.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()
