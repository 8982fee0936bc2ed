"""End-to-end session lifecycle against the relational store.

Create, validate, expire, revoke and sign-out-elsewhere through
SessionLifecycleService backed by SQLAlchemySessionGateway on SQLite.
"""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy import update

from src.application.dtos import InvalidSession, ValidSession
from src.application.services import SessionLifecycleService
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import InvalidReason
from src.domain.value_objects import DeviceInfo, SessionPolicy
from src.infrastructure.notifications import NoOpSessionNotifier
from src.infrastructure.persistence.models import UserSessionModel
from src.infrastructure.persistence.repositories import SQLAlchemySessionGateway
from tests.conftest import make_options, safari_on_iphone

CHROME_ON_WINDOWS = DeviceInfo(
    browser="Chrome", os="Windows", device="desktop", is_mobile=False
)


@pytest_asyncio.fixture
async def gateway(database):
    return SQLAlchemySessionGateway(database)


@pytest.fixture
def service(gateway, mock_logger):
    return SessionLifecycleService(
        gateway, logger=mock_logger, notifier=NoOpSessionNotifier()
    )


async def _expire(database, session_id):
    past = datetime.now(UTC) - timedelta(minutes=1)
    async with database.get_session() as db_session:
        await db_session.execute(
            update(UserSessionModel)
            .where(UserSessionModel.id == session_id)
            .values(expires_at=past, idle_timeout_at=past)
        )


@pytest.mark.integration
class TestSessionLifecycleFlow:
    async def test_create_validate_expire_revoke(self, service, database):
        result = await service.create_session(
            "u1", "t1", make_options(device_info=CHROME_ON_WINDOWS)
        )
        assert isinstance(result, Success)
        issued = result.value
        assert len(issued.token) == 128
        assert issued.session.is_active is True
        assert issued.session.is_ephemeral is False

        outcome = await service.validate_session(issued.token)
        assert isinstance(outcome, ValidSession)
        assert outcome.user.user_id == "u1"

        await _expire(database, issued.session.id)
        assert await service.validate_session(issued.token) == InvalidSession(
            reason=InvalidReason.SESSION_EXPIRED
        )

        other = (
            await service.create_session(
                "u1", "t1", make_options(device_info=safari_on_iphone())
            )
        ).value
        assert await service.revoke_session(other.session.id, "manual_logout") is True
        assert await service.validate_session(other.token) == InvalidSession(
            reason=InvalidReason.SESSION_REVOKED
        )

    async def test_device_dedup(self, service):
        await service.create_session("u1", "t1", make_options())

        result = await service.create_session("u1", "t1", make_options())

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.CONCURRENT_SESSION_DENIED

    async def test_expired_session_frees_the_device(self, service, database):
        first = (await service.create_session("u1", "t1", make_options())).value
        await _expire(database, first.session.id)

        second = await service.create_session("u1", "t1", make_options())

        assert isinstance(second, Success)

    async def test_tenant_policy_is_applied(self, service, gateway):
        await gateway.set_policy(
            "t1",
            SessionPolicy(max_concurrent_sessions_per_device=2, max_idle_minutes=5),
        )

        first = await service.create_session("u1", "t1", make_options())
        second = await service.create_session("u1", "t1", make_options())
        third = await service.create_session("u1", "t1", make_options())

        assert first.value.session.max_idle_minutes == 5
        assert isinstance(second, Success)
        assert isinstance(third, Failure)

    async def test_refresh_and_sign_out_elsewhere(self, service):
        current = (await service.create_session("u1", "t1", make_options())).value
        phone = (
            await service.create_session(
                "u1", "t1", make_options(device_info=safari_on_iphone())
            )
        ).value

        assert await service.refresh_session(current.token, "10.0.0.9") is True
        assert await service.get_active_session_count("u1", "t1") == 2

        assert await service.revoke_other_sessions(current.token, "u1", "t1") == 1

        assert isinstance(await service.validate_session(current.token), ValidSession)
        assert await service.validate_session(phone.token) == InvalidSession(
            reason=InvalidReason.SESSION_REVOKED
        )
        sessions = await service.get_user_sessions("u1", "t1")
        assert [s.id for s in sessions][0] == current.session.id
        assert await service.get_active_session_count("u1", "t1") == 1
