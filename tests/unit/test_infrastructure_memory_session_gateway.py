"""Unit tests for the in-memory session store.

Concurrency is exercised with asyncio.gather; the store's lock makes the cap
check and insert (and revocation) atomic across coroutines.
"""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from src.domain.enums import GatewayErrorKind
from src.domain.protocols import GatewayError
from src.domain.value_objects import DeviceInfo, SessionPolicy
from tests.conftest import make_session, safari_on_iphone

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


async def _insert(gateway, session, *, max_per_device=1, max_total=None):
    await gateway.insert_session(
        session,
        max_per_device=max_per_device,
        max_total=max_total,
        now=session.created_at,
    )


@pytest.mark.unit
class TestInsertSession:
    async def test_insert_and_find(self, memory_gateway):
        session = make_session(created_at=T0)

        await _insert(memory_gateway, session)

        found = await memory_gateway.find_by_token(session.token)
        assert found == session
        assert found is not session

    async def test_per_device_cap(self, memory_gateway):
        await _insert(memory_gateway, make_session(created_at=T0))

        with pytest.raises(GatewayError) as exc_info:
            await _insert(memory_gateway, make_session(created_at=T0))

        assert exc_info.value.kind is GatewayErrorKind.CONFLICT

    async def test_total_cap(self, memory_gateway):
        devices = [
            DeviceInfo(browser=b, os="Windows", device="desktop")
            for b in ("Chrome", "Firefox", "Edge")
        ]
        for device in devices[:2]:
            await _insert(
                memory_gateway,
                make_session(created_at=T0, device_info=device),
                max_total=2,
            )

        with pytest.raises(GatewayError):
            await _insert(
                memory_gateway,
                make_session(created_at=T0, device_info=devices[2]),
                max_total=2,
            )

    async def test_expired_sessions_do_not_count(self, memory_gateway):
        await _insert(memory_gateway, make_session(created_at=T0))

        later = make_session(created_at=T0 + timedelta(hours=1))
        await _insert(memory_gateway, later)

        assert await memory_gateway.count_active("u1", "t1", later.created_at) == 1

    async def test_concurrent_inserts_respect_cap(self, memory_gateway):
        sessions = [make_session(created_at=T0) for _ in range(10)]

        results = await asyncio.gather(
            *(_insert(memory_gateway, s) for s in sessions), return_exceptions=True
        )

        assert sum(1 for r in results if r is None) == 1
        assert all(
            isinstance(r, GatewayError) for r in results if r is not None
        )

    async def test_duplicate_token_conflicts(self, memory_gateway):
        session = make_session(created_at=T0)
        await _insert(memory_gateway, session, max_per_device=5)

        with pytest.raises(GatewayError):
            await _insert(
                memory_gateway,
                make_session(created_at=T0, token=session.token),
                max_per_device=5,
            )


@pytest.mark.unit
class TestRevokeAndTouch:
    async def test_revoke_exactly_once_under_concurrency(self, memory_gateway):
        session = make_session(created_at=T0)
        await _insert(memory_gateway, session)

        results = await asyncio.gather(
            *(
                memory_gateway.revoke(
                    session.id, reason="manual_logout", revoked_by=None, revoked_at=T0
                )
                for _ in range(10)
            )
        )

        assert sum(1 for r in results if r is not None) == 1

    async def test_touch_revoked_session_is_rejected(self, memory_gateway):
        session = make_session(created_at=T0)
        await _insert(memory_gateway, session)
        await memory_gateway.revoke(
            session.id, reason="timeout", revoked_by=None, revoked_at=T0
        )

        touched = await memory_gateway.touch(
            session.id,
            last_activity_at=T0,
            idle_timeout_at=T0 + timedelta(minutes=30),
            ip_address=None,
        )

        assert touched is False

    async def test_revoke_unknown_is_none(self, memory_gateway):
        session = make_session()

        assert (
            await memory_gateway.revoke(
                session.id, reason="timeout", revoked_by=None, revoked_at=T0
            )
            is None
        )


@pytest.mark.unit
class TestListing:
    async def test_list_most_recent_first_and_scoped(self, memory_gateway):
        older = make_session(created_at=T0)
        newer = make_session(
            created_at=T0 + timedelta(minutes=5), device_info=safari_on_iphone()
        )
        other_tenant = make_session(created_at=T0, tenant_id="t2")
        for session in (older, newer, other_tenant):
            await _insert(memory_gateway, session)

        listed = await memory_gateway.list_for_user("u1", "t1")

        assert [s.id for s in listed] == [newer.id, older.id]

    async def test_policy_round_trip(self, memory_gateway):
        policy = SessionPolicy(max_concurrent_sessions_per_device=3)

        await memory_gateway.set_policy("t1", policy)

        assert await memory_gateway.get_policy("t1") == policy
        assert await memory_gateway.get_policy("t2") is None
