"""Unit tests for SQLAlchemySessionGateway statement sequencing.

The database is replaced with a recording stand-in so the PostgreSQL branch
can be checked without a PostgreSQL server.
"""

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.sql.dml import Insert

from src.domain.enums import GatewayErrorKind
from src.domain.protocols import GatewayError
from src.infrastructure.persistence.repositories import SQLAlchemySessionGateway
from tests.conftest import make_session

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


class RecordingDatabase:
    """Database stand-in that records executed statements."""

    def __init__(self, dialect_name: str, rowcount: int = 1) -> None:
        self.engine = SimpleNamespace(dialect=SimpleNamespace(name=dialect_name))
        self.session = AsyncMock()
        self.session.execute.return_value = MagicMock(rowcount=rowcount)

    @asynccontextmanager
    async def get_session(self):
        yield self.session

    @property
    def statements(self) -> list:
        return [c.args[0] for c in self.session.execute.call_args_list]


async def _insert(gateway, session):
    await gateway.insert_session(session, max_per_device=1, max_total=None, now=T0)


@pytest.mark.unit
class TestInsertSessionLocking:
    async def test_postgresql_takes_user_lock_before_insert(self):
        database = RecordingDatabase("postgresql")
        gateway = SQLAlchemySessionGateway(database)

        await _insert(gateway, make_session(created_at=T0))

        lock, insert = database.statements
        assert "pg_advisory_xact_lock" in str(lock)
        assert "t1:u1" in lock.compile().params.values()
        assert isinstance(insert, Insert)

    async def test_lock_key_is_per_user_and_tenant(self):
        database = RecordingDatabase("postgresql")
        gateway = SQLAlchemySessionGateway(database)

        await _insert(
            gateway, make_session(created_at=T0, user_id="u9", tenant_id="t4")
        )

        assert "t4:u9" in database.statements[0].compile().params.values()

    async def test_sqlite_runs_the_insert_alone(self):
        database = RecordingDatabase("sqlite")
        gateway = SQLAlchemySessionGateway(database)

        await _insert(gateway, make_session(created_at=T0))

        (insert,) = database.statements
        assert isinstance(insert, Insert)

    async def test_no_row_inserted_is_conflict(self):
        database = RecordingDatabase("postgresql", rowcount=0)
        gateway = SQLAlchemySessionGateway(database)

        with pytest.raises(GatewayError) as exc_info:
            await _insert(gateway, make_session(created_at=T0))

        assert exc_info.value.kind is GatewayErrorKind.CONFLICT
