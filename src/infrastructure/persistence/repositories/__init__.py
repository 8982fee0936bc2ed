"""Session store adapters implementing SessionGateway."""

from src.infrastructure.persistence.repositories.memory_session_gateway import (
    InMemorySessionGateway,
)
from src.infrastructure.persistence.repositories.sqlalchemy_session_gateway import (
    SQLAlchemySessionGateway,
)

__all__ = ["InMemorySessionGateway", "SQLAlchemySessionGateway"]
