"""Infrastructure layer - adapters for domain protocols.

Structure:
- context/: User agent parsing and IP geolocation
- persistence/: SQLAlchemy models, Database, session store adapters
- notifications/: Audit/alert sinks
- logging/: structlog adapter

Depends on the domain layer; the domain layer does NOT depend on this one.
"""
