"""Application layer - session lifecycle use cases.

Structure:
- services/: SessionLifecycleService (create, validate, refresh, revoke, list)
- dtos/: Inputs and results of the service operations

Orchestrates domain logic through injected protocols; no infrastructure
imports.
"""
