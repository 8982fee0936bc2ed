"""Result types for operations whose failures are expected outcomes.

A Result makes the failure path part of the return type so callers branch on
it explicitly instead of catching exceptions.

Usage:
    result = await service.create_session(user_id, tenant_id, options)
    match result:
        case Success(value=issued):
            set_cookie(issued.token)
        case Failure(error=error):
            deny_login(error.code)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
