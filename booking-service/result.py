"""
Result values returned by booking lifecycle operations.

Validation failures are returned as ``Err(ValidationError(...))`` instead of
being raised, so every call site handles the failure path explicitly.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationError:
    """Caller supplied malformed, missing or contradictory input."""
    message: str
    field: Optional[str] = None


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ValidationError


Result = Union[Ok[T], Err]


def invalid(message: str, field: Optional[str] = None) -> Err:
    """Shorthand for a validation failure."""
    return Err(ValidationError(message, field))
