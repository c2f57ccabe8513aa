"""Explicit success/failure values returned by the service layer."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from app.models.errors import ServiceError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ServiceError


Result = Union[Ok[T], Err]
