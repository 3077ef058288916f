# app/result.py
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import AppError

T = TypeVar("T")

# Store, validator, auth and handlers return these instead of raising.
# The pipeline is the only place an Err becomes a response.


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: AppError


Result = Union[Ok[T], Err]

CONTINUE: Ok[None] = Ok(None)
