from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import BondValuationError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: BondValuationError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return str(self.error)


Result = Union[Ok[T], Err]


def try_call(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result:
    """
    Run an engine operation, returning Ok(value) or Err(error).

    Only BondValuationError is captured; anything else is a bug and propagates.
    """
    try:
        return Ok(fn(*args, **kwargs))
    except BondValuationError as exc:
        return Err(exc)
