"""Explicit outcome values threaded through the scrape pipeline.

Each pipeline stage returns either :class:`Ok` or :class:`Failed` instead of
raising, so failures can be broadcast and mapped to HTTP responses without
exception unwinding.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    FETCH = "fetch"
    PARSE = "parse"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Ok[T], Failed]
