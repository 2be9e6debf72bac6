"""Tagged outcome of reading one source unit (a profile, a file, a line)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Value(Generic[T]):
    """The unit produced data."""

    value: T


@dataclass(frozen=True)
class Empty:
    """The unit exists but yielded nothing, or does not exist at all."""


@dataclass(frozen=True)
class Failed:
    """The unit could not be read; `reason` is safe to log."""

    reason: str


Result = Union[Value[T], Empty, Failed]
