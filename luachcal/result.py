# luachcal/result.py
"""Success/failure union returned by the fail-closed calculators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .exceptions import ComputationFailure

T = TypeVar("T")


@dataclass(frozen=True)
class CalcResult(Generic[T]):
    """Either a computed ``value`` or the ``error`` that prevented it.

    Periodic callers check ``ok`` instead of matching placeholder strings.
    """

    value: Optional[T] = None
    error: Optional[ComputationFailure] = None
    sentinel: str = ""

    @classmethod
    def success(cls, value: T) -> "CalcResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ComputationFailure, sentinel: str) -> "CalcResult[T]":
        return cls(error=error, sentinel=sentinel)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def display(self, render: Callable[[T], str] = str) -> str:
        """Render the value for display, or the sentinel text on failure."""
        if self.error is not None:
            return self.sentinel
        return render(self.value)  # type: ignore[arg-type]
