"""Result type separating "work returned" from "work raised"."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """What happened when a unit of work ran.

    Exactly one of ``value`` / ``error`` is meaningful: ``error`` is the
    exception object that escaped the work, or None when it returned.

    Example:
        >>> Outcome.of(lambda: 42).unwrap()
        42
        >>> failed = Outcome.of(int, "not a number")
        >>> failed.succeeded
        False
        >>> type(failed.error).__name__
        'ValueError'
    """

    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def of(cls, work: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
        """Run ``work`` and record its return value or the exception it raised.

        Every ``BaseException`` counts as a failure, including
        ``KeyboardInterrupt`` and ``SystemExit``: the work did not return.
        """
        try:
            return cls(value=work(*args, **kwargs))
        except BaseException as exc:
            return cls(error=exc)

    @property
    def succeeded(self) -> bool:
        """True when the work returned normally."""
        return self.error is None

    def unwrap(self) -> T | None:
        """Return the value, or re-raise the recorded exception unchanged.

        The exception keeps its identity and original traceback.
        """
        if self.error is not None:
            raise self.error
        return self.value


__all__ = ["Outcome"]
