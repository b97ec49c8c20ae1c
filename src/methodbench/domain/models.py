"""Core data types for methodbench.

All types are frozen dataclasses with complete type annotations.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from methodbench.domain.errors import ConfigurationError


class _Unset:
    """Marker for an expectation slot that was not supplied."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

FailurePredicate = Callable[[BaseException], bool]


class ExpectationKind(Enum):
    """Which outcome variant a trial expects."""

    VALUE = "value"
    FAILURE = "failure"


class Resolution(Enum):
    """Clock resolution for a timing sample."""

    COARSE = "coarse"
    FINE = "fine"

    @property
    def unit(self) -> str:
        """Short unit label for samples taken at this resolution."""
        return "ms" if self is Resolution.COARSE else "ns"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    """The target returned normally. ``value`` is ``None`` for void-like targets."""

    value: Any


@dataclass(frozen=True)
class Failure:
    """The target raised ``cause``."""

    cause: BaseException


Outcome = Success | Failure


# ---------------------------------------------------------------------------
# Expectations and verdicts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Expectation:
    """What a single trial expects: an exact value or a failure predicate.

    Exactly one of ``value`` and ``predicate`` must be supplied. Use
    :func:`expect` and :func:`expect_failure` rather than building one by hand.
    """

    value: Any = UNSET
    predicate: FailurePredicate | None = None

    def __post_init__(self) -> None:
        has_value = self.value is not UNSET
        has_predicate = self.predicate is not None
        if has_value and has_predicate:
            msg = "expectation has both an expected value and a failure predicate"
            raise ConfigurationError(msg)
        if not has_value and not has_predicate:
            msg = "expectation needs an expected value or a failure predicate"
            raise ConfigurationError(msg)
        if has_predicate and not callable(self.predicate):
            msg = f"failure predicate is not callable: {self.predicate!r}"
            raise ConfigurationError(msg)

    @property
    def kind(self) -> ExpectationKind:
        if self.predicate is not None:
            return ExpectationKind.FAILURE
        return ExpectationKind.VALUE


def expect(value: Any) -> Expectation:
    """Expect the target to return ``value``."""
    return Expectation(value=value)


def expect_failure(predicate: FailurePredicate) -> Expectation:
    """Expect the target to raise an exception satisfying ``predicate``."""
    return Expectation(predicate=predicate)


@dataclass(frozen=True)
class Verdict:
    """Result of comparing one outcome to its expectation."""

    passed: bool
    expected: str
    actual: str
    message: str = ""


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimingSample:
    """Elapsed time of one invocation, in ``resolution.unit``."""

    elapsed: int
    resolution: Resolution


@dataclass(frozen=True)
class MeanTiming:
    """Arithmetic mean of ``count`` samples whose sum is ``total``."""

    mean: float
    total: int
    count: int
    resolution: Resolution
