"""Sample fixture exercised by ``methodbench demo``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from methodbench.checks import raises
from methodbench.domain.models import Resolution
from methodbench.handle import resolve
from methodbench.tester import InvocationTester
from methodbench.timer import Timer

if TYPE_CHECKING:
    from methodbench.domain.models import MeanTiming
    from methodbench.domain.protocols import Presenter


class Sample:
    """A class with one of each kind of target."""

    def __init__(self) -> None:
        self._value = 42

    def get_value(self) -> int:
        return self._value

    def add(self, a: int, b: int) -> int:
        return a + b

    def throw_exception(self) -> None:
        raise Exception("crac")

    @staticmethod
    def return_true() -> bool:
        return True

    @staticmethod
    def throw_static() -> None:
        raise ValueError


def run_demo(presenter: Presenter, *, times: int = 100, resolution: Resolution = Resolution.FINE) -> MeanTiming:
    """Verify every Sample operation, then time ``get_value``.

    Raises:
        VerdictFailure: If any sample operation misbehaves.
    """
    sample = Sample()
    no_args: list[tuple[object, ...]] = [()]

    InvocationTester(resolve(sample, "get_value"), presenter).test_success(no_args, [42])
    InvocationTester(resolve(sample, "add"), presenter).test_success([(1, 2), (-1, 1)], [3, 0])
    InvocationTester(resolve(sample, "throw_exception"), presenter).test_failure(
        no_args, [raises(Exception, message="crac")]
    )
    InvocationTester(resolve(Sample, "return_true"), presenter).test_success(no_args, [True])
    InvocationTester(resolve(Sample, "throw_static"), presenter).test_failure(
        no_args, [raises(ValueError, exact=True)]
    )

    return Timer(resolve(sample, "get_value"), presenter).mean_time((), times, resolution)
