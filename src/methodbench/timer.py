"""Timer -- measure how long a handle takes to run.

Two resolutions are available:

- ``Resolution.COARSE``: wall clock in milliseconds (``time.time_ns() // 1_000_000``).
- ``Resolution.FINE``: monotonic clock in nanoseconds (``time.perf_counter_ns()``).

FINE is the default; millisecond wall-clock readings undercount
sub-millisecond work.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TextIO

from methodbench.domain.errors import ConfigurationError, HarnessError
from methodbench.domain.models import MeanTiming, Resolution, TimingSample
from methodbench.presenter import get_presenter

if TYPE_CHECKING:
    from methodbench.domain.protocols import Invocable, Presenter

logger = logging.getLogger("methodbench.timer")


def _coarse_now() -> int:
    return time.time_ns() // 1_000_000


def _fine_now() -> int:
    return time.perf_counter_ns()


def clock_for(resolution: Resolution) -> Callable[[], int]:
    """Return the zero-argument clock used for ``resolution``."""
    if resolution is Resolution.COARSE:
        return _coarse_now
    return _fine_now


def validate_times(times: object) -> int:
    """Return ``times`` if it is a positive int, else raise ConfigurationError."""
    if isinstance(times, bool) or not isinstance(times, int):
        msg = f"times must be a positive integer, got {times!r}"
        raise ConfigurationError(msg)
    if times <= 0:
        msg = f"times must be a positive integer, got {times}"
        raise ConfigurationError(msg)
    return times


class Timer:
    """Times a handle once or repeatedly.

    Args:
        handle: The target to time. It is assumed idempotent: repeated calls
            must not change what later calls observe.
        presenter: Where diagnostics go. Defaults to ``get_presenter("auto")``.
        out: Optional stream to redirect the presenter to.
        verbose: Print one line per call during ``mean_time``.
        summary: Print the final ``mean_time`` line.
    """

    def __init__(
        self,
        handle: Invocable,
        presenter: Presenter | None = None,
        *,
        out: TextIO | None = None,
        verbose: bool = False,
        summary: bool = True,
    ) -> None:
        self.handle = handle
        if presenter is None:
            presenter = get_presenter("auto", out)
        elif out is not None:
            presenter.redirect(out)
        self.presenter = presenter
        self.verbose = verbose
        self.summary = summary

    def set_output_stream(self, out: TextIO) -> None:
        """Redirect this timer's diagnostics to ``out``."""
        self.presenter.redirect(out)

    @property
    def _label(self) -> str:
        return f"{self.handle.owner_name}.{self.handle.name}"

    def time_once(
        self,
        args: Sequence[Any] = (),
        resolution: Resolution = Resolution.FINE,
    ) -> TimingSample:
        """Invoke the handle exactly once and return the elapsed time.

        Raises:
            ConfigurationError: If ``args`` does not fit the target.
            HarnessError: If the call raised anything; a timing run does not
                treat failures as measurements.
        """
        try:
            target, call_args = self.handle.prepare(tuple(args))
        except (ConfigurationError, HarnessError):
            raise
        except Exception as exc:
            msg = f"could not dispatch {self._label} while timing: {exc}"
            raise HarnessError(msg) from exc

        # Only the bare call sits between the two readings.
        now = clock_for(resolution)
        start = now()
        try:
            target(*call_args)
        except Exception as exc:
            msg = f"{self._label} raised {type(exc).__name__} while being timed: {exc}"
            raise HarnessError(msg) from exc
        end = now()
        return TimingSample(elapsed=end - start, resolution=resolution)

    def mean_time(
        self,
        args: Sequence[Any] = (),
        times: int = 100,
        resolution: Resolution = Resolution.FINE,
    ) -> MeanTiming:
        """Run :meth:`time_once` ``times`` times with the same arguments.

        Returns:
            The float mean of the samples, plus their sum and count.

        Raises:
            ConfigurationError: If ``times`` is not a positive int. Nothing is
                invoked in that case.
            HarnessError: If any call raised.
        """
        count = validate_times(times)
        args = tuple(args)
        call = self.presenter.render_call(self.handle.owner_name, self.handle.name, args)
        unit = resolution.unit

        total = 0
        for index in range(1, count + 1):
            sample = self.time_once(args, resolution)
            total += sample.elapsed
            if self.verbose:
                self.presenter.timing(call, f"run {index}/{count}: {sample.elapsed} {unit}")

        result = MeanTiming(mean=total / count, total=total, count=count, resolution=resolution)
        logger.info("%s: mean %.1f %s over %d run(s)", self._label, result.mean, unit, count)
        if self.summary:
            self.presenter.timing(
                call,
                f"mean {result.mean:.1f} {unit} over {count} run(s) (total {total} {unit})",
            )
        return result
