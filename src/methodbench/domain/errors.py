"""Error hierarchy for methodbench.

Three kinds of failure are kept apart:

- ``ConfigurationError``: the trial or timing run was set up wrongly and
  nothing was invoked.
- ``HarnessError``: the harness itself could not dispatch or measure a call.
- ``VerdictFailure``: a trial ran and its outcome did not match the
  expectation.

Exceptions raised by the target callable are never wrapped in any of these
when they are the subject of a trial. Inside the harness they travel as
``TargetInvocationError`` from the handle to the classifier, which unwraps
the original exception again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from methodbench.domain.models import Verdict


class MethodBenchError(Exception):
    """Base class for harness-side errors."""


class ConfigurationError(MethodBenchError):
    """Malformed trial setup, reported before any invocation."""


class HarnessError(MethodBenchError):
    """The invocation machinery failed; not a failure of the target."""


class TargetInvocationError(MethodBenchError):
    """Carries an exception raised by the target itself through a handle.

    Handles raise this around the target's own exception so that callers can
    tell it apart from a dispatch problem. ``cause`` is the original exception.
    """

    def __init__(self, target: str, cause: Exception) -> None:
        super().__init__(f"{target} raised {type(cause).__name__}: {cause}")
        self.target = target
        self.cause = cause


class VerdictFailure(AssertionError):
    """A trial produced a failing verdict."""

    def __init__(self, verdict: Verdict) -> None:
        super().__init__(verdict.message)
        self.verdict = verdict
