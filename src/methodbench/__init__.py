"""methodbench -- check and time a single callable.

Usage::

    from methodbench import InvocationTester, Timer, expect, resolve

    handle = resolve(Sample(), "get_value")
    InvocationTester(handle).single_test((), expect(42))
    Timer(handle).mean_time((), times=100)
"""

from __future__ import annotations

from methodbench.checks import all_of, has_message, raises, satisfies
from methodbench.classifier import invoke
from methodbench.domain.errors import (
    ConfigurationError,
    HarnessError,
    MethodBenchError,
    TargetInvocationError,
    VerdictFailure,
)
from methodbench.domain.models import (
    Expectation,
    ExpectationKind,
    Failure,
    MeanTiming,
    Outcome,
    Resolution,
    Success,
    TimingSample,
    Verdict,
    expect,
    expect_failure,
)
from methodbench.handle import CallableHandle, handle_of, resolve, resolve_path
from methodbench.presenter import get_presenter
from methodbench.tester import InvocationTester
from methodbench.timer import Timer

__version__ = "0.1.0"

__all__ = [
    "CallableHandle",
    "ConfigurationError",
    "Expectation",
    "ExpectationKind",
    "Failure",
    "HarnessError",
    "InvocationTester",
    "MeanTiming",
    "MethodBenchError",
    "Outcome",
    "Resolution",
    "Success",
    "TargetInvocationError",
    "Timer",
    "TimingSample",
    "Verdict",
    "VerdictFailure",
    "all_of",
    "expect",
    "expect_failure",
    "get_presenter",
    "handle_of",
    "has_message",
    "invoke",
    "raises",
    "resolve",
    "resolve_path",
    "satisfies",
]
