"""Invocation tester -- run trials against a handle and produce verdicts.

A trial is one argument list plus one expectation. ``single_test`` evaluates a
trial and returns a Verdict; the batch operations evaluate trials in order and
raise ``VerdictFailure`` at the first failing one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, TextIO

from methodbench import classifier
from methodbench.domain.errors import ConfigurationError, HarnessError, VerdictFailure
from methodbench.domain.models import (
    Expectation,
    ExpectationKind,
    Failure,
    FailurePredicate,
    Outcome,
    Success,
    Verdict,
    expect,
    expect_failure,
)
from methodbench.presenter import get_presenter, render_signature

if TYPE_CHECKING:
    from methodbench.domain.protocols import Invocable, Presenter

logger = logging.getLogger("methodbench.tester")

EXPECTED_FAILURE_GOT_SUCCESS = "expected a failure but invocation succeeded"


def values_match(expected: Any, actual: Any) -> bool:
    """Compare with the value type's own equality.

    ``None`` only matches ``None``; it is never short-circuited to a match.
    """
    if expected is None or actual is None:
        return expected is None and actual is None
    return bool(expected == actual)


def describe_predicate(predicate: FailurePredicate) -> str:
    """Human-readable label for a failure predicate."""
    description = getattr(predicate, "description", None)
    if description:
        return str(description)
    return getattr(predicate, "__qualname__", None) or repr(predicate)


def _describe_exception(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class InvocationTester:
    """Runs single and batched trials against one handle.

    Args:
        handle: The target under test.
        presenter: Where diagnostics go. Defaults to ``get_presenter("auto")``.
        out: Optional stream to redirect the presenter to.
    """

    def __init__(
        self,
        handle: Invocable,
        presenter: Presenter | None = None,
        *,
        out: TextIO | None = None,
    ) -> None:
        self.handle = handle
        if presenter is None:
            presenter = get_presenter("auto", out)
        elif out is not None:
            presenter.redirect(out)
        self.presenter = presenter

    def set_output_stream(self, out: TextIO) -> None:
        """Redirect this tester's diagnostics to ``out``."""
        self.presenter.redirect(out)

    @property
    def _label(self) -> str:
        return f"{self.handle.owner_name}.{self.handle.name}"

    def print_header(self) -> None:
        """Display ``Testing Owner.name(<parameters>)`` underlined."""
        signature = render_signature(
            self.handle.owner_name, self.handle.name, self.handle.parameters
        )
        self.presenter.header(f"Testing {signature}")

    # -- Single trial ---------------------------------------------------------

    def single_test(self, args: Sequence[Any], expectation: Expectation) -> Verdict:
        """Evaluate one trial.

        Args:
            args: Positional arguments for the call.
            expectation: Built with :func:`expect` or :func:`expect_failure`.

        Returns:
            The verdict. A failing verdict is returned, not raised.

        Raises:
            ConfigurationError: If ``expectation`` is not an Expectation or
                ``args`` does not fit the target. Nothing is invoked.
            HarnessError: If the call could not be dispatched or the failure
                predicate itself raised.
            Exception: The target's own exception, unchanged, when a value was
                expected but the target raised.
        """
        if not isinstance(expectation, Expectation):
            msg = f"expected an Expectation, got {type(expectation).__name__}"
            raise ConfigurationError(msg)

        args = tuple(args)
        p = self.presenter
        p.trace(p.render_call(self.handle.owner_name, self.handle.name, args))
        if expectation.kind is ExpectationKind.VALUE:
            p.trace(f"Expected: {p.render_value(expectation.value)}")
        else:
            assert expectation.predicate is not None
            p.trace(f"Expected: failure matching {describe_predicate(expectation.predicate)}")

        outcome = classifier.invoke(self.handle, args)

        if expectation.kind is ExpectationKind.VALUE:
            verdict = self._match_value(expectation.value, outcome)
        else:
            assert expectation.predicate is not None
            verdict = self._match_failure(expectation.predicate, outcome)

        if verdict.passed:
            p.ok("OK")
        else:
            p.fail(verdict.message)
        return verdict

    def _match_value(self, expected: Any, outcome: Outcome) -> Verdict:
        p = self.presenter
        if isinstance(outcome, Failure):
            cause = outcome.cause
            p.fail(f"Unexpected {_describe_exception(cause)}")
            logger.warning("%s raised %s while a value was expected", self._label, type(cause).__name__)
            raise cause

        rendered_expected = p.render_value(expected)
        rendered_actual = p.render_value(outcome.value)
        p.trace(f"Got     : {rendered_actual}")
        if values_match(expected, outcome.value):
            return Verdict(passed=True, expected=rendered_expected, actual=rendered_actual)
        return Verdict(
            passed=False,
            expected=rendered_expected,
            actual=rendered_actual,
            message=f"{rendered_expected} != {rendered_actual}",
        )

    def _match_failure(self, predicate: FailurePredicate, outcome: Outcome) -> Verdict:
        p = self.presenter
        expected = f"failure matching {describe_predicate(predicate)}"
        if isinstance(outcome, Success):
            rendered_actual = p.render_value(outcome.value)
            p.trace(f"Got     : {rendered_actual}")
            return Verdict(
                passed=False,
                expected=expected,
                actual=rendered_actual,
                message=f"{EXPECTED_FAILURE_GOT_SUCCESS} (returned {rendered_actual})",
            )

        cause = outcome.cause
        rendered_actual = _describe_exception(cause)
        p.trace(f"Got     : {rendered_actual}")
        try:
            matched = bool(predicate(cause))
        except Exception as exc:
            msg = f"failure predicate {describe_predicate(predicate)} raised {_describe_exception(exc)}"
            raise HarnessError(msg) from exc

        if matched:
            return Verdict(passed=True, expected=expected, actual=rendered_actual)
        return Verdict(
            passed=False,
            expected=expected,
            actual=rendered_actual,
            message=f"raised {rendered_actual} did not satisfy predicate {describe_predicate(predicate)}",
        )

    # -- Batches --------------------------------------------------------------

    def batch_test(
        self,
        arg_sets: Iterable[Sequence[Any]],
        expectations: Iterable[Expectation],
    ) -> list[Verdict]:
        """Evaluate paired trials in order, stopping at the first failure.

        All expectations must be of the same kind.

        Returns:
            One passing verdict per trial.

        Raises:
            ConfigurationError: On a length mismatch, a non-Expectation entry,
                or mixed expectation kinds. Raised before any trial runs.
            VerdictFailure: At the first failing trial. Later trials are not run.
        """
        arg_list = [tuple(args) for args in arg_sets]
        expectation_list = list(expectations)
        n = len(expectation_list)
        if len(arg_list) != n:
            msg = f"{len(arg_list)} argument set(s) for {n} expectation(s)"
            raise ConfigurationError(msg)
        for expectation in expectation_list:
            if not isinstance(expectation, Expectation):
                msg = f"expected an Expectation, got {type(expectation).__name__}"
                raise ConfigurationError(msg)
        kinds = {e.kind for e in expectation_list}
        if len(kinds) > 1:
            msg = "a batch cannot mix value and failure expectations"
            raise ConfigurationError(msg)

        self.print_header()
        logger.info("Running %d trial(s) against %s", n, self._label)

        verdicts: list[Verdict] = []
        for index, (args, expectation) in enumerate(zip(arg_list, expectation_list, strict=True), 1):
            verdict = self.single_test(args, expectation)
            verdicts.append(verdict)
            if not verdict.passed:
                logger.warning("Trial %d/%d of %s failed: %s", index, n, self._label, verdict.message)
                raise VerdictFailure(verdict)

        self.presenter.ok(f"{self._label}: {n}/{n} trial(s) passed")
        return verdicts

    def test_success(
        self,
        arg_sets: Iterable[Sequence[Any]],
        expected_values: Iterable[Any],
    ) -> list[Verdict]:
        """Batch where every trial expects a returned value."""
        return self.batch_test(arg_sets, [expect(v) for v in expected_values])

    def test_failure(
        self,
        arg_sets: Iterable[Sequence[Any]],
        predicates: Iterable[FailurePredicate],
    ) -> list[Verdict]:
        """Batch where every trial expects a raised exception."""
        return self.batch_test(arg_sets, [expect_failure(p) for p in predicates])
