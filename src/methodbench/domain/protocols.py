"""Protocol interfaces for methodbench collaborators.

All interfaces are typing.Protocol: any class with matching members satisfies
them without inheritance.

This module has ZERO external imports: only stdlib and typing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TextIO


class Invocable(Protocol):
    """A resolved, invocable reference to a target operation."""

    @property
    def owner_name(self) -> str:
        """Simple name of the type or module that owns the operation."""
        ...

    @property
    def name(self) -> str:
        """Name of the operation."""
        ...

    @property
    def parameters(self) -> tuple[str, ...]:
        """Display names of the declared parameters."""
        ...

    def prepare(self, args: Sequence[Any]) -> tuple[Callable[..., Any], tuple[Any, ...]]:
        """Validate ``args`` and return the bare ``(callable, call_args)`` pair.

        Timing calls ``callable(*call_args)`` between two clock readings, so
        every check has to happen here rather than inside the call.
        """
        ...

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the operation with positional ``args`` and return its result.

        An exception raised by the operation itself must surface as
        ``TargetInvocationError`` carrying it as ``cause``. Anything else that
        escapes is treated as a fault of the invocation machinery.
        """
        ...


class Presenter(Protocol):
    """Renders call traces and values, and writes diagnostics to a sink.

    **Rendering** -- pure string helpers::

        presenter.render_call("Sample", "get_value", [1, "a"])  # Sample.get_value(1, "a")
        presenter.render_value("a")                            # "a"

    **Output** -- used by the tester and timer::

        presenter.header("Testing Sample.get_value(int)")
        presenter.trace("Expected: 42")
        presenter.ok("OK")
        presenter.fail("42 != 43")
        presenter.timing("Sample.get_value()", "mean 120.5 ns over 100 runs")
    """

    # -- Rendering ------------------------------------------------------------

    def render_call(self, owner: str, name: str, values: Sequence[Any]) -> str:
        """Render ``owner.name(v1, v2, ...)`` with each value rendered."""
        ...

    def render_value(self, value: Any) -> str:
        """Quote strings, show ``None`` literally, ``str()`` anything else."""
        ...

    # -- Output ---------------------------------------------------------------

    def header(self, title: str) -> None:
        """Display an underlined header line."""
        ...

    def trace(self, message: str) -> None:
        """Display one diagnostic line."""
        ...

    def ok(self, message: str) -> None:
        """Display a passing verdict."""
        ...

    def fail(self, message: str) -> None:
        """Display a failing verdict."""
        ...

    def timing(self, label: str, message: str) -> None:
        """Display a timing line for ``label``."""
        ...

    def redirect(self, out: TextIO) -> None:
        """Send all further output to ``out``."""
        ...
