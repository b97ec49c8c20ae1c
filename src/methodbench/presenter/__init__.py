"""methodbench.presenter -- Diagnostic output for trials and timings.

Usage::

    from methodbench.presenter import get_presenter

    presenter = get_presenter(backend="auto")
    presenter.header("Testing Sample.get_value()")
    presenter.trace(presenter.render_call("Sample", "get_value", []))

Backends:

- ``"plain"`` -- unstyled print() lines.
- ``"rich"`` -- Rich console output.
- ``"auto"`` (default) -- Rich when the sink is a TTY, plain otherwise.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from methodbench.domain.errors import ConfigurationError
from methodbench.presenter._plain import PlainPresenter
from methodbench.presenter._render import render_call, render_signature, render_value

if TYPE_CHECKING:
    from methodbench.domain.protocols import Presenter

BACKENDS = ("auto", "plain", "rich")

__all__ = [
    "BACKENDS",
    "PlainPresenter",
    "get_presenter",
    "render_call",
    "render_signature",
    "render_value",
]


def _is_tty(out: TextIO) -> bool:
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


def get_presenter(backend: str = "auto", out: TextIO | None = None) -> Presenter:
    """Build a presenter writing to ``out`` (``sys.stderr`` when omitted).

    Args:
        backend: ``"plain"``, ``"rich"`` or ``"auto"``.
        out: Text stream receiving the output.

    Returns:
        A Presenter for the selected backend.

    Raises:
        ConfigurationError: If ``backend`` is not one of :data:`BACKENDS`.
    """
    if backend not in BACKENDS:
        msg = f"unknown presenter backend {backend!r} (expected one of {', '.join(BACKENDS)})"
        raise ConfigurationError(msg)

    if backend == "auto":
        backend = "rich" if _is_tty(out if out is not None else sys.stderr) else "plain"

    if backend == "rich":
        from methodbench.presenter._rich import RichPresenter

        return RichPresenter(out)
    return PlainPresenter(out)
