"""methodbench.presenter._plain -- Plain-text backend.

Writes unstyled lines with print(). Used when the sink is not a TTY.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO

from methodbench.presenter import _render


class PlainPresenter:
    """Presenter implementation using only built-in print().

    The default sink is ``sys.stderr``, looked up at write time so that a
    replaced ``sys.stderr`` is honoured.
    """

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stderr

    def redirect(self, out: TextIO) -> None:
        self._out = out

    # -- Rendering ------------------------------------------------------------

    def render_call(self, owner: str, name: str, values: Sequence[Any]) -> str:
        return _render.render_call(owner, name, values)

    def render_value(self, value: Any) -> str:
        return _render.render_value(value)

    # -- Output ---------------------------------------------------------------

    def header(self, title: str) -> None:
        print(title, file=self.out)
        print("-" * len(title), file=self.out)

    def trace(self, message: str) -> None:
        print(message, file=self.out)

    def ok(self, message: str) -> None:
        print(message, file=self.out)
        print(file=self.out)

    def fail(self, message: str) -> None:
        print(f"FAILED: {message}", file=self.out)
        print(file=self.out)

    def timing(self, label: str, message: str) -> None:
        print(f"{label}: {message}", file=self.out, flush=True)
