"""methodbench.presenter._rich -- Rich-based backend.

Coloured headers and verdicts for interactive terminals.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TextIO

from rich.console import Console
from rich.markup import escape as rich_escape
from rich.rule import Rule
from rich.theme import Theme

from methodbench.presenter import _render

_THEME = Theme(
    {
        "header": "bold cyan",
        "trace": "default",
        "ok": "bold green",
        "fail": "bold red",
        "timing.label": "magenta",
        "dim": "dim",
    }
)


def _make_console(out: TextIO | None) -> Console:
    if out is None:
        return Console(theme=_THEME, highlight=False, stderr=True)
    return Console(theme=_THEME, highlight=False, file=out)


class RichPresenter:
    """Presenter implementation backed by Rich."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._con = _make_console(out)

    def redirect(self, out: TextIO) -> None:
        self._con = _make_console(out)

    # -- Rendering ------------------------------------------------------------

    def render_call(self, owner: str, name: str, values: Sequence[Any]) -> str:
        return _render.render_call(owner, name, values)

    def render_value(self, value: Any) -> str:
        return _render.render_value(value)

    # -- Output ---------------------------------------------------------------

    def header(self, title: str) -> None:
        self._con.print(Rule(rich_escape(title), style="header", align="left"))

    def trace(self, message: str) -> None:
        self._con.print(rich_escape(message), style="trace")

    def ok(self, message: str) -> None:
        self._con.print(f"[ok]✓ {rich_escape(message)}[/]")
        self._con.print()

    def fail(self, message: str) -> None:
        self._con.print(f"[fail]✗ {rich_escape(message)}[/]")
        self._con.print()

    def timing(self, label: str, message: str) -> None:
        self._con.print(f"[timing.label]{rich_escape(label)}[/] [dim]{rich_escape(message)}[/]")
