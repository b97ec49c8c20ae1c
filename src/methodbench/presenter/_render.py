"""methodbench.presenter._render -- String rendering shared by all backends.

No output happens here; backends decide where the strings go.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def render_value(value: Any) -> str:
    """Wrap a string in double quotes, otherwise return ``str(value)``.

    ``None`` renders as the literal ``None``.
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def render_call(owner: str, name: str, values: Sequence[Any]) -> str:
    """Render ``owner.name(v1, v2, ...)`` with every value passed through :func:`render_value`."""
    rendered = ", ".join(render_value(v) for v in values)
    return f"{owner}.{name}({rendered})"


def render_signature(owner: str, name: str, parameters: Sequence[str]) -> str:
    """Render ``owner.name(int, str)`` from parameter display names, unquoted."""
    return f"{owner}.{name}({', '.join(parameters)})"
