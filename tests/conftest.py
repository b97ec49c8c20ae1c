"""Shared pytest fixtures for methodbench tests.

Provides:
- RecordingPresenter, a Presenter fake that keeps every output call
- Target classes with one operation of each shape
- Factories for handles whose invocations are counted
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TextIO

import pytest

from methodbench.handle import CallableHandle, handle_of
from methodbench.presenter import render_call, render_value

# ── Fake Presenter ───────────────────────────────────────────────────────


class RecordingPresenter:
    """Presenter that records ``(kind, text)`` pairs instead of printing."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []
        self.redirected_to: TextIO | None = None

    def render_call(self, owner: str, name: str, values: Sequence[Any]) -> str:
        return render_call(owner, name, values)

    def render_value(self, value: Any) -> str:
        return render_value(value)

    def header(self, title: str) -> None:
        self.lines.append(("header", title))

    def trace(self, message: str) -> None:
        self.lines.append(("trace", message))

    def ok(self, message: str) -> None:
        self.lines.append(("ok", message))

    def fail(self, message: str) -> None:
        self.lines.append(("fail", message))

    def timing(self, label: str, message: str) -> None:
        self.lines.append(("timing", f"{label}: {message}"))

    def redirect(self, out: TextIO) -> None:
        self.redirected_to = out

    def of_kind(self, kind: str) -> list[str]:
        """Return the recorded texts of one kind, in order."""
        return [text for k, text in self.lines if k == kind]


# ── Target fixtures ──────────────────────────────────────────────────────


class Counter:
    """Target whose operations count how often they ran."""

    def __init__(self, value: int = 42) -> None:
        self.value = value
        self.calls = 0

    def get(self) -> int:
        self.calls += 1
        return self.value

    def add(self, a: int, b: int) -> int:
        self.calls += 1
        return a + b

    def boom(self) -> None:
        self.calls += 1
        raise RuntimeError("boom")

    def nothing(self) -> None:
        self.calls += 1

    @staticmethod
    def constant() -> str:
        return "static"

    @classmethod
    def create(cls, value: int) -> Counter:
        return cls(value)


def counted(func: Callable[..., Any]) -> tuple[CallableHandle, list[tuple[Any, ...]]]:
    """Wrap ``func`` in a handle that records every argument tuple it sees."""
    seen: list[tuple[Any, ...]] = []

    def _target(*args: Any) -> Any:
        seen.append(args)
        return func(*args)

    handle = CallableHandle(owner_name="Fixture", name=func.__name__, target=_target)
    return handle, seen


# ── Pytest fixtures ──────────────────────────────────────────────────────


@pytest.fixture()
def presenter() -> RecordingPresenter:
    """Provide a fresh RecordingPresenter."""
    return RecordingPresenter()


@pytest.fixture()
def counter() -> Counter:
    """Provide a Counter whose value is 42."""
    return Counter()


@pytest.fixture()
def constant_handle() -> CallableHandle:
    """Handle returning 42 for zero arguments."""

    def answer() -> int:
        return 42

    return handle_of(answer)


@pytest.fixture()
def boom_handle() -> CallableHandle:
    """Handle raising ``RuntimeError("boom")`` for zero arguments."""

    def explode() -> None:
        raise RuntimeError("boom")

    return handle_of(explode)
