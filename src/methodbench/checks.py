"""Failure predicates for ``expect_failure`` and ``InvocationTester.test_failure``.

Each builder returns a callable ``Check`` that also carries a description, so
failing verdicts can say what was expected::

    tester.test_failure([()], [raises(ValueError, message="crac")])
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Check:
    """A described predicate over a raised exception."""

    predicate: Callable[[BaseException], bool]
    description: str

    def __call__(self, exc: BaseException) -> bool:
        return bool(self.predicate(exc))

    def __repr__(self) -> str:
        return self.description


def raises(
    exc_type: type[BaseException] | tuple[type[BaseException], ...] = Exception,
    *,
    message: str | None = None,
    match: str | None = None,
    exact: bool = False,
) -> Check:
    """Match on exception type and, optionally, its message.

    Args:
        exc_type: Accepted type(s); subclasses match unless ``exact``.
        message: Exact ``str(exc)`` required.
        match: Regular expression searched in ``str(exc)``.
        exact: Require ``type(exc)`` to be one of ``exc_type`` exactly.
    """
    types = exc_type if isinstance(exc_type, tuple) else (exc_type,)
    pattern = re.compile(match) if match is not None else None

    def _check(exc: BaseException) -> bool:
        if exact:
            if type(exc) not in types:
                return False
        elif not isinstance(exc, types):
            return False
        if message is not None and str(exc) != message:
            return False
        return not (pattern is not None and pattern.search(str(exc)) is None)

    label = " | ".join(t.__name__ for t in types)
    if exact:
        label = f"exactly {label}"
    if message is not None:
        label += f" with message {message!r}"
    if pattern is not None:
        label += f" matching /{match}/"
    return Check(_check, label)


def has_message(message: str) -> Check:
    """Match any exception whose ``str()`` equals ``message``."""
    return raises(Exception, message=message)


def satisfies(predicate: Callable[[BaseException], bool], description: str) -> Check:
    """Attach a description to an arbitrary predicate."""
    return Check(predicate, description)


def all_of(*checks: Callable[[BaseException], bool]) -> Check:
    """Match when every check matches."""
    labels = [getattr(c, "description", None) or repr(c) for c in checks]
    return Check(lambda exc: all(c(exc) for c in checks), " and ".join(labels))
