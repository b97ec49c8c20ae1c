"""Outcome classification for a single invocation attempt."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from methodbench.domain.errors import HarnessError, MethodBenchError, TargetInvocationError
from methodbench.domain.models import Failure, Outcome, Success

if TYPE_CHECKING:
    from methodbench.domain.protocols import Invocable

logger = logging.getLogger("methodbench.classifier")


def invoke(handle: Invocable, args: Sequence[Any]) -> Outcome:
    """Invoke ``handle`` with ``args`` and classify what happened.

    Args:
        handle: The resolved target.
        args: Positional arguments for one call.

    Returns:
        ``Success(value)`` when the target returned, ``Failure(cause)`` when
        it raised. ``cause`` is the target's own exception.

    Raises:
        ConfigurationError: If the arguments do not fit the target.
        HarnessError: If the handle could not dispatch the call at all.
    """
    try:
        value = handle.invoke(args)
    except TargetInvocationError as exc:
        logger.debug("%s -> Failure(%s)", exc.target, type(exc.cause).__name__)
        return Failure(exc.cause)
    except MethodBenchError:
        raise
    except Exception as exc:
        msg = f"could not dispatch {handle.owner_name}.{handle.name}: {exc}"
        raise HarnessError(msg) from exc

    logger.debug("%s.%s -> Success", handle.owner_name, handle.name)
    return Success(value)
