"""Callable handles: resolved, immutable references to a target operation.

A handle pairs a target callable with an optional receiver. Bound instance
methods keep the receiver separately so the same handle can be traced as
``Owner.name(...)``; functions, static methods and class methods carry none.
Invocation is identical either way.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from methodbench.domain.errors import ConfigurationError, HarnessError, TargetInvocationError

logger = logging.getLogger("methodbench.handle")


@dataclass(frozen=True)
class CallableHandle:
    """An invocable reference to ``owner_name.name``.

    Attributes:
        owner_name: Simple name of the owning class or module.
        name: Operation name.
        target: The callable. When ``receiver`` is set it is called with the
            receiver as its first argument.
        receiver: Bound instance, or ``None`` for static-like operations.
        parameters: Display names of the declared parameters, receiver excluded.
    """

    owner_name: str
    name: str
    target: Callable[..., Any]
    receiver: object | None = None
    parameters: tuple[str, ...] = ()
    _signature: inspect.Signature | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_signature", _signature_of(self.target))

    @property
    def is_bound(self) -> bool:
        return self.receiver is not None

    @property
    def qualified_name(self) -> str:
        return f"{self.owner_name}.{self.name}"

    def prepare(self, args: Sequence[Any]) -> tuple[Callable[..., Any], tuple[Any, ...]]:
        """Check ``args`` against the target and return ``(target, call_args)``.

        ``call_args`` has the receiver prepended when the handle is bound, so
        ``target(*call_args)`` is the bare call with nothing else around it.

        Raises:
            HarnessError: If the target is not callable.
            ConfigurationError: If ``args`` does not fit the target's signature.
        """
        if not callable(self.target):
            msg = f"{self.qualified_name} cannot be invoked: {self.target!r} is not callable"
            raise HarnessError(msg)

        call_args = (self.receiver, *args) if self.is_bound else tuple(args)
        if self._signature is not None:
            try:
                self._signature.bind(*call_args)
            except TypeError as exc:
                msg = f"{self.qualified_name} cannot take {len(args)} argument(s): {exc}"
                raise ConfigurationError(msg) from exc
        return self.target, call_args

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the target with positional ``args``.

        Raises:
            HarnessError: If the target is not callable.
            ConfigurationError: If ``args`` does not fit the target's signature.
            TargetInvocationError: Wrapping any exception the target raised.
        """
        target, call_args = self.prepare(args)
        try:
            return target(*call_args)
        except Exception as exc:
            raise TargetInvocationError(self.qualified_name, exc) from exc


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _signature_of(target: object) -> inspect.Signature | None:
    if not callable(target):
        return None
    try:
        return inspect.signature(target)
    except (TypeError, ValueError):
        # Some builtins expose no signature; arity is then left to the call.
        return None


def _display_name(param: inspect.Parameter) -> str:
    annotation = param.annotation
    if annotation is inspect.Parameter.empty:
        label = param.name
    elif isinstance(annotation, str):
        label = annotation
    else:
        label = getattr(annotation, "__name__", None) or str(annotation)

    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{label}"
    if param.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{label}"
    return label


def parameter_names(target: Callable[..., Any], *, skip_first: bool = False) -> tuple[str, ...]:
    """Display names for the declared parameters of ``target``.

    Annotated parameters show their annotation (``int``), others their name.
    """
    signature = _signature_of(target)
    if signature is None:
        return ()
    params = list(signature.parameters.values())
    if skip_first and params:
        params = params[1:]
    return tuple(_display_name(p) for p in params)


def _owner_name(owner: object) -> str:
    if inspect.ismodule(owner):
        return owner.__name__.rpartition(".")[2]
    if inspect.isclass(owner):
        return owner.__name__
    return type(owner).__name__


def resolve(owner: object, name: str) -> CallableHandle:
    """Look up ``name`` on ``owner`` (a class, module, or instance).

    Instance methods looked up on an instance bind that instance as receiver.
    Static methods, class methods and module functions carry no receiver.

    Raises:
        ConfigurationError: If the attribute is missing or not callable.
    """
    owner_name = _owner_name(owner)
    try:
        attr = getattr(owner, name)
    except AttributeError as exc:
        msg = f"{owner_name} has no operation named {name!r}"
        raise ConfigurationError(msg) from exc
    if not callable(attr):
        msg = f"{owner_name}.{name} is not callable"
        raise ConfigurationError(msg)

    if inspect.ismethod(attr) and not inspect.isclass(attr.__self__):
        handle = CallableHandle(
            owner_name=owner_name,
            name=name,
            target=attr.__func__,
            receiver=attr.__self__,
            parameters=parameter_names(attr.__func__, skip_first=True),
        )
    else:
        handle = CallableHandle(
            owner_name=owner_name,
            name=name,
            target=attr,
            parameters=parameter_names(attr),
        )
    logger.debug("Resolved %s (bound=%s)", handle.qualified_name, handle.is_bound)
    return handle


def handle_of(func: Callable[..., Any]) -> CallableHandle:
    """Build a handle for an already-available callable.

    Bound methods keep their instance as receiver. The owner name comes from
    the qualified name (``Sample.get_value`` -> ``Sample``), falling back to
    the defining module.
    """
    if not callable(func):
        msg = f"{func!r} is not callable"
        raise ConfigurationError(msg)

    qualname = getattr(func, "__qualname__", None) or type(func).__name__
    owner, _, name = qualname.rpartition(".")
    owner = owner.rpartition(".")[2] if owner else ""
    if not owner or owner == "<locals>":
        module = getattr(func, "__module__", None) or "__main__"
        owner = module.rpartition(".")[2]

    if inspect.ismethod(func) and not inspect.isclass(func.__self__):
        return CallableHandle(
            owner_name=owner,
            name=name,
            target=func.__func__,
            receiver=func.__self__,
            parameters=parameter_names(func.__func__, skip_first=True),
        )
    return CallableHandle(owner_name=owner, name=name, target=func, parameters=parameter_names(func))


def resolve_path(path: str) -> CallableHandle:
    """Resolve ``"package.module:Owner.operation"`` or ``"package.module:function"``.

    Every segment before the last after the colon is walked with getattr; the
    last one is resolved with :func:`resolve`.

    Raises:
        ConfigurationError: If the module cannot be imported or a segment is missing.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"target must look like 'module:attribute', got {path!r}"
        raise ConfigurationError(msg)

    try:
        owner: object = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"cannot import module {module_name!r}: {exc}"
        raise ConfigurationError(msg) from exc

    *parents, name = attr_path.split(".")
    for segment in parents:
        try:
            owner = getattr(owner, segment)
        except AttributeError as exc:
            msg = f"{_owner_name(owner)} has no attribute {segment!r}"
            raise ConfigurationError(msg) from exc
    return resolve(owner, name)
