"""Tests for handle construction, resolution and invocation."""

from __future__ import annotations

import dataclasses

import pytest

from conftest import Counter
from methodbench.domain.errors import ConfigurationError, HarnessError, TargetInvocationError
from methodbench.handle import CallableHandle, handle_of, parameter_names, resolve, resolve_path


class TestResolve:
    def test_instance_method_binds_receiver(self, counter: Counter) -> None:
        handle = resolve(counter, "get")
        assert handle.owner_name == "Counter"
        assert handle.name == "get"
        assert handle.receiver is counter
        assert handle.is_bound
        assert handle.parameters == ()
        assert handle.invoke(()) == 42

    def test_parameters_use_annotations(self, counter: Counter) -> None:
        handle = resolve(counter, "add")
        assert handle.parameters == ("int", "int")

    def test_static_method_has_no_receiver(self) -> None:
        handle = resolve(Counter, "constant")
        assert not handle.is_bound
        assert handle.invoke(()) == "static"

    def test_static_method_through_instance_has_no_receiver(self, counter: Counter) -> None:
        handle = resolve(counter, "constant")
        assert handle.receiver is None

    def test_class_method_stays_bound_to_class(self) -> None:
        handle = resolve(Counter, "create")
        assert handle.receiver is None
        created = handle.invoke((7,))
        assert isinstance(created, Counter)
        assert created.value == 7

    def test_module_function(self) -> None:
        import textwrap

        handle = resolve(textwrap, "dedent")
        assert handle.owner_name == "textwrap"
        assert handle.invoke(("  a",)) == "a"

    def test_missing_name(self, counter: Counter) -> None:
        with pytest.raises(ConfigurationError, match="no operation named 'missing'"):
            resolve(counter, "missing")

    def test_not_callable(self, counter: Counter) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            resolve(counter, "value")


class TestResolvePath:
    def test_class_method_path(self) -> None:
        handle = resolve_path("methodbench.demo:Sample.return_true")
        assert handle.qualified_name == "Sample.return_true"
        assert handle.invoke(()) is True

    def test_module_function_path(self) -> None:
        handle = resolve_path("textwrap:dedent")
        assert handle.name == "dedent"

    @pytest.mark.parametrize("path", ["textwrap", ":dedent", "textwrap:"])
    def test_malformed(self, path: str) -> None:
        with pytest.raises(ConfigurationError, match="module:attribute"):
            resolve_path(path)

    def test_unknown_module(self) -> None:
        with pytest.raises(ConfigurationError, match="cannot import"):
            resolve_path("no_such_module_xyz:f")

    def test_unknown_segment(self) -> None:
        with pytest.raises(ConfigurationError, match="no attribute 'Nope'"):
            resolve_path("methodbench.demo:Nope.f")


class TestHandleOf:
    def test_bound_method(self, counter: Counter) -> None:
        handle = handle_of(counter.add)
        assert handle.owner_name == "Counter"
        assert handle.receiver is counter
        assert handle.parameters == ("int", "int")

    def test_local_function_uses_module_name(self) -> None:
        def local() -> None:
            pass

        handle = handle_of(local)
        assert handle.owner_name == "test_handle"
        assert handle.name == "local"

    def test_builtin(self) -> None:
        handle = handle_of(len)
        assert handle.name == "len"
        assert handle.invoke(([1, 2],)) == 2

    def test_not_callable(self) -> None:
        with pytest.raises(ConfigurationError):
            handle_of(42)  # type: ignore[arg-type]


class TestInvoke:
    def test_handle_is_immutable(self, counter: Counter) -> None:
        handle = resolve(counter, "get")
        with pytest.raises(dataclasses.FrozenInstanceError):
            handle.name = "other"  # type: ignore[misc]
        handle.invoke(())
        assert handle.name == "get"

    def test_target_exception_is_wrapped_with_cause(self, counter: Counter) -> None:
        handle = resolve(counter, "boom")
        with pytest.raises(TargetInvocationError) as info:
            handle.invoke(())
        assert isinstance(info.value.cause, RuntimeError)
        assert str(info.value.cause) == "boom"
        assert info.value.target == "Counter.boom"

    def test_arity_mismatch_is_configuration_error(self, counter: Counter) -> None:
        handle = resolve(counter, "add")
        with pytest.raises(ConfigurationError, match="cannot take 1 argument"):
            handle.invoke((1,))
        assert counter.calls == 0

    def test_non_callable_target_is_harness_error(self) -> None:
        handle = CallableHandle(owner_name="X", name="y", target=42)  # type: ignore[arg-type]
        with pytest.raises(HarnessError, match="not callable"):
            handle.invoke(())

    def test_parameter_names_var_args(self) -> None:
        def f(a, *rest: int, **options: str) -> None:  # noqa: ANN001
            pass

        assert parameter_names(f) == ("a", "*int", "**str")

    def test_prepare_returns_bare_call(self, counter: Counter) -> None:
        target, call_args = resolve(counter, "add").prepare((1, 2))
        assert call_args == (counter, 1, 2)
        assert counter.calls == 0
        assert target(*call_args) == 3

    def test_prepare_checks_arity_without_calling(self, counter: Counter) -> None:
        with pytest.raises(ConfigurationError):
            resolve(counter, "add").prepare((1, 2, 3))
        assert counter.calls == 0
