"""Unit tests for termwalk.terms — built-in adapters, TermRegistry lookup,
error types, entry-point loading, and the one-level operations.
"""
from __future__ import annotations

import logging
from collections import OrderedDict, defaultdict
from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Any, NamedTuple
from unittest.mock import MagicMock, patch

import pytest

from termwalk.terms import (
    AdapterAlreadyRegisteredError,
    AdapterNotFoundError,
    DataclassAdapter,
    MappingAdapter,
    NamedTupleAdapter,
    SequenceAdapter,
    TermAdapter,
    TermRegistry,
    children,
    default_registry,
    map_one_query,
    map_one_transform,
)


# ---------------------------------------------------------------------------
# Fixture types
# ---------------------------------------------------------------------------


class Call:
    """A hand-written, non-dataclass term."""

    def __init__(self, name: str, args: list[Any]) -> None:
        self.name = name
        self.args = args

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Call) and (self.name, self.args) == (other.name, other.args)


class CallAdapter(TermAdapter):
    term_types = (Call,)

    def children(self, term: Call) -> tuple[Any, ...]:
        return tuple(term.args)

    def rebuild(self, term: Call, children: tuple[Any, ...]) -> Call:
        return Call(term.name, list(children))


class NotAnAdapter:
    pass


class Color(Enum):
    RED = 1


class Span(NamedTuple):
    start: int
    end: int


@dataclass(frozen=True)
class Binary:
    op: str
    left: Any
    right: Any


@dataclass
class Counted:
    value: int
    hits: int = field(default=0, init=False)


class Tokens(list):
    pass


class Point(tuple):
    """A tuple subclass whose constructor does not take one iterable."""

    def __new__(cls, x: int, y: int) -> Point:
        return super().__new__(cls, (x, y))


@dataclass(frozen=True)
class Tagged:
    value: int
    tag: str = field(default="", init=False, compare=False)


@dataclass
class Scaled:
    value: int
    scale: InitVar[int]
    scaled: int = field(init=False)

    def __post_init__(self, scale: int) -> None:
        self.scaled = self.value * scale


def _double(t: Any) -> Any:
    return t * 2 if type(t) is int else t


# ===========================================================================
# Error types
# ===========================================================================


class TestErrors:
    def test_not_found_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            raise AdapterNotFoundError(Call, "reg")

    def test_not_found_carries_type(self) -> None:
        assert AdapterNotFoundError(Call, "reg").term_type is Call

    def test_already_registered_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise AdapterAlreadyRegisteredError(Call, "reg")

    def test_already_registered_message_names_type(self) -> None:
        assert "Call" in str(AdapterAlreadyRegisteredError(Call, "reg"))


# ===========================================================================
# Registration
# ===========================================================================


class TestRegistration:
    def test_builtins_registered(self, registry: TermRegistry) -> None:
        for term_type in (list, tuple, set, frozenset, dict, OrderedDict, defaultdict):
            assert term_type in registry

    def test_empty_registry(self) -> None:
        assert len(TermRegistry("empty", builtins=False)) == 0

    def test_register_decorator_returns_class(self, registry: TermRegistry) -> None:
        decorated = registry.register(Call)(CallAdapter)
        assert decorated is CallAdapter
        assert isinstance(registry.get(Call), CallAdapter)

    def test_register_decorator_needs_types(self, registry: TermRegistry) -> None:
        with pytest.raises(TypeError):
            registry.register()

    def test_register_decorator_rejects_non_adapter(self, registry: TermRegistry) -> None:
        with pytest.raises(TypeError):
            registry.register(Call)(NotAnAdapter)  # type: ignore[arg-type]

    def test_register_adapter_rejects_non_class(self, registry: TermRegistry) -> None:
        with pytest.raises(TypeError):
            registry.register_adapter("Call", CallAdapter())  # type: ignore[arg-type]

    def test_register_adapter_rejects_adapter_class(self, registry: TermRegistry) -> None:
        with pytest.raises(TypeError):
            registry.register_adapter(Call, CallAdapter)  # type: ignore[arg-type]

    def test_duplicate_registration_raises(self, registry: TermRegistry) -> None:
        registry.register_adapter(Call, CallAdapter())
        with pytest.raises(AdapterAlreadyRegisteredError):
            registry.register_adapter(Call, CallAdapter())

    def test_deregister(self, registry: TermRegistry) -> None:
        registry.register_adapter(Call, CallAdapter())
        registry.deregister(Call)
        assert Call not in registry

    def test_deregister_missing_raises(self, registry: TermRegistry) -> None:
        with pytest.raises(AdapterNotFoundError):
            registry.deregister(Call)

    def test_get_missing_raises(self, registry: TermRegistry) -> None:
        with pytest.raises(AdapterNotFoundError):
            registry.get(Call)

    def test_registration_is_logged(
        self, registry: TermRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="termwalk.terms.registry"):
            registry.register_adapter(Call, CallAdapter())
        assert "Call" in caplog.text

    def test_registered_types_sorted(self) -> None:
        reg = TermRegistry("sorted", builtins=False)
        reg.register_adapter(tuple, SequenceAdapter())
        reg.register_adapter(list, SequenceAdapter())
        assert reg.registered_types() == [list, tuple]

    def test_repr_contains_name(self, registry: TermRegistry) -> None:
        assert "test" in repr(registry)


# ===========================================================================
# Resolution
# ===========================================================================


class TestResolve:
    def test_exact_registration(self, registry: TermRegistry) -> None:
        assert isinstance(registry.resolve(list), SequenceAdapter)

    def test_dataclass(self, registry: TermRegistry) -> None:
        assert isinstance(registry.resolve(Binary), DataclassAdapter)

    def test_namedtuple_before_tuple(self, registry: TermRegistry) -> None:
        assert isinstance(registry.resolve(Span), NamedTupleAdapter)

    def test_subclass_uses_base_adapter(self, registry: TermRegistry) -> None:
        assert isinstance(registry.resolve(Tokens), SequenceAdapter)

    def test_subclass_with_own_constructor_is_leaf(self, registry: TermRegistry) -> None:
        assert registry.resolve(Point) is None

    def test_ordered_dict(self, registry: TermRegistry) -> None:
        assert isinstance(registry.resolve(OrderedDict), MappingAdapter)

    @pytest.mark.parametrize("leaf_type", [str, bytes, int, float, bool, type(None), Color, Call])
    def test_leaves(self, registry: TermRegistry, leaf_type: type) -> None:
        assert registry.resolve(leaf_type) is None
        assert registry.is_leaf(leaf_type)

    def test_cache_cleared_on_register(self, registry: TermRegistry) -> None:
        assert registry.resolve(Call) is None
        registry.register_adapter(Call, CallAdapter())
        assert isinstance(registry.resolve(Call), CallAdapter)

    def test_cache_cleared_on_deregister(self, registry: TermRegistry) -> None:
        assert registry.resolve(list) is not None
        registry.deregister(list)
        assert registry.resolve(list) is None


# ===========================================================================
# One-level operations
# ===========================================================================


class TestMapOne:
    def test_list(self) -> None:
        assert map_one_transform([1, "a", 2], _double) == [2, "a", 4]

    def test_only_one_level(self) -> None:
        assert map_one_transform([1, [2]], _double) == [2, [2]]

    def test_tuple_keeps_type(self) -> None:
        result = map_one_transform((1, 2), _double)
        assert type(result) is tuple
        assert result == (2, 4)

    def test_namedtuple_keeps_type(self) -> None:
        result = map_one_transform(Span(1, 2), _double)
        assert result == Span(2, 4)
        assert type(result) is Span

    def test_list_subclass_keeps_type(self) -> None:
        result = map_one_transform(Tokens([1]), _double)
        assert type(result) is Tokens

    def test_dict_children_are_keys_and_values(self) -> None:
        assert children({"a": 1, "b": 2}) == ("a", 1, "b", 2)

    def test_dict_keeps_insertion_order(self) -> None:
        result = map_one_transform({"b": 1, "a": 2}, _double)
        assert list(result.items()) == [("b", 2), ("a", 4)]

    def test_defaultdict_keeps_factory(self) -> None:
        source: defaultdict[str, int] = defaultdict(int, {"a": 1})
        result = map_one_transform(source, _double)
        assert result.default_factory is int
        assert result == {"a": 2}

    def test_frozenset(self) -> None:
        result = map_one_transform(frozenset({1, 2}), _double)
        assert result == frozenset({2, 4})

    def test_dataclass_fields_in_order(self) -> None:
        assert children(Binary("+", 1, 2)) == ("+", 1, 2)

    def test_frozen_dataclass_rebuilt(self) -> None:
        assert map_one_transform(Binary("+", 1, 2), _double) == Binary("+", 2, 4)

    def test_dataclass_skips_non_init_fields(self) -> None:
        assert children(Counted(3)) == (3,)

    def test_dataclass_keeps_non_init_field_values(self) -> None:
        counted = Counted(3)
        counted.hits = 5
        result = map_one_transform(counted, _double)
        assert result.value == 6
        assert result.hits == 5

    def test_frozen_dataclass_keeps_non_init_field_values(self) -> None:
        tagged = Tagged(1)
        object.__setattr__(tagged, "tag", "seen")
        result = map_one_transform(tagged, _double)
        assert result.value == 2
        assert result.tag == "seen"

    def test_dataclass_with_init_var(self) -> None:
        scaled = Scaled(2, scale=3)
        assert children(scaled) == (2,)
        result = map_one_transform(scaled, _double)
        assert type(result) is Scaled
        assert result.value == 4
        assert result.scaled == 6

    def test_container_subclass_with_own_constructor_is_untouched(self) -> None:
        point = Point(1, 2)
        assert map_one_transform(point, _double) is point

    def test_leaf_returned_as_is(self) -> None:
        value = "text"
        assert map_one_transform(value, _double) is value

    def test_leaf_has_no_children(self) -> None:
        assert children(42) == ()

    def test_map_one_query(self) -> None:
        assert map_one_query([1, "a"], lambda t: type(t).__name__) == ["int", "str"]

    def test_custom_adapter(self, registry: TermRegistry) -> None:
        registry.register_adapter(Call, CallAdapter())
        result = map_one_transform(Call("f", [1, 2]), _double, registry)
        assert result == Call("f", [2, 4])

    def test_default_registry_is_shared(self) -> None:
        assert list in default_registry


# ===========================================================================
# Entry-point loading
# ===========================================================================


class TestLoadEntrypoints:
    def test_empty_group_does_nothing(self) -> None:
        reg = TermRegistry("ep", builtins=False)
        with patch(
            "termwalk.terms.registry.importlib.metadata.entry_points",
            return_value=[],
        ):
            reg.load_entrypoints()
        assert len(reg) == 0

    def test_registers_adapter_for_its_types(self) -> None:
        reg = TermRegistry("ep", builtins=False)
        mock_ep = MagicMock()
        mock_ep.name = "calls"
        mock_ep.load.return_value = CallAdapter

        with patch(
            "termwalk.terms.registry.importlib.metadata.entry_points",
            return_value=[mock_ep],
        ) as entry_points:
            reg.load_entrypoints()

        entry_points.assert_called_once_with(group="termwalk.terms")
        assert isinstance(reg.get(Call), CallAdapter)

    def test_repeated_load_is_idempotent(self) -> None:
        reg = TermRegistry("ep", builtins=False)
        mock_ep = MagicMock()
        mock_ep.name = "calls"
        mock_ep.load.return_value = CallAdapter

        with patch(
            "termwalk.terms.registry.importlib.metadata.entry_points",
            return_value=[mock_ep],
        ):
            reg.load_entrypoints()
            reg.load_entrypoints()

        assert len(reg) == 1

    def test_failed_import_is_logged_and_skipped(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reg = TermRegistry("ep", builtins=False)
        mock_ep = MagicMock()
        mock_ep.name = "broken"
        mock_ep.load.side_effect = ImportError("no module")

        with patch(
            "termwalk.terms.registry.importlib.metadata.entry_points",
            return_value=[mock_ep],
        ):
            with caplog.at_level(logging.ERROR, logger="termwalk.terms.registry"):
                reg.load_entrypoints()

        assert len(reg) == 0
        assert "broken" in caplog.text

    def test_non_adapter_is_skipped_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reg = TermRegistry("ep", builtins=False)
        mock_ep = MagicMock()
        mock_ep.name = "bogus"
        mock_ep.load.return_value = NotAnAdapter

        with patch(
            "termwalk.terms.registry.importlib.metadata.entry_points",
            return_value=[mock_ep],
        ):
            with caplog.at_level(logging.WARNING, logger="termwalk.terms.registry"):
                reg.load_entrypoints()

        assert len(reg) == 0
        assert "bogus" in caplog.text
