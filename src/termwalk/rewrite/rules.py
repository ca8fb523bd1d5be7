"""Built-in rewrite rules for JSON and YAML documents.

Each rule is a zero-argument factory that returns a ``GenericTransform``.
Most rules are a ``Transformation`` over one scalar type; the mapping
rules work on ``dict`` nodes.  Rules only ever see one node at a time:
the traversal decides where they are applied.

Adding a rule::

    from termwalk.rewrite.rules import rule

    @rule("title-strings", "Title-case every string")
    def title_strings() -> GenericTransform:
        return Transformation(str.title, str)
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from termwalk.core.transform import GenericTransform, Transformation
from termwalk.rewrite.errors import UnknownRuleError

RuleFactory = Callable[[], GenericTransform]


@dataclass(frozen=True)
class RuleInfo:
    """A registered rewrite rule.

    Parameters
    ----------
    name:
        The name used on the command line and in config files.
    description:
        One-line human-readable summary.
    factory:
        Builds a fresh transform for each rewrite run.
    """

    name: str
    description: str
    factory: RuleFactory


_RULES: dict[str, RuleInfo] = {}


def rule(name: str, description: str) -> Callable[[RuleFactory], RuleFactory]:
    """Register the decorated factory as a rewrite rule named ``name``.

    Raises
    ------
    ValueError
        If ``name`` is already taken.
    """

    def decorator(factory: RuleFactory) -> RuleFactory:
        if name in _RULES:
            raise ValueError(f"Rewrite rule {name!r} is already registered")
        _RULES[name] = RuleInfo(name=name, description=description, factory=factory)
        return factory

    return decorator


def get_rule(name: str) -> RuleInfo:
    """Return the rule registered under ``name``.

    Raises
    ------
    UnknownRuleError
        If no rule has that name.
    """
    try:
        return _RULES[name]
    except KeyError:
        raise UnknownRuleError(name, available_rules()) from None


def available_rules() -> list[str]:
    """Return the names of all registered rules, sorted."""
    return sorted(_RULES)


def build_rule(name: str) -> GenericTransform:
    """Return a fresh transform for the rule named ``name``."""
    return get_rule(name).factory()


# ---------------------------------------------------------------------------
# String rules
# ---------------------------------------------------------------------------


@rule("upper-strings", "Upper-case every string (mapping keys included)")
def upper_strings() -> GenericTransform:
    return Transformation(str.upper, str)


@rule("lower-strings", "Lower-case every string (mapping keys included)")
def lower_strings() -> GenericTransform:
    return Transformation(str.lower, str)


@rule("strip-strings", "Strip leading and trailing whitespace from every string")
def strip_strings() -> GenericTransform:
    return Transformation(str.strip, str)


# ---------------------------------------------------------------------------
# Scalar rules
# ---------------------------------------------------------------------------


@rule("negate-bools", "Flip every boolean")
def negate_bools() -> GenericTransform:
    return Transformation(lambda b: not b, bool)


@rule("increment-ints", "Add one to every integer (booleans are left alone)")
def increment_ints() -> GenericTransform:
    return Transformation(lambda n: n + 1, int)


@rule("round-floats", "Round every float to two decimal places")
def round_floats() -> GenericTransform:
    return Transformation(lambda x: round(x, 2), float)


# ---------------------------------------------------------------------------
# Mapping rules
# ---------------------------------------------------------------------------


def _sort_keys(mapping: dict) -> dict:
    return {key: mapping[key] for key in sorted(mapping, key=str)}


@rule("sort-keys", "Order the keys of every mapping alphabetically")
def sort_keys() -> GenericTransform:
    return Transformation(_sort_keys, dict)


def _drop_nulls(mapping: dict) -> dict:
    return {key: value for key, value in mapping.items() if value is not None}


@rule("drop-nulls", "Remove mapping entries whose value is null")
def drop_nulls() -> GenericTransform:
    return Transformation(_drop_nulls, dict)
