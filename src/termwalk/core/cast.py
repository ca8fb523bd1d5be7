"""Runtime type identity check.

``cast`` is the only place termwalk decides whether a value "is" of a
given type.  The check is exact: ``type(value) is target``.  Subclasses
do not match, so a function over ``int`` never sees a ``bool`` and a
function over a base node class never sees a derived node.

Usage
-----
::

    from termwalk.core.cast import cast

    result = cast(3, int)
    assert result.ok and result.value == 3

    result = cast("x", int)
    assert not result.ok and result.value == "x"
"""
from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from termwalk.core.errors import UnresolvedTargetError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CastResult(Generic[T]):
    """Outcome of a ``cast``.

    Parameters
    ----------
    ok:
        ``True`` when the value's type is exactly the target type.
    value:
        On success, the value as the target type.  On failure, the
        original value, untouched.
    """

    ok: bool
    value: T


def check_target(target: object) -> type:
    """Return ``target`` if it is a plain class, else raise ``TypeError``."""
    if not isinstance(target, type) or typing.get_origin(target) is not None:
        raise TypeError(
            f"Cast target must be a class, got {target!r}. "
            "Parameterised generics such as list[int] cannot be checked at runtime."
        )
    return target


def cast(value: Any, target: type[T]) -> CastResult[Any]:
    """Attempt to view ``value`` as an instance of ``target``.

    Parameters
    ----------
    value:
        Any Python object.
    target:
        The class to test against.

    Returns
    -------
    CastResult
        ``ok`` is ``True`` if and only if ``type(value) is target``.  The
        value is never converted or copied.

    Raises
    ------
    TypeError
        If ``target`` is not a class.
    """
    target = check_target(target)
    return CastResult(ok=type(value) is target, value=value)


def resolve_target(fn: Callable[..., Any]) -> type:
    """Infer the type a single-argument function is specialised to.

    Reads the annotation of the first positional parameter.

    Raises
    ------
    UnresolvedTargetError
        If ``fn`` has no positional parameter, the parameter is not
        annotated, or the annotation is not a plain class.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise UnresolvedTargetError(fn, f"signature unavailable ({exc})") from None

    params = [
        p
        for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if not params:
        raise UnresolvedTargetError(fn, "it takes no positional parameter")

    try:
        hints = typing.get_type_hints(fn)
    except Exception as exc:  # noqa: BLE001
        raise UnresolvedTargetError(fn, f"annotations could not be evaluated ({exc})") from None

    annotation = hints.get(params[0].name)
    if annotation is None:
        raise UnresolvedTargetError(fn, f"parameter {params[0].name!r} is not annotated")
    try:
        return check_target(annotation)
    except TypeError:
        raise UnresolvedTargetError(
            fn, f"annotation {annotation!r} is not a plain class"
        ) from None
