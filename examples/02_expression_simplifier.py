#!/usr/bin/env python3
"""Example: Expression simplifier — termwalk

A small arithmetic AST made of frozen dataclasses plus one hand-written
node class with its own adapter.  Constant folding is a single
``Everywhere`` pass: children are simplified before their parent, so
folding ``(1 + 2) * x`` sees ``3 * x``.

Usage:
    python examples/02_expression_simplifier.py
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from termwalk import Everywhere, EverywhereBut, TermAdapter, Transformation
from termwalk.terms import default_registry


@dataclass(frozen=True, slots=True)
class Num:
    value: float


@dataclass(frozen=True, slots=True)
class Var:
    name: str


@dataclass(frozen=True, slots=True)
class BinOp:
    op: str
    left: "Expr"
    right: "Expr"


class Quoted:
    """An expression kept verbatim; not a dataclass, so it needs an adapter."""

    def __init__(self, body: "Expr") -> None:
        self.body = body

    def __repr__(self) -> str:
        return f"Quoted({self.body!r})"


@default_registry.register(Quoted)
class QuotedAdapter(TermAdapter):
    def children(self, term: Quoted) -> tuple[Any, ...]:
        return (term.body,)

    def rebuild(self, term: Quoted, children: tuple[Any, ...]) -> Quoted:
        (body,) = children
        return Quoted(body)


Expr = Union[Num, Var, BinOp, Quoted]

_OPS = {
    "+": lambda a, b: a + b,
    "*": lambda a, b: a * b,
}


def fold_constants(node: BinOp) -> Any:
    if isinstance(node.left, Num) and isinstance(node.right, Num):
        return Num(_OPS[node.op](node.left.value, node.right.value))
    return node


def drop_identities(node: BinOp) -> Any:
    if node.op == "*" and node.right == Num(1):
        return node.left
    if node.op == "+" and node.right == Num(0):
        return node.left
    return node


def main() -> None:
    expr = BinOp(
        "+",
        BinOp("*", BinOp("+", Num(1), Num(2)), Var("x")),
        Quoted(BinOp("+", Num(3), Num(4))),
    )
    print(f"input:      {expr}")

    # A BinOp can simplify to a Num or a Var, so this is a universal
    # callable rather than a BinOp -> BinOp Transformation.
    def simplify(t: Any) -> Any:
        if type(t) is BinOp:
            t = fold_constants(t)
        if type(t) is BinOp:
            t = drop_identities(t)
        return t

    print(f"simplified: {Everywhere(simplify).transform(expr)}")

    keep_quoted = lambda t: type(t) is not Quoted  # noqa: E731
    print(f"respecting quotes: {EverywhereBut(keep_quoted, simplify).transform(expr)}")

    rename = Transformation(lambda v: Var(v.name.upper()), Var)
    print(f"renamed:    {Everywhere(rename).transform(expr)}")


if __name__ == "__main__":
    main()
