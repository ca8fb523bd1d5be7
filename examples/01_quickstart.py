#!/usr/bin/env python3
"""Example: Quickstart — termwalk

Minimal working example: apply a function over one type across a
whole structure, prune a subtree, and fold a query.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install termwalk
"""
from __future__ import annotations

from dataclasses import dataclass

import termwalk
from termwalk import Everywhere, EverywhereBut, Not, Query, Transformation


@dataclass(frozen=True)
class Leaf:
    value: int


@dataclass(frozen=True)
class Pair:
    left: object
    right: object


def main() -> None:
    print(f"termwalk version: {termwalk.__version__}")

    # Step 1: a type-gated function is the identity on other types
    negate = Transformation(lambda b: not b, bool)
    print(f"negate(True)     -> {negate.transform(True)}")
    print(f"negate('string') -> {negate.transform('string')!r}")

    # Step 2: apply it everywhere, bottom-up
    tree = Pair(Leaf(1), Leaf(2))
    increment = Transformation(lambda n: n + 1, int)
    print(f"everywhere:      {Everywhere(increment).transform(tree)}")

    # Step 3: prune the Leaf(2) subtree
    not_leaf_two = Not(Query(lambda leaf: leaf == Leaf(2), Leaf, default=False))
    print(f"everywhere_but:  {EverywhereBut(not_leaf_two, increment).transform(tree)}")

    # Step 4: fold a query over the structure
    values = termwalk.everything(lambda leaf: [leaf.value], tree, Leaf, default=[])
    print(f"leaf values:     {values}")


if __name__ == "__main__":
    main()
