"""Rewrite and inspect JSON-like documents with the generic traversals.

Usage
-----
::

    from termwalk.rewrite import RewriteConfig, rewrite

    config = RewriteConfig(rules=("strip-strings",), protect_keys=("raw",))
    rewrite({"a": " x ", "b": {"raw": " y "}}, config)
    # -> {"a": "x", "b": {"raw": " y "}}
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from termwalk.core.query import Everything, GenericQuery, UniversalQuery
from termwalk.core.transform import Chain, Everywhere, EverywhereBut, GenericTransform
from termwalk.rewrite.config import RewriteConfig
from termwalk.rewrite.rules import build_rule

logger = logging.getLogger(__name__)


class ProtectedKeys(GenericQuery[bool]):
    """True unless the node is a mapping holding one of the protected keys."""

    def __init__(self, keys: tuple[str, ...]) -> None:
        self._keys = frozenset(keys)

    def query(self, t: Any) -> bool:
        if isinstance(t, dict):
            return self._keys.isdisjoint(t.keys())
        return True

    def __repr__(self) -> str:
        return f"ProtectedKeys({sorted(self._keys)!r})"


def build_pipeline(config: RewriteConfig) -> GenericTransform:
    """Return the traversal that applies ``config`` to a whole document."""
    rules = Chain(*(build_rule(name) for name in config.rules))
    if config.protect_keys:
        pipeline: GenericTransform = EverywhereBut(ProtectedKeys(config.protect_keys), rules)
    else:
        pipeline = Everywhere(rules)
    logger.debug("Built rewrite pipeline %r", pipeline)
    return pipeline


def rewrite(document: Any, config: RewriteConfig) -> Any:
    """Apply the rules in ``config`` to every node of ``document``.

    Returns a rebuilt document; ``document`` itself is not modified.
    """
    logger.info(
        "Rewriting document with %d rule(s), %d protected key(s)",
        len(config.rules),
        len(config.protect_keys),
    )
    return build_pipeline(config).transform(document)


def _count(a: Counter[str], b: Counter[str]) -> Counter[str]:
    a.update(b)
    return a


def document_stats(document: Any) -> dict[str, int]:
    """Count the nodes of ``document`` by type name, most common first."""
    counter = Everything(UniversalQuery(lambda t: Counter({type(t).__name__: 1})), _count).query(
        document
    )
    return dict(counter.most_common())
