"""Rewriting JSON and YAML documents with termwalk traversals.

This subpackage is what the ``termwalk`` command line drives.  It is
also usable directly::

    from termwalk.rewrite import RewriteConfig, load_document, rewrite

    doc = load_document(text, "yaml")
    result = rewrite(doc, RewriteConfig(rules=("drop-nulls",)))
"""
from __future__ import annotations

from termwalk.rewrite.config import OUTPUT_FORMATS, RewriteConfig
from termwalk.rewrite.documents import dump_document, format_for_path, load_document
from termwalk.rewrite.engine import ProtectedKeys, build_pipeline, document_stats, rewrite
from termwalk.rewrite.errors import ConfigError, DocumentError, UnknownRuleError
from termwalk.rewrite.rules import RuleInfo, available_rules, build_rule, get_rule, rule

__all__ = [
    # Engine
    "rewrite",
    "build_pipeline",
    "document_stats",
    "ProtectedKeys",
    # Config
    "RewriteConfig",
    "OUTPUT_FORMATS",
    # Rules
    "rule",
    "RuleInfo",
    "get_rule",
    "build_rule",
    "available_rules",
    # Documents
    "load_document",
    "dump_document",
    "format_for_path",
    # Errors
    "ConfigError",
    "DocumentError",
    "UnknownRuleError",
]
