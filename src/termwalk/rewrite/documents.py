"""Reading and writing JSON and YAML documents.

Documents load into plain ``dict`` / ``list`` / scalar trees, which the
built-in term adapters already know how to traverse.
"""
from __future__ import annotations

import json
from typing import Any

import yaml

from termwalk.rewrite.errors import DocumentError

FORMATS: tuple[str, ...] = ("json", "yaml")


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise DocumentError(f"unsupported format (expected one of {', '.join(FORMATS)})", fmt)
    return fmt


def format_for_path(path: str) -> str:
    """Guess a document format from a file name; defaults to JSON."""
    return "yaml" if path.lower().endswith((".yaml", ".yml")) else "json"


def load_document(text: str, fmt: str = "json") -> Any:
    """Parse ``text`` as a JSON or YAML document.

    Raises
    ------
    DocumentError
        If the text is not valid in the given format.
    """
    fmt = _check_format(fmt)
    if fmt == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentError(f"line {exc.lineno}, column {exc.colno}: {exc.msg}", fmt) from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DocumentError(str(exc), fmt) from exc


def dump_document(data: Any, fmt: str = "json", indent: int = 2) -> str:
    """Render ``data`` as a JSON or YAML document.

    Raises
    ------
    DocumentError
        If ``data`` contains values the format cannot represent.
    """
    fmt = _check_format(fmt)
    if fmt == "json":
        try:
            return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as exc:
            raise DocumentError(str(exc), fmt) from exc
    try:
        return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    except yaml.YAMLError as exc:
        raise DocumentError(str(exc), fmt) from exc
