#!/usr/bin/env python3
"""Example: Rewriting a YAML document — termwalk

Loads a YAML document, strips and drops nulls everywhere except under
mappings that carry a ``raw`` key, and prints the result.  The same
thing from the shell::

    termwalk rewrite doc.yaml -r strip-strings -r drop-nulls --protect raw --format yaml

Usage:
    python examples/03_document_rewrite.py
"""
from __future__ import annotations

from termwalk.rewrite import RewriteConfig, document_stats, dump_document, load_document, rewrite

DOCUMENT = """
service: "  billing  "
owner: null
endpoints:
  - path: " /invoices "
    timeout: null
  - path: /refunds
fixtures:
  raw: true
  body: "  keep my spacing  "
  extra: null
"""


def main() -> None:
    doc = load_document(DOCUMENT, "yaml")
    print("Node counts:", document_stats(doc))

    config = RewriteConfig(
        rules=("strip-strings", "drop-nulls"),
        protect_keys=("raw",),
        output_format="yaml",
    )
    print(dump_document(rewrite(doc, config), config.output_format))


if __name__ == "__main__":
    main()
