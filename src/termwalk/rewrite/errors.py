"""Error types for the document rewriting layer."""
from __future__ import annotations

from termwalk.core.errors import TermwalkError


class UnknownRuleError(KeyError):
    """Raised when a rewrite rule name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.rule_name = name
        self.available = available
        super().__init__(
            f"Unknown rewrite rule {name!r}. Available rules: {', '.join(available)}"
        )


class ConfigError(TermwalkError, ValueError):
    """Raised when a rewrite configuration is malformed."""


class DocumentError(TermwalkError, ValueError):
    """Raised when a JSON or YAML document cannot be read or written.

    Parameters
    ----------
    message:
        What went wrong.
    fmt:
        The document format involved, ``"json"`` or ``"yaml"``.
    """

    def __init__(self, message: str, fmt: str) -> None:
        self.fmt = fmt
        super().__init__(f"{fmt.upper()} document error: {message}")
