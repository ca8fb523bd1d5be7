"""Configuration for document rewriting.

A ``RewriteConfig`` names the rules to apply, the mapping keys that
protect a subtree from rewriting, and the output format.  It can be
built directly or loaded from YAML::

    rules:
      - strip-strings
      - drop-nulls
    protect_keys:
      - raw
    output_format: yaml
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from termwalk.rewrite.errors import ConfigError, UnknownRuleError
from termwalk.rewrite.rules import get_rule

OUTPUT_FORMATS: tuple[str, ...] = ("json", "yaml")

_KNOWN_KEYS = frozenset({"rules", "protect_keys", "output_format"})


def _string_tuple(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key!r} must be a list of strings, got {value!r}")
    return tuple(value)


@dataclass(frozen=True)
class RewriteConfig:
    """Settings for one rewrite run.

    Parameters
    ----------
    rules:
        Rule names, applied in this order at every node.
    protect_keys:
        Any mapping containing one of these keys is left untouched,
        together with everything beneath it.
    output_format:
        ``"json"`` or ``"yaml"``.
    """

    rules: tuple[str, ...] = field(default=())
    protect_keys: tuple[str, ...] = field(default=())
    output_format: str = "json"

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {self.output_format!r}"
            )
        for name in self.rules:
            try:
                get_rule(name)
            except UnknownRuleError as exc:
                raise ConfigError(str(exc.args[0])) from None

    def merged(
        self,
        rules: tuple[str, ...] = (),
        protect_keys: tuple[str, ...] = (),
        output_format: str | None = None,
    ) -> "RewriteConfig":
        """Return a copy with extra rules and keys appended.

        Used by the CLI to layer command-line options over a config file.
        """
        return RewriteConfig(
            rules=self.rules + tuple(r for r in rules if r not in self.rules),
            protect_keys=self.protect_keys
            + tuple(k for k in protect_keys if k not in self.protect_keys),
            output_format=output_format or self.output_format,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RewriteConfig":
        """Build a config from a plain dict, as loaded from YAML.

        Raises
        ------
        ConfigError
            If ``data`` has unknown keys or values of the wrong shape.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(map(str, unknown))}")
        output_format = data.get("output_format", "json")
        if not isinstance(output_format, str):
            raise ConfigError(f"output_format must be a string, got {output_format!r}")
        return cls(
            rules=_string_tuple(data, "rules"),
            protect_keys=_string_tuple(data, "protect_keys"),
            output_format=output_format.lower(),
        )

    @classmethod
    def from_yaml(cls, text: str) -> "RewriteConfig":
        """Build a config from YAML text.  An empty document gives the defaults."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config: {exc}") from exc
        return cls.from_dict(data or {})

    @classmethod
    def from_file(cls, path: str | Path) -> "RewriteConfig":
        """Read and parse a YAML config file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}") from exc
        return cls.from_yaml(text)
