"""
Configuration access for the renderers.

The renderers only read options through a provider with a get() method, so
anything mapping-like (a dict, Flask's app.config) can be adapted.
"""

import os
from typing import Any, Mapping, Optional, Protocol


PRETTY_PRINT_JSON_FIELDS = 'prettyPrintJSONfields'

KNOWN_OPTIONS = (PRETTY_PRINT_JSON_FIELDS,)

_TRUTHY = {'1', 'true', 'yes', 'on'}


class ConfigurationProvider(Protocol):
    """Read-only key/value settings lookup."""

    def get(self, name: str, default: Any = None) -> Any:
        ...


def as_bool(value: Any) -> bool:
    """
    Interpret a setting as a boolean.

    Strings are true only when they spell one of 1/true/yes/on
    (case-insensitive), so environment values like 'false' stay false.
    """
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class DictConfiguration:
    """Configuration provider backed by a mapping."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    @classmethod
    def from_env(cls, prefix: str = 'RESULTSVIEW_', environ: Mapping[str, str] = None) -> 'DictConfiguration':
        """
        Build a configuration from environment variables.

        Option names are matched case-insensitively after the prefix, e.g.
        RESULTSVIEW_PRETTYPRINTJSONFIELDS=true sets prettyPrintJSONfields.
        """
        environ = os.environ if environ is None else environ
        by_upper = {name.upper(): name for name in KNOWN_OPTIONS}
        values = {}
        for key, value in environ.items():
            if not key.startswith(prefix):
                continue
            option = by_upper.get(key[len(prefix):].upper())
            if option:
                values[option] = value
        return cls(values)


def pretty_print_json_fields(config: Optional[ConfigurationProvider]) -> bool:
    """Whether JSON-like cells should keep their whitespace."""
    if config is None:
        return False
    return as_bool(config.get(PRETTY_PRINT_JSON_FIELDS, False))
