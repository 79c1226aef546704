"""
Stylesheet for rendered result documents.
"""

from typing import Optional

from ..config import ConfigurationProvider, pretty_print_json_fields


BASE_RULES = """
    body {
      margin: 0;
      padding: 0;
    }

    pre.query-result {
      margin: 5px;
    }

    .field-type {
      font-size: smaller;
    }

    table {
      border-collapse: collapse;
    }

    thead th {
      position: sticky;
      top: -1px;
      background-color: var(--editor-background, Canvas);
    }

    thead th::after {
      content: '';
      position: absolute;
      top: -1px;
      right: -1px;
      left: -1px;
      height: 100%;
      border: 1px solid var(--panel-border, GrayText);
      pointer-events: none;
    }

    th, td {
      border-width: 1px;
      border-style: solid;
      border-color: var(--panel-border, GrayText);
      padding: 3px 5px;
    }

    .timestamptz-field { white-space: nowrap; }

    .result-divider {
      padding: 0;
      border: none;
      border-top: medium double var(--panel-border, GrayText);
    }
"""

PRETTY_JSON_RULES = """
    .jsonb-field, .json-field {
      white-space: pre;
    }
"""


def build_stylesheet(config: Optional[ConfigurationProvider]) -> str:
    """Base rules, plus whitespace-preserving JSON cells when prettyPrintJSONfields is on."""
    css = BASE_RULES
    if pretty_print_json_fields(config):
        css += PRETTY_JSON_RULES
    return css
