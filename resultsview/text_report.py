"""
Plain-text rendering of statement results for terminals and logs.

Mirrors the HTML dispatch with ASCII output: summary lines, grid tables
built with tabulate, and a divider line between results.
"""

import json
from typing import Any, List, Sequence

from tabulate import tabulate

from .formatting import FieldFormatter, plain_field_value
from .models import CommandKind, FieldInfo, StatementResult
from .render.dispatcher import SUMMARY_VERBS, explain_line, row_count_text


TEXT_DIVIDER = '=' * 60


def format_table(
    fields: Sequence[FieldInfo],
    rows: Sequence[Sequence[Any]],
    formatter: FieldFormatter = plain_field_value,
) -> str:
    """
    Format rows as an ASCII grid.

    The first column is the 1-based row number; each header shows the
    field name with its display type underneath.

    Args:
        fields: Column metadata
        rows: Row tuples aligned with fields
        formatter: Field value formatter

    Returns:
        Formatted table string
    """
    headers = [''] + [f"{f.name}\n{f.display_type}" if f.display_type else f.name for f in fields]

    values = []
    for row_number, row in enumerate(rows or (), start=1):
        line = [row_number]
        for idx, field in enumerate(fields):
            value = row[idx] if idx < len(row) else None
            formatted = formatter(field, value, False)
            line.append(formatted if formatted else '')
        values.append(line)

    # Keep text cells as given (no numeric alignment/reformatting)
    return tabulate(values, headers=headers, tablefmt='grid', disable_numparse=True)


def format_result(result: StatementResult, formatter: FieldFormatter = plain_field_value) -> str:
    """Format one result according to its command kind."""
    kind = result.kind

    if kind is CommandKind.MESSAGE:
        return result.message or ''

    if kind is CommandKind.EXPLAIN:
        return '\n'.join(explain_line(row) for row in result.rows)

    if kind is CommandKind.OTHER:
        return json.dumps(result.to_dict(), default=str)

    text = row_count_text(result.row_count, SUMMARY_VERBS[kind])
    if kind is CommandKind.SELECT or (kind is not CommandKind.CREATE and result.has_rows):
        text += '\n' + format_table(result.fields, result.rows, formatter)
    return text


def render_text(batch: Sequence[StatementResult], formatter: FieldFormatter = plain_field_value) -> str:
    """Format every result in order, separated by divider lines."""
    parts: List[str] = [format_result(result, formatter) for result in batch]
    return f"\n{TEXT_DIVIDER}\n".join(parts)
