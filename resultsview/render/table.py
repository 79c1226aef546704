"""
HTML table rendering for row-shaped results.

Produces a header row (blank index cell, then name and type per field) and
one body row per input row, numbered from 1. Cell contents come from the
injected field formatter; cell classes are '<field.format>-field'.
"""

from typing import Any, List, Sequence

from markupsafe import escape

from ..formatting import FieldFormatter, format_field_value
from ..models import FieldInfo
from ..utils.exceptions import RowShapeError


class TableRenderer:
    """
    Renders fields + rows into an HTML table fragment.

    With strict=True, rows whose length differs from the field count raise
    RowShapeError instead of rendering misaligned cells.
    """

    def __init__(self, formatter: FieldFormatter = format_field_value, strict: bool = False):
        self.formatter = formatter
        self.strict = strict

    def render(self, fields: Sequence[FieldInfo], rows: Sequence[Sequence[Any]]) -> str:
        """
        Render a table.

        Args:
            fields: Column metadata (at least one field for a useful header)
            rows: Row tuples aligned with fields, may be empty

        Returns:
            '<table>...</table>' fragment
        """
        parts = ['<table>', self._header(fields), '<tbody>']
        for row_number, row in enumerate(rows or (), start=1):
            parts.append(self._row(row_number, fields, row))
        parts.append('</tbody></table>')
        return ''.join(parts)

    def _header(self, fields: Sequence[FieldInfo]) -> str:
        cells = ['<thead><tr><th></th>']
        for field in fields:
            cells.append(
                f'<th><div class="field-name">{escape(field.name)}</div>'
                f'<div class="field-type">{escape(field.display_type)}</div></th>'
            )
        cells.append('</tr></thead>')
        return ''.join(cells)

    def _row(self, row_number: int, fields: Sequence[FieldInfo], row: Sequence[Any]) -> str:
        if self.strict and len(row) != len(fields):
            raise RowShapeError(row_number, len(fields), len(row))

        cells: List[str] = [f'<tr><th class="row-header">{row_number}</th>']
        for idx, field in enumerate(fields):
            value = row[idx] if idx < len(row) else None
            formatted = self.formatter(field, value, False)
            cells.append(f'<td class="{field.format}-field">{formatted if formatted else ""}</td>')
        cells.append('</tr>')
        return ''.join(cells)
