"""
Command dispatch: one HTML fragment per statement result.

Each CommandKind has a generator; results are rendered in input order and
joined with a divider. Unknown command tags fall back to a JSON dump of
the whole result, so rendering never fails on an unexpected kind.
"""

import json
import logging
from typing import Any, Callable, Dict, Sequence

from markupsafe import escape

from ..formatting import FieldFormatter, format_field_value
from ..models import CommandKind, StatementResult
from .table import TableRenderer


logger = logging.getLogger(__name__)

DIVIDER = '<hr class="result-divider" />'

# Past-tense verb used in the row count summary
SUMMARY_VERBS = {
    CommandKind.INSERT: 'inserted',
    CommandKind.UPDATE: 'updated',
    CommandKind.DELETE: 'deleted',
    CommandKind.CREATE: 'created',
    CommandKind.SELECT: 'returned',
}


def row_count_text(row_count: Any, verb: str) -> str:
    """
    Summary line such as '1 row inserted' or '0 rows returned'.

    Only a count of exactly 1 is singular.
    """
    noun = 'row' if row_count == 1 else 'rows'
    return f"{row_count} {noun} {verb}"


def result_block(css_class: str, content: str) -> str:
    """Wrap content in the preformatted block used for every summary."""
    return f'<pre class="query-result query-result-{css_class}">{content}</pre>'


def explain_line(row: Any) -> str:
    """One line of plan text; multi-value rows are comma-joined."""
    if isinstance(row, (list, tuple)):
        return ','.join(_plan_value(v) for v in row)
    return _plan_value(row)


def _plan_value(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class ResultsDispatcher:
    """
    Renders a batch of statement results into a single HTML fragment.

    Uses composition:
    - TableRenderer for row-shaped output
    - a field formatter passed through to the table renderer
    """

    def __init__(self, formatter: FieldFormatter = format_field_value, strict: bool = False):
        self.tables = TableRenderer(formatter, strict=strict)
        self._generators: Dict[CommandKind, Callable[[StatementResult], str]] = {
            CommandKind.MESSAGE: self._message,
            CommandKind.INSERT: self._modify,
            CommandKind.UPDATE: self._modify,
            CommandKind.DELETE: self._modify,
            CommandKind.CREATE: self._create,
            CommandKind.EXPLAIN: self._explain,
            CommandKind.SELECT: self._select,
            CommandKind.OTHER: self._generic,
        }

    def render(self, batch: Sequence[StatementResult]) -> str:
        """
        Render every result in order, separated by dividers.

        Args:
            batch: Statement results

        Returns:
            Concatenated fragment (empty string for an empty batch)
        """
        logger.debug("Rendering %d statement result(s)", len(batch))
        return DIVIDER.join(self.render_result(result) for result in batch)

    def render_result(self, result: StatementResult) -> str:
        """Render a single result with the generator for its kind."""
        return self._generators[result.kind](result)

    def _summary(self, result: StatementResult) -> str:
        kind = result.kind
        return result_block(kind.name.lower(), row_count_text(result.row_count, SUMMARY_VERBS[kind]))

    def _message(self, result: StatementResult) -> str:
        return result_block('message', result.message or '')

    def _modify(self, result: StatementResult) -> str:
        # INSERT/UPDATE/DELETE ... RETURNING carry rows
        html = self._summary(result)
        if result.has_rows:
            html += self.tables.render(result.fields, result.rows)
        return html

    def _create(self, result: StatementResult) -> str:
        return self._summary(result)

    def _explain(self, result: StatementResult) -> str:
        plan = '\n'.join(explain_line(row) for row in result.rows)
        return result_block('explain', str(escape(plan)))

    def _select(self, result: StatementResult) -> str:
        return self._summary(result) + self.tables.render(result.fields, result.rows)

    def _generic(self, result: StatementResult) -> str:
        logger.debug("No renderer for command %r, dumping result", result.command)
        dump = json.dumps(result.to_dict(), default=str)
        return result_block('generic', str(escape(dump)))
