"""
Statement result data model.

A StatementResult is produced upstream by whatever executed the SQL and is
treated as immutable input by the renderers. Payloads arrive as dicts in
the wire spelling (rowCount, display_type) and are loaded with from_dict().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .utils.exceptions import InvalidResultError


class CommandKind(Enum):
    """Statement kinds the renderers know how to present."""
    MESSAGE = "ext-message"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    CREATE = "CREATE"
    DELETE = "DELETE"
    EXPLAIN = "EXPLAIN"
    SELECT = "SELECT"
    OTHER = None

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> 'CommandKind':
        """Map a command tag to its kind; unknown tags become OTHER."""
        for kind in cls:
            if kind.value is not None and kind.value == tag:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class FieldInfo:
    """Column metadata for row-shaped results."""
    name: str
    display_type: str = ""
    format: str = "text"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'display_type': self.display_type,
            'format': self.format,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FieldInfo':
        """
        Build a FieldInfo from a payload dict.

        Raises:
            InvalidResultError: If the payload isn't a dict or has no name
        """
        if not isinstance(data, dict):
            raise InvalidResultError(f"Field must be an object, got {type(data).__name__}")
        if 'name' not in data:
            raise InvalidResultError("Field is missing 'name'")
        return cls(
            name=str(data['name']),
            display_type=str(data.get('display_type') or data.get('displayType') or ''),
            format=str(data.get('format') or 'text'),
        )


@dataclass(frozen=True)
class StatementResult:
    """
    Outcome of executing one statement.

    Attributes:
        command: Statement kind tag (INSERT, SELECT, ext-message, ...)
        row_count: Affected or returned row count
        fields: Column metadata, empty when the statement has no row output
        rows: Row tuples aligned position-by-position with fields
        message: Informational text, only used by ext-message results
    """
    command: Optional[str]
    row_count: Optional[int] = None
    fields: Sequence[FieldInfo] = field(default_factory=tuple)
    rows: Sequence[Sequence[Any]] = field(default_factory=tuple)
    message: Optional[str] = None

    @property
    def kind(self) -> CommandKind:
        return CommandKind.from_tag(self.command)

    @property
    def has_rows(self) -> bool:
        """True when both fields and rows are populated."""
        return bool(self.fields) and bool(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire spelling used by from_dict()."""
        data = {'command': self.command, 'rowCount': self.row_count}
        if self.fields:
            data['fields'] = [f.to_dict() for f in self.fields]
        if self.rows:
            data['rows'] = [
                list(row) if isinstance(row, (list, tuple)) else row
                for row in self.rows
            ]
        if self.message is not None:
            data['message'] = self.message
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StatementResult':
        """
        Build a StatementResult from a payload dict.

        Accepts both rowCount and row_count. Missing fields/rows become empty.

        Raises:
            InvalidResultError: If the payload is malformed
        """
        if not isinstance(data, dict):
            raise InvalidResultError(f"Result must be an object, got {type(data).__name__}")

        row_count = data.get('rowCount', data.get('row_count'))
        if row_count is not None:
            if isinstance(row_count, bool) or not isinstance(row_count, int):
                raise InvalidResultError(f"rowCount must be an integer, got {row_count!r}")
            if row_count < 0:
                raise InvalidResultError(f"rowCount cannot be negative, got {row_count}")

        fields = data.get('fields') or []
        rows = data.get('rows') or []
        if not isinstance(fields, list):
            raise InvalidResultError("'fields' must be a list")
        if not isinstance(rows, list):
            raise InvalidResultError("'rows' must be a list")

        # EXPLAIN plans may arrive as one string per line
        allow_text_rows = CommandKind.from_tag(data.get('command')) is CommandKind.EXPLAIN
        for row_number, row in enumerate(rows, start=1):
            if isinstance(row, list) or (allow_text_rows and isinstance(row, str)):
                continue
            raise InvalidResultError(f"Row {row_number} must be a list, got {type(row).__name__}")

        message = data.get('message')
        return cls(
            command=data.get('command'),
            row_count=row_count,
            fields=tuple(FieldInfo.from_dict(f) for f in fields),
            rows=tuple(tuple(r) if isinstance(r, list) else r for r in rows),
            message=None if message is None else str(message),
        )


def load_batch(payload: Iterable[Dict[str, Any]]) -> List[StatementResult]:
    """
    Load a batch of results from a list of dicts.

    Raises:
        InvalidResultError: If the payload isn't a list, or an entry is
            malformed (the error carries the entry's index)
    """
    if not isinstance(payload, list):
        raise InvalidResultError("Results must be a list")

    batch = []
    for index, item in enumerate(payload):
        try:
            batch.append(StatementResult.from_dict(item))
        except InvalidResultError as e:
            raise InvalidResultError(str(e), index=index) from e
    return batch
