"""
Table definitions for the 启发星球 record sets.

Each table type pins the upstream query used to fetch it: the field list,
the sort order and the record limit. Because these are fixed per table,
the table type alone identifies a cacheable record set.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from shared.errors import ValidationError


class TableType(str, Enum):
    """Record sets served by the service."""

    CARDS = "cards"
    WEEKLY = "weekly"


DEFAULT_TABLE_TYPE = TableType.CARDS


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = "desc"


@dataclass(frozen=True)
class TableQuery:
    """Upstream query parameters for one table."""

    fields: Tuple[str, ...]
    sort: Tuple[SortSpec, ...]
    max_records: int

    def with_fields(self, fields: Sequence[str]) -> "TableQuery":
        return replace(self, fields=tuple(fields))

    def to_params(self) -> List[Tuple[str, Any]]:
        """Render as Airtable list-records query parameters."""
        params: List[Tuple[str, Any]] = [("fields[]", field) for field in self.fields]
        for index, spec in enumerate(self.sort):
            params.append((f"sort[{index}][field]", spec.field))
            params.append((f"sort[{index}][direction]", spec.direction))
        params.append(("maxRecords", self.max_records))
        return params


TABLE_QUERIES = {
    TableType.CARDS: TableQuery(
        fields=("Title", "Quote", "ImagePath", "Upload", "Detail", "Creator", "Created", "Theme", "Font"),
        sort=(SortSpec("Created", "desc"),),
        max_records=100,
    ),
    TableType.WEEKLY: TableQuery(
        fields=("Episode", "Name", "Title", "Quote", "Detail", "Created"),
        sort=(SortSpec("Episode", "desc"), SortSpec("Created", "asc")),
        max_records=200,
    ),
}


def parse_table_type(value: Optional[Any], default: Optional[TableType] = DEFAULT_TABLE_TYPE) -> Optional[TableType]:
    """Resolve a request's ``tableType`` value.

    Missing or empty values resolve to ``default``; anything that is not a
    known table type raises ``ValidationError``.
    """
    if value is None or value == "":
        return default
    if isinstance(value, str):
        try:
            return TableType(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError(
        "Unknown tableType",
        details={"tableType": value, "allowed": [t.value for t in TableType]},
    )


def parse_fields(value: Optional[Any]) -> Optional[List[str]]:
    """Validate a caller-supplied field list; ``None`` means use the defaults."""
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) and item.strip() for item in value):
        raise ValidationError("fields must be a list of non-empty strings", details={"fields": value})
    return [item.strip() for item in value]
