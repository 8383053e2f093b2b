"""
Domain definitions for the card records service.

Holds the table types served by the service and the fixed upstream query
each one maps to.
"""

from .tables import (
    DEFAULT_TABLE_TYPE,
    TABLE_QUERIES,
    TableQuery,
    TableType,
    parse_fields,
    parse_table_type,
)

__all__ = [
    "DEFAULT_TABLE_TYPE",
    "TABLE_QUERIES",
    "TableQuery",
    "TableType",
    "parse_fields",
    "parse_table_type",
]
