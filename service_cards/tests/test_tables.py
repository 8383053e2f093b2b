"""
Unit tests for table types and their upstream queries.
"""

import pytest

from service_cards.app.domain.tables import (
    TABLE_QUERIES,
    TableType,
    parse_fields,
    parse_table_type,
)
from shared.errors import ValidationError


class TestParseTableType:
    """Test cases for parse_table_type."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_value_uses_default(self, value):
        assert parse_table_type(value) is TableType.CARDS
        assert parse_table_type(value, default=None) is None

    @pytest.mark.parametrize("value,expected", [
        ("cards", TableType.CARDS),
        ("weekly", TableType.WEEKLY),
        (" Weekly ", TableType.WEEKLY),
    ])
    def test_known_values(self, value, expected):
        assert parse_table_type(value) is expected

    @pytest.mark.parametrize("value", ["comments", 7, ["weekly"]])
    def test_unknown_values_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_table_type(value)

        assert exc_info.value.details["allowed"] == ["cards", "weekly"]


class TestParseFields:
    """Test cases for parse_fields."""

    def test_none_means_defaults(self):
        assert parse_fields(None) is None

    def test_strips_field_names(self):
        assert parse_fields([" Title", "Quote "]) == ["Title", "Quote"]

    @pytest.mark.parametrize("value", ["Title", ["Title", 3], ["  "], {"Title": True}])
    def test_rejects_malformed_lists(self, value):
        with pytest.raises(ValidationError):
            parse_fields(value)


def test_weekly_query_params_order():
    params = TABLE_QUERIES[TableType.WEEKLY].to_params()

    assert params[:6] == [("fields[]", f) for f in ("Episode", "Name", "Title", "Quote", "Detail", "Created")]
    assert params[6:] == [
        ("sort[0][field]", "Episode"),
        ("sort[0][direction]", "desc"),
        ("sort[1][field]", "Created"),
        ("sort[1][direction]", "asc"),
        ("maxRecords", 200),
    ]
