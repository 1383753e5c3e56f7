"""Unit tests for the shared data model."""

import pytest

from zcc.errors import InvalidComponentTypeError, InvalidScopeError
from zcc.models import MERGE_ORDER, ComponentType, Origin


class TestComponentType:
    """Tests for ComponentType parsing and directory names."""

    def test_dir_name_is_plural(self):
        """Each type lives in a plural directory."""
        assert ComponentType.MODE.dir_name == "modes"
        assert ComponentType.TEMPLATE.dir_name == "templates"

    def test_from_dir_name(self):
        """Directory names map back to types."""
        assert ComponentType.from_dir_name("workflows") is ComponentType.WORKFLOW

    @pytest.mark.parametrize("raw", ["mode", "modes", "MODE", " Modes "])
    def test_parse_accepts_singular_and_plural(self, raw):
        """Singular and plural forms parse in any case."""
        assert ComponentType.parse(raw) is ComponentType.MODE

    def test_parse_rejects_unknown(self):
        """Unknown types raise InvalidComponentTypeError with a hint."""
        with pytest.raises(InvalidComponentTypeError) as exc_info:
            ComponentType.parse("widget")

        assert exc_info.value.code == "INVALID_COMPONENT_TYPE"
        assert "mode" in exc_info.value.suggestion

    def test_compares_to_plain_string(self):
        """Types compare equal to their string value."""
        assert ComponentType.HOOK == "hook"


class TestOrigin:
    """Tests for Origin precedence and parsing."""

    def test_precedence_order(self):
        """project > global > builtin."""
        assert Origin.PROJECT.precedence > Origin.GLOBAL.precedence > Origin.BUILTIN.precedence

    def test_merge_order_is_lowest_first(self):
        """Merge order inserts built-in first and project last."""
        assert MERGE_ORDER == [Origin.BUILTIN, Origin.GLOBAL, Origin.PROJECT]

    def test_parse_rejects_unknown(self):
        """Unknown scopes raise InvalidScopeError."""
        with pytest.raises(InvalidScopeError):
            Origin.parse("system")
