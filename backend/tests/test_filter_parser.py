"""
Tests for filter_parser.py - search query DSL.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from filter_parser import parse_filters, serialize_filters
from models import SearchFilters


class TestParseFilters:
    """Tests for query tokenization into filter fields."""

    def test_structured_query(self):
        """Every filter kind is read from one query."""
        filters = parse_filters("priority:high #urgent project:work")

        assert filters.priority == "high"
        assert filters.tags == ["urgent"]
        assert filters.project_name == "work"
        assert filters.text == ""
        assert filters.status is None
        assert filters.due is None

    def test_invalid_priority_dropped(self):
        """An illegal value is neither a filter nor free text."""
        filters = parse_filters("priority:bogus buy milk")

        assert filters.priority is None
        assert filters.text == "buy milk"

    def test_last_valid_priority_wins(self):
        """A later valid priority overrides an earlier one."""
        assert parse_filters("priority:low priority:high priority:nope").priority == "high"

    def test_tags_lowercased_in_order_with_duplicates(self):
        """Tags are lowercased and kept in order."""
        assert parse_filters("#Work #home #work").tags == ["work", "home", "work"]

    def test_empty_tag_skipped(self):
        """A bare # is not a tag."""
        filters = parse_filters("# groceries")
        assert filters.tags == []
        assert filters.text == "groceries"

    def test_text_keeps_order_and_case(self):
        """Free text keeps its words as typed."""
        filters = parse_filters("Buy  MILK status:completed  at store due:overdue")

        assert filters.text == "Buy MILK at store"
        assert filters.status == "completed"
        assert filters.due == "overdue"

    def test_project_lowercased_and_unvalidated(self):
        """Project names are lowercased and not checked."""
        assert parse_filters("project:Home-Reno").project_name == "home-reno"

    def test_invalid_status_and_due_dropped(self):
        """Illegal values are dropped entirely."""
        filters = parse_filters("status:done due:tomorrow")

        assert filters.status is None
        assert filters.due is None
        assert filters.text == ""

    def test_prefix_is_case_sensitive(self):
        """Only lowercase prefixes are filters; anything else is text."""
        filters = parse_filters("Priority:high")
        assert filters.priority is None
        assert filters.text == "Priority:high"

    def test_values_case_insensitive(self):
        """Values match regardless of case."""
        filters = parse_filters("priority:HIGH status:Incomplete due:TODAY")
        assert (filters.priority, filters.status, filters.due) == ("high", "incomplete", "today")

    def test_empty_query(self):
        """An empty query gives empty filters."""
        assert parse_filters("") == SearchFilters()
        assert parse_filters("   ") == SearchFilters()


class TestSerializeFilters:
    """Tests for canonical query strings."""

    def test_canonical_order(self):
        """Serialized filters come out in a fixed order."""
        filters = parse_filters("due:today #a project:x buy priority:low milk status:incomplete")
        assert serialize_filters(filters) == "buy milk #a priority:low project:x status:incomplete due:today"

    def test_empty(self):
        """Empty filters serialize to an empty string."""
        assert serialize_filters(SearchFilters()) == ""

    @pytest.mark.parametrize("query", [
        "priority:high #urgent project:work",
        "priority:bogus buy milk",
        "Buy MILK #Errands #errands status:completed",
        "project: due:overdue",
        "# #x report",
    ])
    def test_reparse_gives_same_filters(self, query):
        """Serializing and parsing again changes nothing."""
        filters = parse_filters(query)
        assert parse_filters(serialize_filters(filters)) == filters
