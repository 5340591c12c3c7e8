"""
Unit Tests for Query Options.

Tests $orderby parsing and the listing parameter dependency.
"""

import pytest

from temporal_books.core.query import SORTABLE_PATHS, OrderBy, get_query_options


class TestSortablePaths:
    """Tests for the sortable attribute set."""

    def test_contains_top_level_attributes(self):
        for path in ("entityId", "isbn", "title", "numberOfPages", "publishDate"):
            assert path in SORTABLE_PATHS

    def test_contains_nested_leaves_only(self):
        assert "editing.numberOfChapters" in SORTABLE_PATHS
        assert "editing.status.value" in SORTABLE_PATHS
        assert "sales.price.monetaryUnit" in SORTABLE_PATHS
        assert "sales.weightInGrams" in SORTABLE_PATHS
        assert "editing" not in SORTABLE_PATHS
        assert "sales.price" not in SORTABLE_PATHS


class TestOrderByParse:
    """Tests for OrderBy.parse."""

    def test_empty_expression(self):
        assert OrderBy.parse("").sort == []
        assert OrderBy.parse(None).sort == []
        assert not OrderBy.parse("")

    def test_ascending_by_default(self):
        assert OrderBy.parse("title").sort == [("title", 1)]

    def test_multiple_attributes_with_directions(self):
        order = OrderBy.parse("title desc, numberOfPages asc,isbn")

        assert order.sort == [("title", -1), ("numberOfPages", 1), ("isbn", 1)]

    def test_direction_is_case_insensitive(self):
        assert OrderBy.parse("title DESC").sort == [("title", -1)]

    def test_nested_attributes_with_slash_or_dot(self):
        order = OrderBy.parse("editing/numberOfChapters desc,sales.weightInGrams")

        assert order.sort == [("editing.numberOfChapters", -1), ("sales.weightInGrams", 1)]

    def test_unknown_attributes_are_ignored(self):
        assert OrderBy.parse("author desc,title,,_id").sort == [("title", 1)]

    def test_repeated_attributes_keep_first(self):
        assert OrderBy.parse("title desc,title").sort == [("title", -1)]


class TestGetQueryOptions:
    """Tests for the FastAPI dependency."""

    def test_builds_options(self):
        options = get_query_options(orderby="title desc", skip=5, top=10)

        assert options.order_by.sort == [("title", -1)]
        assert options.skip == 5
        assert options.top == 10

    @pytest.mark.parametrize("expression", ["", "unknown"])
    def test_no_sort_when_nothing_usable(self, expression):
        options = get_query_options(orderby=expression, skip=0, top=20)

        assert options.order_by.sort == []
