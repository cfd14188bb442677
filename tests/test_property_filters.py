"""
Tests for the named property search predicates and the search query builder.
Each predicate is compiled on its own, without a database.
"""

import pytest
from decimal import Decimal
from sqlalchemy.dialects import postgresql

from lightbnb.repositories.property import (
    PropertyRepository,
    PropertySearchFilters,
    PROPERTY_WHERE_FILTERS,
    PROPERTY_HAVING_FILTERS,
    owner_filter,
    city_filter,
    price_filter,
    minimum_rating_filter,
    to_cents,
)
from lightbnb.schemas.property import PropertySearchOptions


def params(expression) -> list:
    return list(expression.compile().params.values())


class TestToCents:

    @pytest.mark.parametrize("amount, cents", [
        (Decimal("50"), 5000),
        (Decimal("150"), 15000),
        (Decimal("99.99"), 9999),
        (Decimal("0.005"), 1),
        (0, 0),
    ])
    def test_conversion(self, amount, cents):
        assert to_cents(amount) == cents


class TestPredicates:
    """Each named predicate builds its own condition, or nothing when its option is absent."""

    def test_predicates_absent_without_options(self):
        options = PropertySearchOptions()
        for _, predicate in PROPERTY_WHERE_FILTERS + PROPERTY_HAVING_FILTERS:
            assert predicate(options) is None

    def test_filter_names(self):
        assert [name for name, _ in PROPERTY_WHERE_FILTERS] == ["owner_id", "city", "price"]
        assert [name for name, _ in PROPERTY_HAVING_FILTERS] == ["minimum_rating"]

    def test_owner_filter(self):
        condition = owner_filter(PropertySearchOptions(owner_id=3))

        assert str(condition).startswith("properties.owner_id = ")
        assert params(condition) == [3]

    def test_city_filter_is_substring_match(self):
        condition = city_filter(PropertySearchOptions(city="Vancouver"))

        assert "properties.city LIKE" in str(condition)
        assert params(condition) == ["%Vancouver%"]

    def test_price_filter_between(self):
        condition = price_filter(PropertySearchOptions(minimum_price_per_night=50, maximum_price_per_night=150))

        assert "properties.cost_per_night BETWEEN" in str(condition)
        assert params(condition) == [5000, 15000]

    def test_price_filter_minimum_only(self):
        condition = price_filter(PropertySearchOptions(minimum_price_per_night=50))

        assert str(condition).startswith("properties.cost_per_night >= ")
        assert params(condition) == [5000]

    def test_price_filter_maximum_only(self):
        condition = price_filter(PropertySearchOptions(maximum_price_per_night=150))

        assert str(condition).startswith("properties.cost_per_night <= ")
        assert params(condition) == [15000]

    def test_minimum_rating_filter(self):
        condition = minimum_rating_filter(PropertySearchOptions(minimum_rating=4))

        assert str(condition).startswith("avg(property_reviews.rating) >= ")
        assert params(condition) == [4.0]

    def test_values_are_bound_not_inlined(self):
        condition = city_filter(PropertySearchOptions(city="x'; DROP TABLE users; --"))

        assert "DROP TABLE" not in str(condition)
        assert params(condition) == ["%x'; DROP TABLE users; --%"]


class TestPropertySearchFilters:

    def test_active_filters(self):
        filters = PropertySearchFilters(PropertySearchOptions(city="Sotboske", minimum_rating=4))

        assert list(filters.where_conditions()) == ["city"]
        assert list(filters.having_conditions()) == ["minimum_rating"]
        assert filters.active_filters == ["city", "minimum_rating"]

    def test_no_options(self):
        filters = PropertySearchFilters()

        assert filters.where_conditions() == {}
        assert filters.having_conditions() == {}


class TestSearchQuery:
    """Compiled shape of the full property search query."""

    def compile(self, filters: PropertySearchFilters, limit: int = 10) -> str:
        query = PropertyRepository(db=None).build_search_query(filters, limit)
        return str(query.compile(dialect=postgresql.dialect()))

    def test_query_without_filters(self):
        sql = self.compile(PropertySearchFilters())

        assert "LEFT OUTER JOIN property_reviews" in sql
        assert "WHERE" not in sql
        assert "HAVING" not in sql
        assert "GROUP BY properties.id" in sql
        assert "ORDER BY properties.cost_per_night" in sql
        assert "LIMIT" in sql

    def test_query_with_all_filters(self):
        options = PropertySearchOptions(
            owner_id=1,
            city="Sotboske",
            minimum_price_per_night=50,
            maximum_price_per_night=150,
            minimum_rating=4,
        )
        sql = self.compile(PropertySearchFilters(options))

        where = sql[sql.index("WHERE"):sql.index("GROUP BY")]
        assert "properties.owner_id = %(owner_id_1)s" in where
        assert "properties.city LIKE" in where
        assert "BETWEEN" in where
        assert where.count(" AND ") == 3  # three filters joined, plus the BETWEEN bounds
        assert "HAVING avg(property_reviews.rating) >=" in sql
