import pytest
from sqlalchemy.dialects import postgresql
from app.errors import ErrorType
from app.exceptions import AppException
from app.services.product_query import (
    MAX_PAGE,
    Pagination,
    build_list_queries,
    escape_like,
    parse_pagination,
)


def _sql(query) -> str:
    return str(query.compile(dialect=postgresql.dialect()))


class TestPagination:
    """Tests for page/limit handling."""

    def test_defaults(self):
        pagination = parse_pagination(None, None)
        assert pagination.page == 1
        assert pagination.limit == 10
        assert pagination.offset == 0

    def test_offset(self):
        assert Pagination(page=3, limit=25).offset == 50

    def test_clamps_low_values(self):
        pagination = parse_pagination("0", "-4")
        assert pagination == Pagination(page=1, limit=1)

    def test_caps_limit(self):
        assert parse_pagination("1", "500", max_limit=50).limit == 50

    def test_caps_page(self):
        pagination = parse_pagination("999999999999", "100")
        assert pagination.page == MAX_PAGE
        assert pagination.offset < 2**63

    def test_rejects_non_integers(self):
        with pytest.raises(AppException) as exc_info:
            parse_pagination("two", "10")

        assert exc_info.value.error_type == ErrorType.VALIDATION_ERROR

    @pytest.mark.parametrize("total, limit, expected", [
        (0, 10, 0),
        (10, 10, 1),
        (11, 10, 2),
        (7, 3, 3),
    ])
    def test_total_pages(self, total, limit, expected):
        assert Pagination(page=1, limit=limit).total_pages(total) == expected


class TestListQueries:
    """Tests for the generated list and count statements."""

    def test_without_search(self):
        page_query, count_query = build_list_queries(Pagination(page=2, limit=5))

        sql = _sql(page_query)
        assert "WHERE" not in sql
        assert 'ORDER BY "Products".id' in sql
        assert "LIMIT" in sql
        assert "OFFSET" in sql
        assert "WHERE" not in _sql(count_query)

    def test_search_on_name_or_category(self):
        page_query, count_query = build_list_queries(Pagination(page=1, limit=10), "too")

        for sql in (_sql(page_query), _sql(count_query)):
            assert '"Products".name ILIKE' in sql
            assert '"Products".category ILIKE' in sql
            assert " OR " in sql

    def test_empty_search_is_ignored(self):
        page_query, _ = build_list_queries(Pagination(page=1, limit=10), "")
        assert "ILIKE" not in _sql(page_query)

    def test_pagination_values_bound(self):
        page_query, _ = build_list_queries(Pagination(page=3, limit=4), "x")
        params = page_query.compile(dialect=postgresql.dialect()).params

        assert 4 in params.values()
        assert 8 in params.values()
        assert "%x%" in params.values()


class TestEscapeLike:
    """Tests for LIKE wildcard escaping."""

    def test_plain_text_unchanged(self):
        assert escape_like("tools") == "tools"

    def test_wildcards_escaped(self):
        assert escape_like("100%_off") == "100\\%\\_off"

    def test_escape_char_escaped(self):
        assert escape_like("a\\b") == "a\\\\b"
