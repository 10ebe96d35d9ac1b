"""
Unit tests for pagination primitives.
"""

from app.repositories import PagedResult, PaginationParams


class TestPaginationParams:
    """Tests for PaginationParams normalization."""

    def test_defaults(self):
        """Test page 1 of 10."""
        params = PaginationParams()

        assert params.page_number == 1
        assert params.page_size == 10
        assert params.order_by is None
        assert params.offset == 0

    def test_page_size_capped(self):
        """Test oversized pages are capped."""
        assert PaginationParams(page_size=500).page_size == 50
        assert PaginationParams(page_size=500, max_page_size=20).page_size == 20

    def test_non_positive_values_clamped(self):
        """Test zero/negative pages and sizes become 1."""
        params = PaginationParams(page_number=0, page_size=-3)

        assert params.page_number == 1
        assert params.page_size == 1

    def test_offset(self):
        """Test offset of the third page of 10."""
        assert PaginationParams(page_number=3, page_size=10).offset == 20


class TestPagedResult:
    """Tests for PagedResult."""

    def test_total_pages_rounds_up(self):
        """Test a partial last page counts."""
        assert PagedResult(items=[], total_count=11, current_page=1, page_size=5).total_pages == 3

    def test_empty(self):
        """Test no items means no pages."""
        assert PagedResult(items=[], total_count=0, current_page=1, page_size=10).total_pages == 0

    def test_map(self):
        """Test map keeps the metadata."""
        page = PagedResult(items=[1, 2], total_count=7, current_page=2, page_size=2).map(str)

        assert page.items == ['1', '2']
        assert page.total_count == 7
        assert page.current_page == 2
