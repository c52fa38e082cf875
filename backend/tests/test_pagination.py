"""Tests for page slicing and clamping."""

import pytest

from bucketview.utils.pagination import clamp_page, paginate, total_pages


class TestTotalPages:
    def test_empty(self):
        assert total_pages(0, 9) == 0

    def test_exact_multiple(self):
        assert total_pages(18, 9) == 2

    def test_partial_last_page(self):
        assert total_pages(20, 9) == 3

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            total_pages(5, 0)


class TestPaginate:
    def test_twenty_files_page_size_nine(self):
        files = list(range(20))
        page = paginate(files, 3, 9)
        assert page.total_pages == 3
        assert page.items == (18, 19)
        assert page.has_previous is True
        assert page.has_next is False

    def test_first_page(self):
        page = paginate(list(range(20)), 1, 9)
        assert page.items == tuple(range(9))
        assert page.has_previous is False
        assert page.has_next is True

    def test_out_of_range_is_empty(self):
        page = paginate(list(range(5)), 4, 9)
        assert page.items == ()
        assert page.total_pages == 1

    def test_page_zero_is_empty(self):
        assert paginate(list(range(5)), 0, 9).items == ()

    def test_empty_list(self):
        page = paginate([], 1, 9)
        assert page.items == ()
        assert page.total_pages == 0

    @pytest.mark.parametrize("count, size", [(0, 1), (1, 1), (7, 3), (20, 9), (27, 9), (5, 10)])
    def test_pages_partition_the_list(self, count, size):
        files = list(range(count))
        pages = total_pages(count, size)
        joined = []
        for number in range(1, pages + 1):
            items = paginate(files, number, size).items
            assert 0 < len(items) <= size
            joined.extend(items)
        assert joined == files


class TestClampPage:
    def test_below_one(self):
        assert clamp_page(0, 3) == 1

    def test_above_last(self):
        assert clamp_page(7, 3) == 3

    def test_no_pages(self):
        assert clamp_page(5, 0) == 1

    def test_in_range(self):
        assert clamp_page(2, 3) == 2
