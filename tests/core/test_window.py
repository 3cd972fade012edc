import pytest

from pagewise import GAP, compute_page_window


class TestSmallTotals:
    def test_all_pages_when_they_fit(self):
        assert compute_page_window(1, 5, 5) == [1, 2, 3, 4, 5]

    def test_single_page(self):
        assert compute_page_window(1, 1, 5) == [1]

    def test_zero_pages_counts_as_one(self):
        assert compute_page_window(1, 0, 5) == [1]


class TestCollapsedWindow:
    def test_middle_page_has_gaps_on_both_sides(self):
        assert compute_page_window(5, 10, 5) == [1, GAP, 3, 4, 5, 6, 7, GAP, 10]

    def test_first_page(self):
        assert compute_page_window(1, 10, 5) == [1, 2, 3, 4, 5, GAP, 10]

    def test_last_page(self):
        assert compute_page_window(10, 10, 5) == [1, GAP, 6, 7, 8, 9, 10]

    def test_no_gap_when_only_one_page_is_skipped(self):
        # start == 2, so page 1 is adjacent and no gap is needed
        assert compute_page_window(4, 10, 5) == [1, 2, 3, 4, 5, 6, GAP, 10]
        assert compute_page_window(7, 10, 5) == [1, GAP, 5, 6, 7, 8, 9, 10]

    def test_even_window_width(self):
        assert compute_page_window(5, 10, 4) == [1, GAP, 3, 4, 5, 6, 7, GAP, 10]

    def test_window_width_one(self):
        assert compute_page_window(5, 10, 1) == [1, GAP, 5, GAP, 10]

    def test_out_of_range_current_page_is_clamped(self):
        assert compute_page_window(99, 10, 5) == compute_page_window(10, 10, 5)
        assert compute_page_window(-3, 10, 5) == compute_page_window(1, 10, 5)


class TestWindowProperties:
    @pytest.mark.parametrize("max_pages", [1, 3, 4, 5, 7])
    @pytest.mark.parametrize("total_pages", [1, 2, 6, 9, 20])
    def test_invariants_hold_for_every_page(self, total_pages, max_pages):
        for current in range(1, total_pages + 1):
            window = compute_page_window(current, total_pages, max_pages)
            numbers = [e for e in window if e is not GAP]

            assert current in numbers
            assert numbers == sorted(set(numbers))
            assert all(1 <= n <= total_pages for n in numbers)
            if total_pages > 1:
                assert numbers[0] == 1
                assert numbers[-1] == total_pages
            # a gap always stands for at least one missing page
            for i, entry in enumerate(window):
                if entry is GAP:
                    assert window[i + 1] - window[i - 1] > 1

    def test_gap_is_never_a_page_number(self):
        assert GAP != 0
        assert GAP != -1
        assert not isinstance(GAP, int)
