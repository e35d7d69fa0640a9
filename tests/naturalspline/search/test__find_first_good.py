"""Tests for the monotonic-predicate binary search."""

import math

import pytest
import torch

from naturalspline.search import find_first_good


class TestFindFirstGood:
    def test_first_true_index(self):
        """Returns the index where the predicate switches to True."""
        for boundary in range(8):
            result = find_first_good(7, lambda i: i >= boundary)
            assert result.item() == min(boundary, 7)

    def test_scalar_search_returns_zero_dim_long(self):
        result = find_first_good(5, lambda i: i >= 3)

        assert result.shape == ()
        assert result.dtype == torch.long

    def test_all_false_returns_high(self):
        assert find_first_good(5, lambda i: torch.zeros_like(i, dtype=torch.bool)) == 5

    def test_all_true_returns_zero(self):
        assert find_first_good(5, lambda i: torch.ones_like(i, dtype=torch.bool)) == 0

    def test_empty_range_does_not_call_predicate(self):
        """With high=0 the predicate is never evaluated."""

        def good(i):
            raise AssertionError(f"predicate called with {i}")

        assert find_first_good(0, good) == 0
        assert torch.equal(
            find_first_good(0, good, (3,)), torch.zeros(3, dtype=torch.long)
        )

    def test_negative_high_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            find_first_good(-1, lambda i: i >= 0)

    def test_predicate_only_called_in_range(self):
        """The predicate is never called outside [0, high)."""
        calls = []
        boundaries = torch.tensor([0, 3, 9, 10])

        def good(i):
            calls.append(i.clone())
            return i >= boundaries

        find_first_good(10, good, boundaries.shape)

        assert calls
        for i in calls:
            assert torch.all((i >= 0) & (i < 10))

    def test_batched_lower_bound_with_duplicates(self):
        """Over sorted data this is a lower-bound search, one per target."""
        values = torch.tensor([1.0, 2.0, 2.0, 2.0, 5.0])
        targets = torch.tensor([2.0, 3.0, 0.0, 6.0, 5.0])

        result = find_first_good(5, lambda i: values[i] >= targets, targets.shape)

        assert result.tolist() == [1, 4, 0, 5, 4]

    def test_matches_searchsorted(self):
        values = torch.sort(torch.rand(37, dtype=torch.float64)).values
        targets = torch.rand(100, dtype=torch.float64)

        result = find_first_good(37, lambda i: values[i] >= targets, targets.shape)

        torch.testing.assert_close(result, torch.searchsorted(values, targets))

    def test_logarithmic_number_of_calls(self):
        """Bisection evaluates the predicate O(log high) times."""
        high = 1024
        targets = torch.tensor([0, 1, 700, 1023, 1024])
        calls = []

        def good(i):
            calls.append(i)
            return i >= targets

        result = find_first_good(high, good, targets.shape)

        assert result.tolist() == [0, 1, 700, 1023, 1024]
        assert len(calls) <= math.ceil(math.log2(high + 1))
