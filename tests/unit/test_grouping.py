import pytest

from evlens.grouping import (
    Bin,
    count_by,
    extent,
    group_reduce,
    histogram,
    mean,
    percentage,
    round_half_up,
    top_n,
)


def test_group_reduce_keeps_first_seen_key_order():
    out = group_reduce(["bb", "a", "cc", "b", "aaa"], len, lambda xs: "".join(xs))
    assert list(out) == [2, 1, 3]
    assert out == {2: "bbcc", 1: "ab", 3: "aaa"}


def test_count_by():
    assert count_by([3, 1, 3, 3, 2], lambda x: x) == {3: 3, 1: 1, 2: 1}
    assert count_by([], lambda x: x) == {}


def test_top_n_sorts_descending_and_keeps_ties_in_first_seen_order():
    counts = {"A": 2, "B": 5, "C": 2, "D": 1}
    assert top_n(counts, 3) == [("B", 5), ("A", 2), ("C", 2)]
    assert top_n(counts) == [("B", 5), ("A", 2), ("C", 2), ("D", 1)]
    assert top_n(counts, 10) == top_n(counts)
    assert top_n(counts, 0) == []


def test_mean_and_extent_return_none_for_empty_input():
    assert mean([]) is None
    assert extent([]) is None
    assert mean([1, 2, 4]) == pytest.approx(7 / 3)
    assert extent([5, -1, 3]) == (-1, 5)


@pytest.mark.parametrize("x, expected", [
    (2.5, 3), (0.5, 1), (232.5, 233), (233.33, 233), (2.4999, 2), (-2.5, -2), (-2.6, -3), (0, 0),
])
def test_round_half_up(x, expected):
    assert round_half_up(x) == expected


def test_percentage_guards_zero_total():
    assert percentage(0, 0) == 0.0
    assert percentage(1, 4) == 25.0


def test_histogram_places_values_in_half_open_bins_with_closed_last_bin():
    bins = histogram([100, 100, 100, 200], 100, 200, 4)
    assert [b.count for b in bins] == [3, 0, 0, 1]
    assert [(b.lower, b.upper) for b in bins] == [(100, 125), (125, 150), (150, 175), (175, 200)]
    assert [b.label for b in bins] == ["100-125", "125-150", "150-175", "175-200"]


def test_histogram_edge_value_goes_to_upper_bin():
    bins = histogram([0, 10, 20], 0, 20, 2)
    assert [b.count for b in bins] == [1, 2]


def test_histogram_excludes_values_outside_domain():
    bins = histogram([-5, 0, 5, 10, 11], 0, 10, 2)
    assert sum(b.count for b in bins) == 3


def test_histogram_keeps_empty_bins():
    bins = histogram([], 0, 100, 5)
    assert len(bins) == 5
    assert all(b.count == 0 for b in bins)


def test_histogram_zero_width_domain_is_single_bin():
    assert histogram([7, 7], 7, 7, 10) == [Bin(lower=7.0, upper=7.0, count=2)]
    assert histogram([], 0, 0, 10) == [Bin(lower=0.0, upper=0.0, count=0)]


def test_histogram_rejects_bad_arguments():
    with pytest.raises(ValueError):
        histogram([1], 0, 10, 0)
    with pytest.raises(ValueError):
        histogram([1], 10, 0, 3)


def test_bin_label_rounds_half_up():
    assert Bin(lower=0, upper=12.5, count=0).label == "0-13"
    assert Bin(lower=27.45, upper=54.9, count=0).label == "27-55"
