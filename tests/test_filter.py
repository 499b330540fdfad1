import pytest

from plotmon.filter import FilterOpts

POINTS = [(float(i), float(i * i)) for i in range(10)]


def test_default_accepts_everything():
    opts = FilterOpts()
    assert opts.apply("loss") is True
    assert opts.trim(POINTS) == POINTS


def test_only_keeps_listed_names():
    opts = FilterOpts(only=["loss", "acc"])
    assert opts.apply("loss") is True
    assert opts.apply("lr") is False


def test_exclude_removes_listed_names():
    opts = FilterOpts(exclude=["lr"])
    assert opts.apply("lr") is False
    assert opts.apply("loss") is True


def test_exclude_takes_precedence_over_only():
    opts = FilterOpts(only=["loss"], exclude=["lr"])
    # ``only`` is ignored once ``exclude`` is set
    assert opts.apply("acc") is True
    assert opts.apply("lr") is False


def test_min_x_is_inclusive():
    opts = FilterOpts(min_x=POINTS[3][0])
    assert opts.trim(POINTS) == POINTS[3:]


def test_max_x_is_exclusive():
    opts = FilterOpts(max_x=POINTS[7][0])
    assert opts.trim(POINTS) == POINTS[:7]


def test_min_and_max_together():
    opts = FilterOpts(min_x=POINTS[2][0], max_x=POINTS[5][0])
    assert opts.trim(POINTS) == POINTS[2:5]


def test_bounds_between_points():
    opts = FilterOpts(min_x=2.5, max_x=5.5)
    assert opts.trim(POINTS) == POINTS[3:6]


def test_span_keeps_tail():
    opts = FilterOpts(span=3.0)
    assert opts.trim(POINTS) == POINTS[6:]


def test_span_takes_precedence_over_bounds():
    opts = FilterOpts(span=2.0, min_x=0.0, max_x=1.0)
    assert opts.trim(POINTS) == POINTS[7:]


def test_span_larger_than_series_keeps_all():
    opts = FilterOpts(span=1000.0)
    assert opts.trim(POINTS) == POINTS


def test_span_on_empty_series_raises():
    with pytest.raises(ValueError):
        FilterOpts(span=1.0).trim([])


def test_inverted_range_raises():
    with pytest.raises(ValueError):
        FilterOpts(min_x=6.0, max_x=2.0).trim(POINTS)


def test_trim_result_is_contiguous_subsequence():
    opts = FilterOpts(min_x=1.0, max_x=8.0)
    result = opts.trim(POINTS)
    assert all(opts.min_x <= x < opts.max_x for x, _ in result)
    assert list(result) == [p for p in POINTS if opts.min_x <= p[0] < opts.max_x]