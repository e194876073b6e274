"""
Tests for the bounded k-best collector
"""
import pytest

from Nodes.Best_k import BestK
from Nodes.Point import Point
from Nodes.Search_result import SearchResult


def _result(distance, payload=None):
    return SearchResult(Point([distance, 0], payload), distance)


def test_capacity_must_be_positive():
    with pytest.raises(ValueError, match="k debe ser"):
        BestK(0)
    with pytest.raises(ValueError):
        BestK(-3)


@pytest.mark.parametrize("k", [2.5, "3", None, True])
def test_capacity_must_be_integer(k):
    with pytest.raises(ValueError, match="k debe ser un entero"):
        BestK(k)


def test_search_result_order():
    near, mid, far = _result(1), _result(2), _result(3)
    assert far < near
    assert not near < far
    assert [r.distance for r in sorted([near, far, mid])] == [3, 2, 1]
    assert near.value is near.point


def test_keeps_k_smallest():
    best = BestK(3)
    for d in [5, 1, 9, 3, 7, 2, 8]:
        best.add(_result(d))
    assert len(best) == 3
    assert best.is_full()
    assert [r.distance for r in best.values()] == [1, 2, 3]
    assert best.worst().distance == 3


def test_add_returns_self():
    best = BestK(2)
    assert best.add(_result(1)) is best


def test_empty_collector():
    best = BestK(2)
    assert not best.is_full()
    assert best.worst() is None
    assert best.values() == []


def test_oversized_k():
    best = BestK(100)
    for d in [3, 1, 2]:
        best.add(_result(d))
    assert len(best) == 3
    assert not best.is_full()
    assert [r.distance for r in best.values()] == [1, 2, 3]


def test_not_full_admits_worse():
    best = BestK(2)
    best.add(_result(1))
    best.add(_result(10))
    assert [r.distance for r in best.values()] == [1, 10]


def test_equal_distance_is_rejected_when_full():
    best = BestK(1)
    best.add(_result(4, "first"))
    best.add(_result(4, "second"))
    assert len(best) == 1
    assert best.values()[0].point.payload == "first"

    best.add(_result(3, "third"))
    assert best.values()[0].point.payload == "third"
