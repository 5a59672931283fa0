import random

import pytest

from textsnap.ocr.clustering import cluster_elements_by_y, group_elements_by_y
from textsnap.ocr.model import OcrElement


def _els(*ys):
    return [OcrElement(f"e{i}", i, y) for i, y in enumerate(ys)]


def _ys(clusters):
    return [[el.y for el in c] for c in clusters]


def test_cluster_breaks_only_on_gaps_above_threshold():
    clusters = cluster_elements_by_y(_els(0, 3, 9, 12, 50), threshold=5)
    assert _ys(clusters) == [[0, 3], [9, 12], [50]]


def test_cluster_gap_equal_to_threshold_stays_together():
    assert _ys(cluster_elements_by_y(_els(0, 5, 10, 16), threshold=5)) == [[0, 5, 10], [16]]


def test_cluster_compares_with_previous_element_not_row_start():
    # drifting rows chain together even though 0 and 16 are far apart
    assert _ys(cluster_elements_by_y(_els(0, 4, 8, 12, 16), threshold=5)) == [[0, 4, 8, 12, 16]]


def test_cluster_sorts_before_partitioning():
    clusters = cluster_elements_by_y(_els(50, 3, 12, 0, 9))
    assert _ys(clusters) == [[0, 3], [9, 12], [50]]


def test_cluster_equal_y_keeps_input_order():
    els = [OcrElement("b", 30, 10), OcrElement("a", 1, 10), OcrElement("c", 5, 40)]
    clusters = cluster_elements_by_y(els)
    assert [[el.text for el in c] for c in clusters] == [["b", "a"], ["c"]]


def test_cluster_membership_is_independent_of_input_order():
    els = _els(0, 2, 7, 30, 33, 34, 80, 81, 100)
    expected = [{el.text for el in c} for c in cluster_elements_by_y(els)]
    rng = random.Random(7)
    for _ in range(10):
        shuffled = els[:]
        rng.shuffle(shuffled)
        assert [{el.text for el in c} for c in cluster_elements_by_y(shuffled)] == expected


def test_cluster_single_element():
    assert _ys(cluster_elements_by_y(_els(17))) == [[17]]


def test_cluster_empty_input_returns_no_clusters():
    assert cluster_elements_by_y([]) == []


def test_cluster_threshold_is_a_parameter():
    els = _els(0, 3, 9, 12, 50)
    assert _ys(cluster_elements_by_y(els, threshold=0)) == [[0], [3], [9], [12], [50]]
    assert _ys(cluster_elements_by_y(els, threshold=40)) == [[0, 3, 9, 12, 50]]


def test_cluster_float_coordinates():
    assert _ys(cluster_elements_by_y(_els(1.5, 6.4, 11.6), threshold=5)) == [[1.5, 6.4], [11.6]]


def test_cluster_negative_threshold_rejected():
    with pytest.raises(ValueError):
        cluster_elements_by_y(_els(1, 2), threshold=-1)


def test_group_by_y_uses_first_seen_order():
    els = [OcrElement("A", 1, 10), OcrElement("C", 2, 20), OcrElement("B", 5, 10)]
    groups = group_elements_by_y(els)
    assert [[el.text for el in g] for g in groups] == [["A", "B"], ["C"]]


def test_group_by_y_exact_match_only():
    groups = group_elements_by_y(_els(10, 11, 10))
    assert _ys(groups) == [[10, 10], [11]]
    assert group_elements_by_y([]) == []
