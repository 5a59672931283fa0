"""Row grouping of positioned OCR elements.

Two strategies are provided:
- exact grouping by the ``y`` coordinate, in first-seen order;
- single-pass proximity clustering on ``y`` with a fixed threshold.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .model import Coordinate, OcrElement

DEFAULT_THRESHOLD = 5


def group_elements_by_y(elements: Iterable[OcrElement]) -> List[List[OcrElement]]:
    """Group elements sharing exactly the same ``y`` value.

    Doxygen:
    - @param elements: Elements in recognizer order.
    - @return: Groups ordered by the first occurrence of each ``y``; element
      order inside a group follows the input order.
    """
    groups: Dict[Coordinate, List[OcrElement]] = {}
    for el in elements:
        groups.setdefault(el.y, []).append(el)
    return list(groups.values())


def cluster_elements_by_y(elements: Iterable[OcrElement], threshold: Coordinate = DEFAULT_THRESHOLD) -> List[List[OcrElement]]:
    """Partition elements into rows by vertical proximity.

    Elements are sorted by ``y`` (stable, so equal ``y`` keep their input
    order). Each element is compared with the previous sorted element, not
    with the start of its row: a gap larger than ``threshold`` closes the
    current row.

    Doxygen:
    - @param elements: Elements sharing one coordinate space.
    - @param threshold: Largest gap (in coordinate units) kept inside a row.
    - @return: Rows from top to bottom; empty input gives an empty list.
    - @throws ValueError: If ``threshold`` is negative.
    """
    if threshold < 0:
        raise ValueError(f"Clustering threshold must be non-negative, got {threshold}")
    sorted_elements = sorted(elements, key=lambda el: el.y)
    if not sorted_elements:
        return []

    clusters: List[List[OcrElement]] = []
    current: List[OcrElement] = [sorted_elements[0]]
    for prev, el in zip(sorted_elements, sorted_elements[1:]):
        if abs(el.y - prev.y) > threshold:
            clusters.append(current)
            current = []
        current.append(el)
    clusters.append(current)
    return clusters
