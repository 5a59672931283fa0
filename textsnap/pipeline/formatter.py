"""Render an OCR result as a single display string for a selected mode."""

from __future__ import annotations

from typing import Iterable, List

from textsnap.ocr.clustering import DEFAULT_THRESHOLD, cluster_elements_by_y, group_elements_by_y
from textsnap.ocr.model import Coordinate, OcrElement, OcrResult
from textsnap.patterns.registry import PATTERNS, Pattern, PatternRegistry, RuleKind


def _format_coordinate(value: Coordinate) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_element_position(element: OcrElement) -> str:
    return f"{element.text} ({_format_coordinate(element.x)};{_format_coordinate(element.y)})"


def _join_row(row: Iterable[OcrElement]) -> str:
    return " ".join(el.text for el in row)


def _append_lines(lines: Iterable[str]) -> str:
    # every line carries its own terminator, the last one included
    return "".join(f"{line}\n" for line in lines)


def format_result(
    result: OcrResult,
    pattern: Pattern,
    registry: PatternRegistry = PATTERNS,
    cluster_threshold: Coordinate = DEFAULT_THRESHOLD,
) -> str:
    """Apply the rule bound to ``pattern`` and serialize the output.

    Doxygen:
    - @param result: Recognized text, lines and positioned elements.
    - @param pattern: Selected output mode.
    - @param registry: Mode table providing the rule for ``pattern``.
    - @param cluster_threshold: Row gap used by the clustering mode.
    - @return: ``full_text`` verbatim for ``Pattern.NONE``; otherwise one
      ``\\n``-terminated line per emitted item, or ``""`` when nothing is emitted.
    """
    rule = registry.rule(pattern)
    kind = rule.kind

    if kind is RuleKind.FULL_TEXT:
        return result.full_text

    out: List[str]
    if kind is RuleKind.LINE_FILTER:
        out = [line for line in result.lines if rule.regex.search(line)]
    elif kind is RuleKind.ELEMENT_POSITIONS:
        out = [format_element_position(el) for el in result.elements]
    elif kind is RuleKind.GROUP_BY_Y:
        out = [_join_row(group) for group in group_elements_by_y(result.elements)]
    elif kind is RuleKind.CLUSTER_BY_Y:
        if not result.elements:
            return ""
        out = [_join_row(row) for row in cluster_elements_by_y(result.elements, cluster_threshold)]
    else:
        raise ValueError(f"Unhandled rule kind: {kind}")
    return _append_lines(out)
