"""Output modes for recognized text and their static rules.

Each :class:`Pattern` variant is bound to a rule and to a display label
through two separate mappings. Both are checked for totality when a
:class:`PatternRegistry` is built, and every line filter is compiled there,
so a bad regular expression fails at registration and never at format time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union


class Pattern(Enum):
    NONE = "None"
    CONTAINS_DIGITS = "ContainsDigits"
    TEXT_ONLY = "TextOnly"
    ELEMENTS_POSITIONS = "ElementsPositions"
    ELEMENTS_GROUP_Y = "ElementsGroupY"
    ELEMENTS_GROUP_Y_CLUSTERING = "ElementsGroupYClustering"


class RuleKind(Enum):
    FULL_TEXT = "full_text"
    LINE_FILTER = "line_filter"
    ELEMENT_POSITIONS = "element_positions"
    GROUP_BY_Y = "group_by_y"
    CLUSTER_BY_Y = "cluster_by_y"


@dataclass(frozen=True)
class PatternRule:
    kind: RuleKind
    regex: Optional[re.Pattern] = None


_DEFAULT_RULES: Dict[Pattern, Tuple[RuleKind, Optional[str]]] = {
    Pattern.NONE: (RuleKind.FULL_TEXT, None),
    Pattern.CONTAINS_DIGITS: (RuleKind.LINE_FILTER, r"\d+"),
    Pattern.TEXT_ONLY: (RuleKind.LINE_FILTER, r"^(?!.*\d).*"),
    Pattern.ELEMENTS_POSITIONS: (RuleKind.ELEMENT_POSITIONS, None),
    Pattern.ELEMENTS_GROUP_Y: (RuleKind.GROUP_BY_Y, None),
    Pattern.ELEMENTS_GROUP_Y_CLUSTERING: (RuleKind.CLUSTER_BY_Y, None),
}

_DEFAULT_LABELS: Dict[Pattern, str] = {
    Pattern.NONE: "No pattern",
    Pattern.CONTAINS_DIGITS: "With digits",
    Pattern.TEXT_ONLY: "Text only",
    Pattern.ELEMENTS_POSITIONS: "Elements with position",
    Pattern.ELEMENTS_GROUP_Y: "Elements grouped by Y",
    Pattern.ELEMENTS_GROUP_Y_CLUSTERING: "Elements grouped by Y Clustering",
}

PatternKey = Union[Pattern, int, str]


def _compile_rule(pattern: Pattern, kind: RuleKind, expression: Optional[str]) -> PatternRule:
    if kind is RuleKind.LINE_FILTER:
        if not expression:
            raise ValueError(f"Line filter for {pattern.value} needs a regular expression")
        try:
            return PatternRule(kind, re.compile(expression))
        except re.error as e:
            raise ValueError(f"Invalid regular expression for {pattern.value}: {expression!r} ({e})") from e
    if expression is not None:
        raise ValueError(f"{pattern.value} is a structural mode and takes no regular expression")
    return PatternRule(kind)


class PatternRegistry:
    """Read-only, ordered table of output modes."""

    def __init__(
        self,
        rules: Mapping[Pattern, Tuple[RuleKind, Optional[str]]],
        labels: Mapping[Pattern, str],
    ) -> None:
        missing = [p.value for p in Pattern if p not in rules or p not in labels]
        if missing:
            raise ValueError(f"Pattern registry is missing entries for: {', '.join(missing)}")
        self._order: Tuple[Pattern, ...] = tuple(Pattern)
        self._sources: Mapping[Pattern, Tuple[RuleKind, Optional[str]]] = MappingProxyType(
            {p: rules[p] for p in self._order}
        )
        self._rules: Mapping[Pattern, PatternRule] = MappingProxyType(
            {p: _compile_rule(p, *rules[p]) for p in self._order}
        )
        self._labels: Mapping[Pattern, str] = MappingProxyType({p: labels[p] for p in self._order})

    @classmethod
    def default(cls) -> "PatternRegistry":
        return cls(_DEFAULT_RULES, _DEFAULT_LABELS)

    def with_overrides(self, overrides: Mapping[str, str]) -> "PatternRegistry":
        """Return a new registry with line-filter expressions replaced.

        Doxygen:
        - @param overrides: Variant name (e.g. ``"ContainsDigits"``) to regex.
        - @return: A new registry; this one is left untouched.
        - @throws ValueError: Unknown variant, structural variant, or bad regex.
        """
        rules = dict(self._sources)
        for name, expression in overrides.items():
            try:
                pattern = Pattern(name)
            except ValueError:
                raise ValueError(f"Unknown pattern in overrides: {name!r}") from None
            kind, _ = rules[pattern]
            if kind is not RuleKind.LINE_FILTER:
                raise ValueError(f"{pattern.value} is a structural mode and takes no regular expression")
            rules[pattern] = (kind, expression)
        return PatternRegistry(rules, self._labels)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self):
        return iter(self._order)

    def rule(self, pattern: Pattern) -> PatternRule:
        return self._rules[pattern]

    def label(self, pattern: Pattern) -> str:
        return self._labels[pattern]

    def by_index(self, index: int) -> Pattern:
        if index < 0:
            raise IndexError(f"Pattern index out of range: {index}")
        return self._order[index]

    def index_of(self, pattern: Pattern) -> int:
        return self._order.index(pattern)

    def options(self) -> List[Tuple[int, Pattern, str]]:
        """Ordered ``(index, pattern, label)`` triples for a mode selector."""
        return [(i, p, self._labels[p]) for i, p in enumerate(self._order)]

    def resolve(self, value: PatternKey) -> Pattern:
        """Map a variant, an index, a variant name or a label to a variant.

        Doxygen:
        - @param value: ``Pattern``, ``int`` index, name such as ``"TextOnly"``
          (case-insensitive), or display label such as ``"Text only"``.
        - @return: The matching variant.
        - @throws IndexError: Index out of range.
        - @throws KeyError: No variant matches the string.
        """
        if isinstance(value, Pattern):
            return value
        if isinstance(value, bool):
            raise TypeError("Pattern selector cannot be a bool")
        if isinstance(value, int):
            return self.by_index(value)
        key = str(value).strip()
        if key.isdigit():
            return self.by_index(int(key))
        folded = key.casefold()
        for p in self._order:
            if folded in (p.value.casefold(), p.name.casefold(), self._labels[p].casefold()):
                return p
        raise KeyError(f"Unknown pattern: {value!r}")


PATTERNS = PatternRegistry.default()
