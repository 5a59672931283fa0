from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

Coordinate = Union[int, float]


@dataclass(frozen=True)
class OcrElement:
    text: str
    x: Coordinate
    y: Coordinate


@dataclass(frozen=True)
class OcrResult:
    full_text: str = ""
    lines: Tuple[str, ...] = field(default_factory=tuple)
    elements: Tuple[OcrElement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # accept lists from callers but keep the result immutable
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "elements", tuple(self.elements))

    @classmethod
    def empty(cls) -> "OcrResult":
        return cls()


@dataclass(frozen=True)
class OcrOptions:
    try_hard: bool = True
    language: str = "en-US"
