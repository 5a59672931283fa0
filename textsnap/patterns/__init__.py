"""Output modes (patterns) for recognized text."""

from .registry import PATTERNS, Pattern, PatternRegistry, PatternRule, RuleKind

__all__ = [
    "PATTERNS",
    "Pattern",
    "PatternRegistry",
    "PatternRule",
    "RuleKind",
]
