"""High-level orchestration: Photo → OCR → formatted text."""

from .formatter import format_element_position, format_result
from .process import ImageToTextService, OutcomeStatus, PipelineOutcome

__all__ = [
    "format_element_position",
    "format_result",
    "ImageToTextService",
    "OutcomeStatus",
    "PipelineOutcome",
]
