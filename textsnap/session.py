"""Headless page state: selected mode, try-hard toggle and result text."""

from __future__ import annotations

from typing import List, Optional, Tuple

from textsnap.patterns.registry import Pattern, PatternKey
from textsnap.pipeline.process import ImageToTextService, OutcomeStatus, PipelineOutcome

WAITING_TEXT = "Waiting for results .."
CAPTURE_UNSUPPORTED_NOTICE = "Image capture is not supported on this device."


class OcrSession:
    """State a front end binds to; triggers are ignored while a run is in flight."""

    def __init__(self, service: ImageToTextService, selected: PatternKey = 0, try_hard: bool = True) -> None:
        self.service = service
        self.try_hard = try_hard
        self.results_text = WAITING_TEXT
        self.notice: Optional[str] = None
        self.busy = False
        self.selected_index = 0
        self.select(selected)

    def options(self) -> List[Tuple[int, str]]:
        return [(i, label) for i, _, label in self.service.registry.options()]

    @property
    def selected_pattern(self) -> Pattern:
        return self.service.registry.by_index(self.selected_index)

    def select(self, value: PatternKey) -> Pattern:
        pattern = self.service.registry.resolve(value)
        self.selected_index = self.service.registry.index_of(pattern)
        return pattern

    def clear(self) -> None:
        self.results_text = WAITING_TEXT
        self.notice = None

    async def open_from_camera(self) -> PipelineOutcome:
        return await self._trigger(self.service.open_from_camera)

    async def open_from_file(self) -> PipelineOutcome:
        return await self._trigger(self.service.open_from_file)

    async def _trigger(self, flow) -> PipelineOutcome:
        if self.busy:
            return PipelineOutcome(OutcomeStatus.BUSY)
        self.busy = True
        self.notice = None
        try:
            outcome = await flow(self.selected_pattern, self.try_hard)
        finally:
            self.busy = False
        if outcome.ok:
            self.results_text = outcome.text
        elif outcome.status is OutcomeStatus.CAPTURE_UNSUPPORTED:
            self.notice = CAPTURE_UNSUPPORTED_NOTICE
        return outcome
