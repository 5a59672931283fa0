"""High-level pipeline: acquire photo → read bytes → recognize → format.

`ImageToTextService` runs one acquisition flow at a time and reports every
result as a `PipelineOutcome`. Acquisition and recognition failures are
logged and turned into outcome statuses; they are never raised to the caller.
Task cancellation passes through untouched.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from textsnap.errors import (
    AcquisitionCancelled,
    AcquisitionFailed,
    CaptureUnsupported,
    ReadTimeout,
    RecognitionFailure,
    TextSnapError,
)
from textsnap.media.picker import MediaPicker
from textsnap.media.source import PhotoSource, read_image_bytes
from textsnap.ocr.clustering import DEFAULT_THRESHOLD
from textsnap.ocr.model import OcrOptions, OcrResult
from textsnap.ocr.recognizer import Recognizer
from textsnap.patterns.registry import PATTERNS, Pattern, PatternKey, PatternRegistry

from .formatter import format_result

logger = logging.getLogger(__name__)

DEFAULT_READ_TIMEOUT = 5.0
DEFAULT_LANGUAGE = "en-US"


class OutcomeStatus(Enum):
    OK = "ok"
    CANCELLED = "cancelled"
    CAPTURE_UNSUPPORTED = "capture_unsupported"
    READ_TIMEOUT = "read_timeout"
    ACQUISITION_FAILED = "acquisition_failed"
    RECOGNITION_FAILED = "recognition_failed"
    BUSY = "busy"


_STATUS_BY_ERROR = (
    (AcquisitionCancelled, OutcomeStatus.CANCELLED),
    (CaptureUnsupported, OutcomeStatus.CAPTURE_UNSUPPORTED),
    (ReadTimeout, OutcomeStatus.READ_TIMEOUT),
    (AcquisitionFailed, OutcomeStatus.ACQUISITION_FAILED),
    (RecognitionFailure, OutcomeStatus.RECOGNITION_FAILED),
)


@dataclass(frozen=True)
class PipelineOutcome:
    status: OutcomeStatus
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    @classmethod
    def from_error(cls, exc: TextSnapError) -> "PipelineOutcome":
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return cls(status, error=str(exc) or None)
        return cls(OutcomeStatus.RECOGNITION_FAILED, error=str(exc) or None)


class ImageToTextService:
    """Photo-to-text flows for the camera and the file picker.

    Doxygen:
    - @param recognizer: OCR engine port.
    - @param media_picker: Camera/picker port.
    - @param registry: Mode table used for formatting.
    - @param read_timeout: Bound in seconds for reading the photo; None disables it.
    - @param language: Locale passed to the recognizer.
    - @param cluster_threshold: Row gap for the clustering mode.
    """

    def __init__(
        self,
        recognizer: Recognizer,
        media_picker: MediaPicker,
        registry: PatternRegistry = PATTERNS,
        read_timeout: Optional[float] = DEFAULT_READ_TIMEOUT,
        language: str = DEFAULT_LANGUAGE,
        cluster_threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.recognizer = recognizer
        self.media_picker = media_picker
        self.registry = registry
        self.read_timeout = read_timeout
        self.language = language
        self.cluster_threshold = cluster_threshold
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def running(self) -> bool:
        return self._lock is not None and self._lock.locked()

    def _run_lock(self) -> asyncio.Lock:
        # one lock per event loop, created lazily inside it
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def open_from_camera(self, pattern: PatternKey, try_hard: bool = True) -> PipelineOutcome:
        selected = self.registry.resolve(pattern)
        return await self._run(self._capture, selected, try_hard)

    async def open_from_file(self, pattern: PatternKey, try_hard: bool = True) -> PipelineOutcome:
        selected = self.registry.resolve(pattern)
        return await self._run(self.media_picker.pick_photo, selected, try_hard)

    async def _capture(self) -> Optional[PhotoSource]:
        if not self.media_picker.capture_supported():
            raise CaptureUnsupported("Image capture is not supported on this device.")
        return await self.media_picker.capture_photo()

    async def _run(
        self,
        acquire: Callable[[], Awaitable[Optional[PhotoSource]]],
        pattern: Pattern,
        try_hard: bool,
    ) -> PipelineOutcome:
        async with self._run_lock():
            try:
                photo = await self._acquire(acquire)
                image_data = await read_image_bytes(photo, timeout=self.read_timeout)
                result = await self._recognize(image_data, OcrOptions(try_hard=try_hard, language=self.language))
            except (AcquisitionCancelled, CaptureUnsupported) as e:
                logger.info("No photo to recognize: %s", e)
                return PipelineOutcome.from_error(e)
            except TextSnapError as e:
                logger.warning("Photo-to-text run failed: %s", e)
                return PipelineOutcome.from_error(e)
            text = format_result(result, pattern, self.registry, self.cluster_threshold)
            return PipelineOutcome(OutcomeStatus.OK, text=text)

    async def _acquire(self, acquire: Callable[[], Awaitable[Optional[PhotoSource]]]) -> PhotoSource:
        try:
            photo = await acquire()
        except TextSnapError:
            raise
        except Exception as e:
            raise AcquisitionFailed(f"Photo acquisition failed: {e}") from e
        if photo is None:
            raise AcquisitionCancelled("No photo selected")
        return photo

    async def _recognize(self, image_data: bytes, options: OcrOptions) -> OcrResult:
        try:
            await self.recognizer.init()
            return await self.recognizer.recognize(image_data, options)
        except RecognitionFailure:
            logger.exception("Recognition failed")
            raise
        except Exception as e:
            logger.exception("Recognition failed")
            raise RecognitionFailure(f"Recognition failed: {e}") from e
