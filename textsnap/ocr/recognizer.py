"""Recognition port and its Tesseract implementation."""

from __future__ import annotations

import asyncio
import logging

import pytesseract

from textsnap.config import configure_dependencies
from textsnap.errors import RecognitionFailure

from .model import OcrOptions, OcrResult
from .reader import recognize_image_bytes

logger = logging.getLogger(__name__)


class Recognizer:
    """Turns encoded image bytes into an :class:`OcrResult`."""

    async def init(self) -> None:
        """Prepare the engine; called before every recognition."""
        return None

    async def recognize(self, image_data: bytes, options: OcrOptions) -> OcrResult:
        raise NotImplementedError


class TesseractRecognizer(Recognizer):
    """Runs pytesseract in a worker thread so the event loop stays free."""

    def __init__(self) -> None:
        self._ready = False

    async def init(self) -> None:
        if self._ready:
            return
        await asyncio.to_thread(configure_dependencies)
        try:
            version = await asyncio.to_thread(pytesseract.get_tesseract_version)
        except pytesseract.TesseractNotFoundError as e:
            raise RecognitionFailure("Tesseract executable not found; set tesseract_path in config/dependencies.json") from e
        logger.debug("Tesseract %s ready", version)
        self._ready = True

    async def recognize(self, image_data: bytes, options: OcrOptions) -> OcrResult:
        return await asyncio.to_thread(recognize_image_bytes, image_data, options)
