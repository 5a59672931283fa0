"""Media picker port and a desktop implementation (files + OpenCV camera)."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import cv2

from .source import MemoryPhoto, PhotoFile, PhotoSource

logger = logging.getLogger(__name__)


class MediaPicker:
    """Source of photos: camera capture and gallery/file pick.

    ``capture_photo`` and ``pick_photo`` return ``None`` when the user cancels.
    """

    def capture_supported(self) -> bool:
        return False

    async def capture_photo(self) -> Optional[PhotoSource]:
        raise NotImplementedError

    async def pick_photo(self) -> Optional[PhotoSource]:
        raise NotImplementedError


def _grab_frame_png(camera_index: int) -> Optional[bytes]:
    cap = cv2.VideoCapture(camera_index)
    try:
        if not cap.isOpened():
            return None
        ok, frame = cap.read()
        if not ok or frame is None:
            return None
        ok, encoded = cv2.imencode(".png", frame)
        return encoded.tobytes() if ok else None
    finally:
        cap.release()


class DesktopMediaPicker(MediaPicker):
    """Picks a photo from a known path and captures from a local camera.

    Doxygen:
    - @param image_path: File returned by ``pick_photo``; missing means cancelled.
    - @param camera_index: OpenCV device index; None disables capture.
    """

    def __init__(self, image_path: Optional[str] = None, camera_index: Optional[int] = None) -> None:
        self.image_path = image_path
        self.camera_index = camera_index
        self._capture_supported: Optional[bool] = None

    def capture_supported(self) -> bool:
        if self.camera_index is None:
            return False
        if self._capture_supported is None:
            cap = cv2.VideoCapture(self.camera_index)
            try:
                self._capture_supported = bool(cap.isOpened())
            finally:
                cap.release()
        return self._capture_supported

    async def capture_photo(self) -> Optional[PhotoSource]:
        if self.camera_index is None:
            return None
        data = await asyncio.to_thread(_grab_frame_png, self.camera_index)
        if data is None:
            logger.info("Camera %s returned no frame", self.camera_index)
            return None
        return MemoryPhoto(data, name=f"camera-{self.camera_index}.png")

    async def pick_photo(self) -> Optional[PhotoSource]:
        if not self.image_path:
            return None
        if not os.path.isfile(self.image_path):
            logger.warning("Image file not found: %s", self.image_path)
            return None
        return PhotoFile(self.image_path)
