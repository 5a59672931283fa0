import io
import time

from textsnap.media.picker import MediaPicker
from textsnap.media.source import MemoryPhoto, PhotoSource
from textsnap.ocr.model import OcrElement, OcrResult
from textsnap.ocr.recognizer import Recognizer

RESULT = OcrResult(
    full_text="Invoice 7\nthanks",
    lines=["Invoice 7", "thanks"],
    elements=[OcrElement("Invoice", 5, 20), OcrElement("7", 80, 22), OcrElement("thanks", 5, 60)],
)


class FakeRecognizer(Recognizer):
    def __init__(self, result=RESULT, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self.init_calls = 0

    async def init(self):
        self.init_calls += 1

    async def recognize(self, image_data, options):
        self.calls.append((image_data, options))
        if self.error is not None:
            raise self.error
        return self.result


class FakePicker(MediaPicker):
    def __init__(self, photo=MemoryPhoto(b"jpeg-bytes"), supported=True, error=None):
        self.photo = photo
        self.supported = supported
        self.error = error
        self.captured = 0
        self.picked = 0

    def capture_supported(self):
        return self.supported

    async def capture_photo(self):
        self.captured += 1
        if self.error is not None:
            raise self.error
        return self.photo

    async def pick_photo(self):
        self.picked += 1
        if self.error is not None:
            raise self.error
        return self.photo


class _SlowStream(io.BytesIO):
    def read(self, *args):
        time.sleep(0.5)
        return b"late"


class StalledPhoto(PhotoSource):
    name = "stalled.jpg"

    def open_read(self):
        return _SlowStream()


class _ClosedStream(io.BytesIO):
    def read(self, *args):
        raise ValueError("I/O operation on closed file")


class BrokenPhoto(PhotoSource):
    name = "broken.jpg"

    def open_read(self):
        return _ClosedStream()
