"""Photo acquisition: byte sources, bounded reads and the media picker port."""

from .picker import DesktopMediaPicker, MediaPicker
from .source import MemoryPhoto, PhotoFile, PhotoSource, read_image_bytes

__all__ = [
    "DesktopMediaPicker",
    "MediaPicker",
    "MemoryPhoto",
    "PhotoFile",
    "PhotoSource",
    "read_image_bytes",
]
