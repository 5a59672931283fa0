"""Failure conditions raised by the acquisition and recognition stages.

The pipeline converts each of them into an outcome status; none of them is
expected to reach the caller of the pipeline.
"""


class TextSnapError(Exception):
    """Base exception for photo-to-text failures."""
    pass


class AcquisitionCancelled(TextSnapError):
    """The user dismissed the camera or the picker without a photo."""
    pass


class CaptureUnsupported(TextSnapError):
    """The device has no usable camera."""
    pass


class ReadTimeout(TextSnapError):
    """Reading the photo bytes did not finish in time."""
    pass


class AcquisitionFailed(TextSnapError):
    """The photo could not be read (I/O error or empty stream)."""
    pass


class RecognitionFailure(TextSnapError):
    """The OCR engine failed or is not available."""
    pass
