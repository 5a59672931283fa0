"""OCR (Optical Character Recognition) utilities.

This package includes the result model, the Tesseract recognizer, and the
row grouping helpers used to lay recognized words out as text rows.
"""

from .clustering import cluster_elements_by_y, group_elements_by_y
from .model import OcrElement, OcrOptions, OcrResult
from .reader import (
    build_dataframe_from_tesseract,
    decode_image_bytes,
    group_words_to_lines,
    recognize_image_bytes,
    result_from_tesseract,
    tesseract_config,
    tesseract_language,
)
from .recognizer import Recognizer, TesseractRecognizer

__all__ = [
    "cluster_elements_by_y",
    "group_elements_by_y",
    "OcrElement",
    "OcrOptions",
    "OcrResult",
    "build_dataframe_from_tesseract",
    "decode_image_bytes",
    "group_words_to_lines",
    "recognize_image_bytes",
    "result_from_tesseract",
    "tesseract_config",
    "tesseract_language",
    "Recognizer",
    "TesseractRecognizer",
]
