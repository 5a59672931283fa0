"""Tesseract-backed recognizer: image bytes in, :class:`OcrResult` out.

This module provides:
- Building a cleaned DataFrame from pytesseract output.
- Grouping words to recognizer lines.
- Mapping locale tags and the try-hard flag to Tesseract arguments.
- Decoding image bytes and running a recognition pass.

All public functions include Doxygen-style documentation tags.
"""

from __future__ import annotations

import io
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from .model import OcrElement, OcrOptions, OcrResult

_LANG_TAG_TO_TESSERACT = {
    "en": "eng",
    "ru": "rus",
    "uk": "ukr",
    "de": "deu",
    "fr": "fra",
    "es": "spa",
    "it": "ita",
    "pt": "por",
    "zh-cn": "chi_sim",
    "zh-tw": "chi_tra",
}

# fully automatic page segmentation vs. a single uniform block of text
_PSM_TRY_HARD = 3
_PSM_FAST = 6


def tesseract_language(language: str) -> str:
    """Translate a locale tag such as ``en-US`` into a Tesseract language code.

    Doxygen:
    - @param language: BCP-47 tag or an already valid Tesseract code (``rus+eng``).
    - @return: Tesseract code; unknown values are returned unchanged.
    """
    tag = (language or "").strip()
    if not tag:
        return "eng"
    lower = tag.lower().replace("_", "-")
    if lower in _LANG_TAG_TO_TESSERACT:
        return _LANG_TAG_TO_TESSERACT[lower]
    base = lower.split("-")[0]
    return _LANG_TAG_TO_TESSERACT.get(base, tag)


def tesseract_config(try_hard: bool) -> str:
    psm = _PSM_TRY_HARD if try_hard else _PSM_FAST
    return f"--psm {psm}"


def build_dataframe_from_tesseract(data: Dict[str, Any]) -> pd.DataFrame:
    """Create and clean a DataFrame from pytesseract.image_to_data output.

    Doxygen:
    - @param data: Dict returned by `pytesseract.image_to_data(..., output_type=Output.DICT)`.
    - @return: Word rows with positive confidence and non-blank text, in recognizer order.
    """
    df = pd.DataFrame(data)
    if df.empty:
        return df
    df['conf'] = pd.to_numeric(df['conf'], errors='coerce').fillna(-1)
    df = df[df['conf'] > 0].copy()
    df['text'] = df['text'].fillna('').astype(str).str.strip()
    df = df[df['text'] != '']
    return df


def group_words_to_lines(df: pd.DataFrame) -> List[str]:
    """Join the words of each recognizer line, top-to-bottom.

    Doxygen:
    - @param df: DataFrame produced by `build_dataframe_from_tesseract`.
    - @return: One string per (block, paragraph, line), words left-to-right.
    """
    if df.empty:
        return []
    group_cols = [c for c in ('page_num', 'block_num', 'par_num', 'line_num') if c in df.columns]
    if not group_cols:
        return [' '.join(df['text'].tolist())]
    lines: List[str] = []
    for _, g in df.groupby(group_cols, sort=True):
        g_sorted = g.sort_values('left', kind='stable')
        lines.append(' '.join(g_sorted['text'].tolist()))
    return lines


def result_from_tesseract(data: Dict[str, Any]) -> OcrResult:
    """Build an immutable OCR result from raw pytesseract word data.

    Doxygen:
    - @param data: Dict from `pytesseract.image_to_data` (DICT output).
    - @return: OcrResult with word elements positioned at their top-left corner.
    """
    df = build_dataframe_from_tesseract(data)
    if df.empty:
        return OcrResult.empty()
    elements = [
        OcrElement(text=str(t), x=int(left), y=int(top))
        for t, left, top in zip(df['text'].tolist(), df['left'].tolist(), df['top'].tolist())
    ]
    lines = group_words_to_lines(df)
    return OcrResult(full_text='\n'.join(lines), lines=lines, elements=elements)


def decode_image_bytes(image_data: bytes) -> np.ndarray:
    """Decode encoded image bytes into an RGB array in display orientation.

    Doxygen:
    - @param image_data: Encoded image (JPEG, PNG, ...).
    - @return: ``uint8`` array of shape (height, width, 3).
    - @throws ValueError: If the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            # phone photos carry their rotation in EXIF
            upright = ImageOps.exif_transpose(img)
            return np.asarray(upright.convert('RGB'))
    except UnidentifiedImageError as e:
        raise ValueError("Image data is not a recognizable image format") from e


def recognize_image_bytes(image_data: bytes, options: OcrOptions = OcrOptions()) -> OcrResult:
    """Run one Tesseract recognition pass over encoded image bytes.

    Doxygen:
    - @param image_data: Encoded image bytes.
    - @param options: Try-hard flag and locale for the engine.
    - @return: OcrResult for the image.
    """
    rgb = decode_image_bytes(image_data)
    data = pytesseract.image_to_data(
        rgb,
        lang=tesseract_language(options.language),
        config=tesseract_config(options.try_hard),
        output_type=pytesseract.Output.DICT,
    )
    return result_from_tesseract(data)
