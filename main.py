"""
Entry point and compatibility facade for the Photo → OCR → Text pipeline.

This module exposes a stable API and a CLI standing in for the app's page.

Packages:
- textsnap.ocr: Tesseract recognition, result model, row grouping
- textsnap.patterns: Output modes (patterns) and their labels
- textsnap.media: Photo sources, bounded reads, file/camera picker
- textsnap.pipeline: Formatting and the acquisition → recognition flow
"""

from __future__ import annotations

import asyncio
import logging
import sys

from textsnap.config import SETTINGS_PATH, configure_dependencies, load_settings
from textsnap.media import DesktopMediaPicker, read_image_bytes
from textsnap.ocr import (
    OcrElement,
    OcrOptions,
    OcrResult,
    TesseractRecognizer,
    cluster_elements_by_y,
    group_elements_by_y,
    recognize_image_bytes,
)
from textsnap.patterns import PATTERNS, Pattern
from textsnap.pipeline import ImageToTextService, OutcomeStatus, PipelineOutcome, format_result
from textsnap.session import OcrSession

__all__ = [
    # config
    "configure_dependencies",
    "load_settings",
    # model
    "OcrElement",
    "OcrOptions",
    "OcrResult",
    # modes
    "PATTERNS",
    "Pattern",
    # ocr helpers
    "cluster_elements_by_y",
    "group_elements_by_y",
    "recognize_image_bytes",
    # acquisition
    "DesktopMediaPicker",
    "read_image_bytes",
    "TesseractRecognizer",
    # pipeline
    "format_result",
    "ImageToTextService",
    "OcrSession",
    "OutcomeStatus",
    "PipelineOutcome",
]

_OUTCOME_MESSAGES = {
    OutcomeStatus.CANCELLED: "No image selected.",
    OutcomeStatus.CAPTURE_UNSUPPORTED: "Sorry, image capture is not supported on this device.",
    OutcomeStatus.READ_TIMEOUT: "Reading the image timed out.",
    OutcomeStatus.ACQUISITION_FAILED: "Could not read the image.",
    OutcomeStatus.RECOGNITION_FAILED: "Text recognition failed.",
    OutcomeStatus.BUSY: "Another recognition is still running.",
}


def _cli() -> None:
    """CLI for photo-to-text recognition.

    --image / -i: Path to a photo to recognize (file pick)
    --camera: Capture one frame from a camera (optional device index)
    --pattern / -p: Output mode by index, name or label (default from settings)
    --no-try-hard: Faster, less thorough recognition
    --lang: Locale passed to the recognizer (default from settings, en-US)
    --timeout: Image read timeout in seconds (<=0 means no timeout)
    --settings: Path to settings.json
    --list-patterns: Print available output modes and exit
    --verbose / -v: Debug logging
    """
    import argparse

    parser = argparse.ArgumentParser(description="Recognize text on a photo and print it in the selected output mode.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--image", "-i", type=str, help="Path to input photo")
    source.add_argument("--camera", nargs="?", type=int, const=-1, default=None, metavar="INDEX",
                        help="Capture a frame from a camera (default index from settings)")
    parser.add_argument("--pattern", "-p", type=str, default=None, help="Output mode: index, name or label (see --list-patterns)")
    parser.add_argument("--no-try-hard", action="store_true", help="Use the faster recognition setting")
    parser.add_argument("--lang", type=str, default=None, help="Recognition locale, e.g. en-US (default from settings)")
    parser.add_argument("--timeout", type=float, default=None, help="Image read timeout in seconds (<=0 for no timeout)")
    parser.add_argument("--settings", type=str, default=SETTINGS_PATH, help="Path to settings.json")
    parser.add_argument("--list-patterns", action="store_true", help="List output modes and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.settings)
        registry = PATTERNS.with_overrides(settings.pattern_overrides)
    except ValueError as e:
        print(str(e))
        raise SystemExit(2)

    if args.list_patterns:
        for index, pattern, label in registry.options():
            print(f"{index}: {label} ({pattern.value})")
        return

    try:
        pattern = registry.resolve(args.pattern if args.pattern is not None else settings.default_pattern)
    except (KeyError, IndexError):
        print(f"Unknown pattern: {args.pattern or settings.default_pattern}. Use --list-patterns to see the options.")
        raise SystemExit(2)

    if not args.image and args.camera is None:
        print("Please provide either --image path or --camera to recognize a photo.")
        print("Examples:\n  python main.py --image path/to/photo.jpg --pattern ContainsDigits\n  python main.py --camera 0 --pattern 5")
        raise SystemExit(2)

    if args.timeout is None:
        timeout_value = settings.read_timeout
    else:
        timeout_value = None if args.timeout <= 0 else args.timeout
    camera_index = None
    if args.camera is not None:
        camera_index = settings.camera_index if args.camera < 0 else args.camera

    service = ImageToTextService(
        recognizer=TesseractRecognizer(),
        media_picker=DesktopMediaPicker(image_path=args.image, camera_index=camera_index),
        registry=registry,
        read_timeout=timeout_value,
        language=args.lang or settings.language,
        cluster_threshold=settings.cluster_threshold,
    )
    try_hard = settings.try_hard and not args.no_try_hard
    if camera_index is not None:
        outcome = asyncio.run(service.open_from_camera(pattern, try_hard=try_hard))
    else:
        outcome = asyncio.run(service.open_from_file(pattern, try_hard=try_hard))

    if not outcome.ok:
        print(_OUTCOME_MESSAGES[outcome.status])
        raise SystemExit(1)
    sys.stdout.write(outcome.text)
    if outcome.text and not outcome.text.endswith("\n"):
        sys.stdout.write("\n")


if __name__ == "__main__":
    _cli()
