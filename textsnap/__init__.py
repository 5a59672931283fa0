"""Photo-to-text: recognize a photo with Tesseract and render it in a chosen mode.

Packages:
- textsnap.ocr: result model, Tesseract recognizer, row grouping
- textsnap.patterns: output modes and their rules
- textsnap.media: photo sources and the media picker port
- textsnap.pipeline: formatter and the acquisition → recognition flow
- textsnap.session: page state (selected mode, try-hard, result text) over the pipeline
"""

__version__ = "0.1.0"
