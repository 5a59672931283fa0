import asyncio
import io

import numpy as np
import pytest
from PIL import Image

from textsnap.ocr.model import OcrElement
from textsnap.ocr.reader import (
    build_dataframe_from_tesseract,
    decode_image_bytes,
    group_words_to_lines,
    result_from_tesseract,
    tesseract_config,
    tesseract_language,
)


def _tesseract_data():
    # two lines in block 1, one line in block 2; level-1..4 rows carry conf -1
    return {
        'level': [1, 5, 5, 5, 5, 5, 5],
        'page_num': [1, 1, 1, 1, 1, 1, 1],
        'block_num': [0, 1, 1, 1, 1, 2, 2],
        'par_num': [0, 1, 1, 1, 1, 1, 1],
        'line_num': [0, 1, 1, 2, 2, 1, 1],
        'word_num': [0, 1, 2, 1, 2, 1, 2],
        'left': [0, 10, 60, 10, 70, 12, 90],
        'top': [0, 10, 11, 40, 40, 80, 82],
        'width': [200, 40, 40, 50, 30, 60, 20],
        'height': [100, 12, 12, 12, 12, 12, 12],
        'conf': ['-1', '91', '88', '75', '80', '64', '0'],
        'text': ['', 'Total', '42', 'Price', 'EUR', 'Thanks', ' '],
    }


def test_build_dataframe_from_tesseract_filters_empty_and_low_conf():
    data = {
        'level': [5, 5, 5],
        'page_num': [1, 1, 1],
        'block_num': [1, 1, 1],
        'par_num': [1, 1, 1],
        'line_num': [1, 1, 1],
        'word_num': [1, 2, 3],
        'left': [10, 30, 50],
        'top': [10, 10, 10],
        'width': [10, 10, 10],
        'height': [10, 10, 10],
        'conf': ['0', '85', '95'],
        'text': [' ', 'Hello', ''],
    }
    df = build_dataframe_from_tesseract(data)
    # Only one valid row should remain ('Hello')
    assert len(df) == 1
    assert df.iloc[0]['text'] == 'Hello'


def test_build_dataframe_from_tesseract_empty_input():
    df = build_dataframe_from_tesseract({'text': [], 'conf': []})
    assert df.empty


def test_group_words_to_lines_keeps_recognizer_order():
    df = build_dataframe_from_tesseract(_tesseract_data())
    assert group_words_to_lines(df) == ['Total 42', 'Price EUR', 'Thanks']


def test_result_from_tesseract_builds_lines_elements_and_full_text():
    result = result_from_tesseract(_tesseract_data())
    assert result.lines == ('Total 42', 'Price EUR', 'Thanks')
    assert result.full_text == 'Total 42\nPrice EUR\nThanks'
    assert result.elements[0] == OcrElement('Total', 10, 10)
    assert [el.text for el in result.elements] == ['Total', '42', 'Price', 'EUR', 'Thanks']
    assert all(isinstance(el.y, int) for el in result.elements)


def test_result_from_tesseract_nothing_recognized():
    data = _tesseract_data()
    data['conf'] = ['-1'] * len(data['conf'])
    result = result_from_tesseract(data)
    assert result.full_text == ''
    assert result.lines == ()
    assert result.elements == ()


@pytest.mark.parametrize('tag, expected', [
    ('en-US', 'eng'),
    ('en', 'eng'),
    ('de_DE', 'deu'),
    ('zh-TW', 'chi_tra'),
    ('rus+eng', 'rus+eng'),
    ('', 'eng'),
])
def test_tesseract_language(tag, expected):
    assert tesseract_language(tag) == expected


def test_tesseract_config_try_hard_selects_segmentation():
    assert tesseract_config(True) == '--psm 3'
    assert tesseract_config(False) == '--psm 6'


def test_decode_image_bytes_returns_rgb_array():
    buf = io.BytesIO()
    Image.new('L', (30, 20), color=128).save(buf, format='PNG')
    arr = decode_image_bytes(buf.getvalue())
    assert arr.shape == (20, 30, 3)
    assert arr.dtype == np.uint8


def test_decode_image_bytes_rejects_garbage():
    with pytest.raises(ValueError):
        decode_image_bytes(b'definitely not an image')


def test_group_words_to_lines_without_layout_columns():
    df = build_dataframe_from_tesseract({
        'left': [40, 10],
        'top': [5, 5],
        'conf': ['90', '80'],
        'text': ['world', 'hello'],
    })
    assert group_words_to_lines(df) == ['world hello']


def _patch_tesseract(monkeypatch, version):
    import pytesseract

    from textsnap.ocr import recognizer as recognizer_module

    calls = []

    def _version():
        calls.append(1)
        if isinstance(version, BaseException):
            raise version
        return version

    monkeypatch.setattr(recognizer_module, 'configure_dependencies', lambda: None)
    monkeypatch.setattr(pytesseract, 'get_tesseract_version', _version)
    return calls


def test_tesseract_recognizer_missing_binary_raises_recognition_failure(monkeypatch):
    import pytesseract

    from textsnap.errors import RecognitionFailure
    from textsnap.ocr.recognizer import TesseractRecognizer

    _patch_tesseract(monkeypatch, pytesseract.TesseractNotFoundError())
    with pytest.raises(RecognitionFailure):
        asyncio.run(TesseractRecognizer().init())


def test_tesseract_recognizer_checks_binary_once(monkeypatch):
    from textsnap.ocr.recognizer import TesseractRecognizer

    calls = _patch_tesseract(monkeypatch, '5.3.0')
    recognizer = TesseractRecognizer()

    async def scenario():
        await recognizer.init()
        await recognizer.init()

    asyncio.run(scenario())
    assert len(calls) == 1


def test_tesseract_recognizer_passes_options_through(monkeypatch):
    from textsnap.ocr import recognizer as recognizer_module
    from textsnap.ocr.model import OcrOptions, OcrResult

    seen = []
    expected = OcrResult(full_text='ok', lines=['ok'])

    def _recognize(image_data, options):
        seen.append((image_data, options))
        return expected

    monkeypatch.setattr(recognizer_module, 'recognize_image_bytes', _recognize)
    options = OcrOptions(try_hard=False, language='de-DE')
    result = asyncio.run(recognizer_module.TesseractRecognizer().recognize(b'img', options))
    assert result is expected
    assert seen == [(b'img', options)]
