"""
Golden Master Test Suite for the conversion pipeline

Pins the exact rendered output, trailing whitespace included, for the small hand-written
tables in conftest.py. Any change to pass order, spacing or whitespace reduction shows up here.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import hanyu_pinyin
sys.path.insert(0, str(Path(__file__).parent.parent))

from hanyu_pinyin import ConversionPipeline, ToneMode

NUMBERED, MARKED, PLAIN = ToneMode.NUMBERED, ToneMode.MARKED, ToneMode.PLAIN

# (input, mode, expected output)
CONVERSION_TEST_CASES = [
    # Single glyphs
    ("你", NUMBERED, "ni3 "),
    ("你", MARKED, "nǐ "),
    ("你", PLAIN, "ni "),
    ("吗", MARKED, "ma "),  # neutral tone carries no mark
    ("吗", NUMBERED, "ma5 "),
    ("女", MARKED, "nǚ "),
    ("女", PLAIN, "nü "),
    # Glyph sequences
    ("你好", NUMBERED, "ni3 hao3 "),
    ("你好", MARKED, "nǐ hǎo "),
    ("你好", PLAIN, "ni hao "),
    ("中国", NUMBERED, "zhong1 guo2 "),
    ("中国", MARKED, "zhōng guó "),
    ("中国", PLAIN, "zhong guo "),
    ("你好吗?", MARKED, "nǐ hǎo ma ?"),
    # Numbered pinyin input
    ("pin1yin1", NUMBERED, "pin1 yin1 "),
    ("pin1yin1", MARKED, "pīn yīn "),
    ("pin1yin1", PLAIN, "pin yin "),
    ("中国pin1yin1", MARKED, "zhōng guó pīn yīn "),
    # Unmapped text
    ("", NUMBERED, ""),
    ("", MARKED, ""),
    ("abc", PLAIN, "abc"),
    ("我爱你", MARKED, "我爱nǐ "),
    ("1955年", MARKED, "1955年"),
]

# Same inputs with the unconditional re-marking atomization pass
LEGACY_TEST_CASES = [
    ("你", NUMBERED, "nǐ "),
    ("你好", NUMBERED, "nǐ hǎo "),
    ("pin1yin1", NUMBERED, "pīn yīn "),
    ("你好", PLAIN, "ni hao "),
    ("你好", MARKED, "nǐ hǎo "),
]


@pytest.fixture
def pipeline(tables):
    return ConversionPipeline(tables)


def test_conversions_with_expected_results(pipeline):
    """Test every conversion against its exact expected output."""
    passed = 0
    failed = 0

    for text, mode, expected in CONVERSION_TEST_CASES:
        result = pipeline.convert(text, mode)
        if result == expected:
            passed += 1
        else:
            failed += 1
            print(f"FAILED: '{text}' ({mode.name}): expected {expected!r}, got {result!r}")

    assert failed == 0, f"Conversion tests: {failed} failures out of {len(CONVERSION_TEST_CASES)} tests"
    print(f"Conversion tests: {passed} passed, {failed} failed")


def test_legacy_atomize_with_expected_results(tables):
    pipeline = ConversionPipeline(tables, legacy_atomize=True)
    for text, mode, expected in LEGACY_TEST_CASES:
        result = pipeline.convert(text, mode)
        assert result == expected, f"Failed for '{text}' ({mode.name}): expected {expected!r}, got {result!r}"


def test_repeated_conversion_is_stable(pipeline):
    """No state carries over from one conversion to the next."""
    first = [pipeline.convert(text, mode) for text, mode, _ in CONVERSION_TEST_CASES]
    second = [pipeline.convert(text, mode) for text, mode, _ in reversed(CONVERSION_TEST_CASES)]
    assert first == list(reversed(second))
