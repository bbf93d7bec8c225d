import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import hanyu_pinyin
sys.path.insert(0, str(Path(__file__).parent.parent))

from hanyu_pinyin import LookupTableSet

HANZI_TO_SYLLABLE = {
    "你": "ni3",
    "好": "hao3",
    "中": "zhong1",
    "国": "guo2",
    "吗": "ma5",
    "女": "nv3",
}

SYLLABLE_TO_MARKED = {
    "zhong1": "zhōng",
    "hao3": "hǎo",
    "guo2": "guó",
    "pin1": "pīn",
    "yin1": "yīn",
    "ni3": "nǐ",
    "ma5": "ma",
    "nv3": "nǚ",
}

SYLLABLE_TO_PLAIN = {
    "zhong1": "zhong",
    "hao3": "hao",
    "guo2": "guo",
    "pin1": "pin",
    "yin1": "yin",
    "ni3": "ni",
    "ma5": "ma",
    "nv3": "nü",
}


def make_tables() -> LookupTableSet:
    """Small hand-written table set; no syllable key is a substring of another."""
    return LookupTableSet.from_mappings(
        hanzi_to_syllable=HANZI_TO_SYLLABLE,
        syllable_to_marked=SYLLABLE_TO_MARKED,
        syllable_token={key: key for key in SYLLABLE_TO_MARKED},
        syllable_to_plain=SYLLABLE_TO_PLAIN,
    )


def make_overlapping_tables() -> LookupTableSet:
    """Tables where a two-glyph key contains a single-glyph key with a different reading."""
    marked = {"zhang3": "zhǎng", "cheng2": "chéng", "chang2": "cháng"}
    return LookupTableSet.from_mappings(
        hanzi_to_syllable={"长": "zhang3", "城": "cheng2", "长城": "chang2cheng2"},
        syllable_to_marked=marked,
        syllable_token={key: key for key in marked},
        syllable_to_plain={"zhang3": "zhang", "cheng2": "cheng", "chang2": "chang"},
    )


@pytest.fixture
def tables() -> LookupTableSet:
    return make_tables()


@pytest.fixture
def overlapping_tables() -> LookupTableSet:
    return make_overlapping_tables()
