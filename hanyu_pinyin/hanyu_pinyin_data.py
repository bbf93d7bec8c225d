# ═════════════════════════════════════════════════════════════════════════════════
# STATIC TABLE DATA
# ═════════════════════════════════════════════════════════════════════════════════
#
# Names and static supplements for the four lookup tables:
# 1. TABLE_RESOURCES: JSON resource file for each table
# 2. SYLLABLE_SUPPLEMENTS: base syllables that the single-character dictionary
#    never produces but that appear in numbered pinyin input
# 3. TONE_DIGITS: tone numbers every base syllable is expanded to
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# Table name → JSON resource file
TABLE_RESOURCES = {
    "hanzi_to_syllable": "IdxHanyuPinyin.json",
    "syllable_to_marked": "IdxToneMarks.json",
    "syllable_token": "IdxToneNumbers.json",
    "syllable_to_plain": "IdxToneRemoval.json",
}

# Order in which tables are loaded and reported
TABLE_NAMES = tuple(TABLE_RESOURCES)

# Tone digits used for syllable expansion (5 = neutral tone)
TONE_DIGITS = (1, 2, 3, 4, 5)

# Erhua and interjection syllables missing from the first-reading dictionary
ERHUA_SUPPLEMENTS = {
    "r": "r",  # 儿化 suffix written after a syllable: hua4r5
}

INTERJECTION_SUPPLEMENTS = {
    "ei": "ei",  # 欸 - listed with ê readings only
    "yo": "yo",  # 哟 - neutral reading
    "lo": "lo",  # 咯 - neutral reading
}

SYLLABLE_SUPPLEMENTS = {}
SYLLABLE_SUPPLEMENTS.update(INTERJECTION_SUPPLEMENTS)
SYLLABLE_SUPPLEMENTS.update(ERHUA_SUPPLEMENTS)


def _assert_no_duplicate_keys(*layers):
    """Validate that no key appears in more than one supplement layer."""
    seen = set()
    for layer_name, layer in layers:
        duplicates = seen.intersection(layer.keys())
        if duplicates:
            raise ValueError(f"Duplicate syllable supplements found in {layer_name}: {duplicates}")
        seen.update(layer.keys())


def _assert_resource_names_unique(resources):
    """Validate that no two tables share a resource file."""
    files = list(resources.values())
    if len(files) != len(set(files)):
        raise ValueError(f"Table resources must be distinct files: {files}")


_assert_no_duplicate_keys(
    ("ERHUA_SUPPLEMENTS", ERHUA_SUPPLEMENTS),
    ("INTERJECTION_SUPPLEMENTS", INTERJECTION_SUPPLEMENTS),
)
_assert_resource_names_unique(TABLE_RESOURCES)

TABLE_RESOURCES = MappingProxyType(TABLE_RESOURCES)
SYLLABLE_SUPPLEMENTS = MappingProxyType(SYLLABLE_SUPPLEMENTS)
