"""
Hanyu Pinyin Conversion Module

This module converts Chinese-character text (and numbered pinyin text) into Hanyu Pinyin,
rendered with tone numbers, tone marks, or no tones at all.

## Overview

The core functionality is provided by the `ConversionPipeline` class, which applies four
lookup tables to the raw text as whole-string literal substitutions:

1. **Hanzi Pass**: Every glyph key of the hanzi table is replaced by its numbered syllable
2. **Tone-Mode Pass**: Numbered syllables are marked, stripped, or just spaced out
3. **Atomization Pass**: Syllable tokens are separated from each other by whitespace
4. **Normalization**: Redundant whitespace produced by the passes is reduced

Every replacement appends a single trailing space, which is what separates syllables.
Substitution is literal (not regex, not token based) and follows the iteration order of each
table, so results for overlapping keys depend on that order.

## Architecture

- **LookupTable / LookupTableSet**: Read-only tables handed to the pipeline once
- **PinyinTableCacheService**: Builds the tables from pypinyin data and caches them on disk
- **TableLoader**: Loads tables from JSON resources or the cache, fails fast on any error
- **ConversionPipeline**: Pure conversion, no state retained between calls
- **HanyuPinyin**: Stateful facade keeping the current input, mode and rendered output

## Usage Examples

```python
from hanyu_pinyin import HanyuPinyin, ToneMode, to_pinyin

to_pinyin("你好").split()
# Returns: ["ni3", "hao3"]

to_pinyin("张先生")
# Returns: "zhang1  xian1  ..." (suffix syllables can leave double spaces)

to_pinyin("你好", ToneMode.MARKED)
# Returns: "nǐ hǎo "

converter = HanyuPinyin("拼音", ToneMode.PLAIN)
str(converter)
# Returns: "pin yin "

converter.set_mode(2).render()
# Returns: "pīn yīn "

converter.set_mode(7)
# Raises: InvalidModeValue
```

## Tables

Tables are read either from a directory of JSON resources (`IdxHanyuPinyin.json`,
`IdxToneMarks.json`, `IdxToneNumbers.json`, `IdxToneRemoval.json`), or built from the
single-character dictionary bundled with pypinyin and pickled under `~/.cache/hanyu_pinyin`.

## Error Handling

- `InvalidModeValue`: a tone mode outside 1-3 was supplied
- `TableLoadFailure`: one of the four tables could not be obtained; no conversion runs

Characters without a table entry are passed through unchanged and never raise.

## Thread Safety

Tables are immutable after loading, and `convert` works on a local string only, so a single
table set can be shared between threads. The `HanyuPinyin` facade holds mutable state and
should not be shared. `to_pinyin` only uses the global converter's pipeline, so it is safe to
call from several threads.
"""

from __future__ import annotations
import json
import pickle
import logging
import time
from collections.abc import Mapping
from enum import IntEnum
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass, replace

import pypinyin
from pypinyin.contrib.tone_convert import to_normal, to_tone, to_tone3
from hanyu_pinyin.hanyu_pinyin_data import (
    TABLE_RESOURCES,
    TABLE_NAMES,
    TONE_DIGITS,
    SYLLABLE_SUPPLEMENTS,
)


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS
# ════════════════════════════════════════════════════════════════════════════════


class HanyuPinyinError(Exception):
    """Base class for all errors raised by this module."""


class InvalidModeValue(HanyuPinyinError, ValueError):
    """Raised when a tone mode value is not one of the three valid encodings."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"invalid tone mode: {value!r} (expected 1, 2 or 3)")


class TableLoadFailure(HanyuPinyinError, RuntimeError):
    """Raised when a lookup table cannot be obtained."""

    def __init__(self, table_name: str, reason: str):
        self.table_name = table_name
        self.reason = reason
        super().__init__(f"failed to load table '{table_name}': {reason}")


# ════════════════════════════════════════════════════════════════════════════════
# TONE MODE
# ════════════════════════════════════════════════════════════════════════════════


class ToneMode(IntEnum):
    """Tone display mode with a stable integer encoding."""

    NUMBERED = 1
    MARKED = 2
    PLAIN = 3

    @classmethod
    def from_value(cls, value: Union["ToneMode", int]) -> "ToneMode":
        """Convert an integer (or mode) to a ToneMode, raising InvalidModeValue otherwise."""
        if isinstance(value, cls):
            return value
        # bool is an int subclass but never a meaningful mode
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidModeValue(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeValue(value) from None


# ════════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class CacheInfo:
    """Immutable cache information structure."""

    cache_built: bool
    cache_size: int
    pickle_file_exists: bool
    pickle_file_size: Optional[int] = None
    pickle_file_mtime: Optional[float] = None


@dataclass(frozen=True)
class LoadResult:
    """Result of a table load - either a full table set or the reason it failed."""

    success: bool
    tables: Optional["LookupTableSet"]
    error_message: Optional[str] = None
    failed_table: Optional[str] = None

    @classmethod
    def success_with_tables(cls, tables: "LookupTableSet") -> "LoadResult":
        return cls(success=True, tables=tables)

    @classmethod
    def failure(cls, failed_table: str, error_message: str) -> "LoadResult":
        return cls(success=False, tables=None, error_message=error_message, failed_table=failed_table)

    def unwrap(self) -> "LookupTableSet":
        """Return the tables or raise the load failure."""
        if self.success and self.tables is not None:
            return self.tables
        raise TableLoadFailure(self.failed_table or "unknown", self.error_message or "no tables loaded")


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class HanyuPinyinConfig:
    """Immutable configuration for table loading and conversion."""

    # Persistent cache for tables built from pypinyin data
    cache_dir: Path
    cache_filename: str

    # Directory of JSON table resources; takes precedence over the cache when set
    table_dir: Optional[Path]

    # Builder options
    include_phrases: bool
    neutral_tone_digit: int

    # Conversion options
    legacy_atomize: bool
    longest_key_first: bool

    @classmethod
    def create_default(cls) -> "HanyuPinyinConfig":
        """Factory method for the default configuration."""
        return cls(
            cache_dir=Path.home() / ".cache" / "hanyu_pinyin",
            cache_filename="pinyin_tables.pkl",
            table_dir=None,
            include_phrases=False,
            neutral_tone_digit=5,
            legacy_atomize=False,
            longest_key_first=False,
        )

    @property
    def cache_file(self) -> Path:
        """Pickle file for the current builder options."""
        if self.include_phrases:
            filename = Path(self.cache_filename)
            return self.cache_dir / f"{filename.stem}_phrases{filename.suffix}"
        return self.cache_dir / self.cache_filename

    def with_cache_dir(self, new_cache_dir: Path) -> "HanyuPinyinConfig":
        return replace(self, cache_dir=new_cache_dir)

    def with_table_dir(self, new_table_dir: Optional[Path]) -> "HanyuPinyinConfig":
        return replace(self, table_dir=new_table_dir)

    def with_legacy_atomize(self, legacy_atomize: bool = True) -> "HanyuPinyinConfig":
        return replace(self, legacy_atomize=legacy_atomize)

    def with_longest_key_first(self, longest_key_first: bool = True) -> "HanyuPinyinConfig":
        return replace(self, longest_key_first=longest_key_first)

    def with_phrases(self, include_phrases: bool = True) -> "HanyuPinyinConfig":
        return replace(self, include_phrases=include_phrases)


# ════════════════════════════════════════════════════════════════════════════════
# LOOKUP TABLES
# ════════════════════════════════════════════════════════════════════════════════


class LookupTable(Mapping):
    """
    Read-only, insertion-ordered string → string table.
    Iteration yields keys in the order the loader supplied them.
    """

    __slots__ = ("name", "_entries")

    def __init__(self, name: str, entries: Union[Mapping, Iterable[Tuple[str, str]]]):
        self.name = name
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LookupTable({self.name!r}, {len(self._entries)} entries)"

    def has_key(self, key: str) -> bool:
        return key in self._entries

    def value_for(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def sorted_longest_first(self) -> "LookupTable":
        """Copy of this table ordered by descending key length (stable for equal lengths)."""
        return LookupTable(self.name, sorted(self._entries.items(), key=lambda item: -len(item[0])))


@dataclass(frozen=True)
class LookupTableSet:
    """The four tables the conversion pipeline reads."""

    hanzi_to_syllable: LookupTable
    syllable_to_marked: LookupTable
    syllable_token: LookupTable
    syllable_to_plain: LookupTable

    @classmethod
    def from_mappings(
        cls,
        hanzi_to_syllable: Mapping,
        syllable_to_marked: Mapping,
        syllable_token: Mapping,
        syllable_to_plain: Mapping,
    ) -> "LookupTableSet":
        return cls(
            hanzi_to_syllable=LookupTable("hanzi_to_syllable", hanzi_to_syllable),
            syllable_to_marked=LookupTable("syllable_to_marked", syllable_to_marked),
            syllable_token=LookupTable("syllable_token", syllable_token),
            syllable_to_plain=LookupTable("syllable_to_plain", syllable_to_plain),
        )

    def table(self, name: str) -> LookupTable:
        return getattr(self, name)

    def tables(self) -> Iterator[LookupTable]:
        for name in TABLE_NAMES:
            yield self.table(name)

    def sorted_longest_first(self) -> "LookupTableSet":
        return LookupTableSet(*(table.sorted_longest_first() for table in self.tables()))

    def find_unresolved_syllables(self) -> List[Tuple[str, str]]:
        """Hanzi entries whose syllable is missing from any of the syllable tables."""
        unresolved = []
        for hanzi, syllable in self.hanzi_to_syllable.items():
            if not (
                syllable in self.syllable_to_marked
                and syllable in self.syllable_token
                and syllable in self.syllable_to_plain
            ):
                unresolved.append((hanzi, syllable))
        return unresolved

    def to_dicts(self) -> Dict[str, Dict[str, str]]:
        return {table.name: table.to_dict() for table in self.tables()}

    @classmethod
    def from_dicts(cls, data: Mapping) -> "LookupTableSet":
        return cls.from_mappings(*(data[name] for name in TABLE_NAMES))


# ════════════════════════════════════════════════════════════════════════════════
# NORMALIZER
# ════════════════════════════════════════════════════════════════════════════════


class Normalizer:
    """Reduces the whitespace runs left behind by the substitution passes."""

    def normalize(self, text: str) -> str:
        # Two fixed steps, not a fixed-point loop: runs of 5 or 7+ spaces leave more than one.
        return text.replace("   ", " ").replace("  ", " ")


# ════════════════════════════════════════════════════════════════════════════════
# CONVERSION PIPELINE
# ════════════════════════════════════════════════════════════════════════════════


def _substitute(text: str, table: LookupTable, render: Callable[[str, str], str]) -> str:
    """Replace every occurrence of every key, in table order, with render(key, value) + ' '."""
    for key, value in table.items():
        if key in text:
            text = text.replace(key, render(key, value) + " ")
    return text


def _value(key: str, value: str) -> str:
    return value


def _key(key: str, value: str) -> str:
    return key


class ConversionPipeline:
    """Four-pass conversion of raw text against a fixed table set."""

    def __init__(self, tables: LookupTableSet, normalizer: Optional[Normalizer] = None, legacy_atomize: bool = False):
        self._tables = tables
        self._normalizer = normalizer or Normalizer()
        self._legacy_atomize = legacy_atomize

    @property
    def tables(self) -> LookupTableSet:
        return self._tables

    def convert(self, text: str, mode: ToneMode = ToneMode.NUMBERED) -> str:
        """
        Pure function: raw text → rendered pinyin.
        Unmapped characters pass through unchanged; nothing is retained between calls.
        """
        output = self._hanzi_pass(text)
        output = self._tone_mode_pass(output, mode)
        output = self._atomize_pass(output, mode)
        return self._normalizer.normalize(output)

    def _hanzi_pass(self, text: str) -> str:
        return _substitute(text, self._tables.hanzi_to_syllable, _value)

    def _tone_mode_pass(self, text: str, mode: ToneMode) -> str:
        if mode == ToneMode.MARKED:
            return _substitute(text, self._tables.syllable_to_marked, _value)
        if mode == ToneMode.PLAIN:
            return _substitute(text, self._tables.syllable_to_plain, _value)
        # NUMBERED: rewrite each syllable as itself, only adding the trailing space
        return _substitute(text, self._tables.syllable_token, _key)

    def _atomize_pass(self, text: str, mode: ToneMode) -> str:
        # Legacy behaviour re-marks whatever numbered syllables remain, in every mode
        if mode == ToneMode.MARKED or self._legacy_atomize:
            return _substitute(text, self._tables.syllable_to_marked, _value)
        return _substitute(text, self._tables.syllable_to_marked, _key)


def convert(text: str, mode: ToneMode, tables: LookupTableSet, legacy_atomize: bool = False) -> str:
    """Convert text with the given tables; see ConversionPipeline.convert."""
    return ConversionPipeline(tables, legacy_atomize=legacy_atomize).convert(text, mode)


# ════════════════════════════════════════════════════════════════════════════════
# CACHE MANAGEMENT SERVICE
# ════════════════════════════════════════════════════════════════════════════════


class PinyinTableCacheService:
    """Builds the four tables from pypinyin data and keeps them in a pickle cache."""

    def __init__(self, config: HanyuPinyinConfig):
        self._config = config
        self._tables: Optional[LookupTableSet] = None

    @property
    def is_built(self) -> bool:
        return self._tables is not None

    @property
    def cache_size(self) -> int:
        return len(self._tables.hanzi_to_syllable) if self._tables is not None else 0

    @property
    def tables(self) -> Optional[LookupTableSet]:
        return self._tables

    def get_cache_info(self) -> CacheInfo:
        """Get immutable cache information."""
        cache_file = self._config.cache_file
        info_dict = {
            "cache_built": self.is_built,
            "cache_size": self.cache_size,
            "pickle_file_exists": cache_file.exists(),
        }

        if cache_file.exists():
            try:
                stat = cache_file.stat()
                info_dict["pickle_file_size"] = stat.st_size
                info_dict["pickle_file_mtime"] = stat.st_mtime
            except OSError:
                pass

        return CacheInfo(**info_dict)

    def clear_cache(self) -> None:
        """Clear in-memory tables and delete the pickle file."""
        self._tables = None

        cache_file = self._config.cache_file
        if cache_file.exists():
            try:
                cache_file.unlink()
                logging.info("Pinyin table cache cleared")
            except OSError as e:
                logging.warning(f"Could not delete cache file {cache_file}: {e}")

    def build_cache(self, force_rebuild: bool = False) -> bool:
        """Build or load tables. Returns True if successful."""
        if self._tables is not None and not force_rebuild:
            return True

        cache_file = self._config.cache_file

        if cache_file.exists() and not force_rebuild:
            if self._load_from_pickle(cache_file):
                return True

        return self._build_from_scratch(cache_file)

    def _load_from_pickle(self, cache_file: Path) -> bool:
        try:
            start_time = time.perf_counter()
            with cache_file.open("rb") as f:
                data = pickle.load(f)
            self._tables = LookupTableSet.from_dicts(data)
            load_time = time.perf_counter() - start_time
            logging.info(f"Loaded pinyin tables for {self.cache_size} hanzi keys in {load_time:.3f}s")
            return True
        except (pickle.PickleError, OSError, EOFError, KeyError, TypeError, ValueError, AttributeError) as e:
            logging.warning(f"Failed to load pinyin table cache: {e}. Rebuilding...")
            return False

    def _build_from_scratch(self, cache_file: Path) -> bool:
        try:
            start_time = time.perf_counter()
            self._tables = build_tables(
                include_phrases=self._config.include_phrases,
                neutral_tone_digit=self._config.neutral_tone_digit,
            )
            build_time = time.perf_counter() - start_time

            self._save_to_pickle(cache_file)

            logging.info(f"Built pinyin tables for {self.cache_size} hanzi keys in {build_time:.3f}s")
            return True

        except Exception as e:
            logging.error(f"Failed to build pinyin tables: {e}")
            self._tables = None
            return False

    def _save_to_pickle(self, cache_file: Path) -> None:
        if self._tables is None:
            return
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            with cache_file.open("wb") as f:
                pickle.dump(self._tables.to_dicts(), f, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PickleError, OSError) as e:
            logging.warning(f"Failed to save pinyin table cache: {e}")


# ════════════════════════════════════════════════════════════════════════════════
# TABLE BUILDER (pypinyin data)
# ════════════════════════════════════════════════════════════════════════════════


# pypinyin raises these on readings outside its phonetic tables
_CONVERSION_ERRORS = (AttributeError, IndexError, KeyError, ValueError, TypeError)


def _numbered(reading: str, neutral_tone_digit: int) -> Optional[str]:
    """Marked pypinyin reading → numbered syllable, or None if it cannot be numbered."""
    try:
        numbered = to_tone3(reading, neutral_tone_with_five=True)
    except _CONVERSION_ERRORS:
        return None
    if not numbered or not numbered[-1].isdigit():
        return None
    if numbered.endswith("5") and neutral_tone_digit != 5:
        numbered = numbered[:-1] + str(neutral_tone_digit)
    return numbered


def _base_syllable(numbered: str) -> str:
    return numbered.rstrip("0123456789")


def _plain_syllable(numbered: str, base: str) -> str:
    try:
        return to_normal(numbered, v_to_u=True).rstrip("0123456789")
    except _CONVERSION_ERRORS:
        return base


def _build_hanzi_entries(include_phrases: bool, neutral_tone_digit: int) -> Dict[str, str]:
    from pypinyin.pinyin_dict import pinyin_dict

    entries: Dict[str, str] = {}
    failed = []

    if include_phrases:
        from pypinyin.phrases_dict import phrases_dict

        for phrase, readings in phrases_dict.items():
            syllables = [_numbered(options[0], neutral_tone_digit) for options in readings if options]
            if len(syllables) != len(phrase) or None in syllables:
                failed.append(phrase)
                continue
            entries[phrase] = "".join(syllables)

    for code_point, readings in pinyin_dict.items():
        hanzi = chr(code_point)
        syllable = _numbered(readings.split(",")[0], neutral_tone_digit)
        if syllable is None:
            failed.append(hanzi)
            continue
        entries[hanzi] = syllable

    if failed:
        logging.warning(f"Skipped {len(failed)} dictionary entries without a numbered reading")

    # Longest glyph sequences first so phrases win over their single characters
    return dict(sorted(entries.items(), key=lambda item: -len(item[0])))


def _split_syllables(value: str) -> List[str]:
    """Split a run of numbered syllables such as 'zhong1guo2' on its tone digits."""
    syllables = []
    current = ""
    for char in value:
        current += char
        if char.isdigit():
            syllables.append(current)
            current = ""
    return syllables


def build_tables(include_phrases: bool = False, neutral_tone_digit: int = 5) -> LookupTableSet:
    """
    Build the four tables from the dictionaries bundled with pypinyin.

    Every base syllable found in the hanzi table (plus the static supplements) is expanded
    to all tone digits; combinations pypinyin cannot mark are left out.
    """
    hanzi_to_syllable = _build_hanzi_entries(include_phrases, neutral_tone_digit)

    bases = dict(SYLLABLE_SUPPLEMENTS)
    for value in hanzi_to_syllable.values():
        for syllable in _split_syllables(value):
            base = _base_syllable(syllable)
            if base and base not in bases:
                bases[base] = _plain_syllable(syllable, base)

    marked: Dict[str, str] = {}
    plain: Dict[str, str] = {}
    for base, plain_base in bases.items():
        for digit in TONE_DIGITS:
            tone = neutral_tone_digit if digit == 5 else digit
            numbered = f"{base}{tone}"
            try:
                rendered = to_tone(f"{base}{digit}")
            except _CONVERSION_ERRORS:
                continue
            if any(char.isdigit() for char in rendered):
                continue
            marked[numbered] = rendered
            plain[numbered] = plain_base

    # Longest syllables first: "nian2" must be replaced before "n2"
    order = sorted(marked, key=lambda key: (-len(key), key))
    return LookupTableSet.from_mappings(
        hanzi_to_syllable=hanzi_to_syllable,
        syllable_to_marked={key: marked[key] for key in order},
        syllable_token={key: key for key in order},
        syllable_to_plain={key: plain[key] for key in order},
    )


# ════════════════════════════════════════════════════════════════════════════════
# TABLE LOADER
# ════════════════════════════════════════════════════════════════════════════════


class TableLoader:
    """Obtains a complete LookupTableSet, or reports which table could not be loaded."""

    def __init__(self, config: HanyuPinyinConfig, cache_service: Optional[PinyinTableCacheService] = None):
        self._config = config
        self._cache_service = cache_service or PinyinTableCacheService(config)

    @property
    def cache_service(self) -> PinyinTableCacheService:
        return self._cache_service

    def load(self) -> LookupTableSet:
        """Load all four tables or raise TableLoadFailure."""
        return self.try_load().unwrap()

    def try_load(self) -> LoadResult:
        try:
            if self._config.table_dir is not None:
                tables = self._load_from_directory(Path(self._config.table_dir))
            else:
                tables = self._load_from_cache()
        except TableLoadFailure as e:
            logging.error(str(e))
            return LoadResult.failure(e.table_name, e.reason)

        if self._config.longest_key_first:
            tables = tables.sorted_longest_first()

        unresolved = tables.find_unresolved_syllables()
        if unresolved:
            logging.warning(f"{len(unresolved)} hanzi entries map to syllables missing from the syllable tables")

        return LoadResult.success_with_tables(tables)

    def _load_from_cache(self) -> LookupTableSet:
        try:
            built = self._cache_service.build_cache()
        except Exception as e:
            raise TableLoadFailure("hanzi_to_syllable", f"pinyin table cache unusable: {e}") from e
        if not built or self._cache_service.tables is None:
            raise TableLoadFailure("hanzi_to_syllable", "could not build tables from pypinyin data")
        return self._cache_service.tables

    def _load_from_directory(self, directory: Path) -> LookupTableSet:
        return LookupTableSet(*(self._read_table(directory, name) for name in TABLE_NAMES))

    def _read_table(self, directory: Path, name: str) -> LookupTable:
        path = directory / TABLE_RESOURCES[name]
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise TableLoadFailure(name, f"resource not found: {path}") from None
        except (OSError, UnicodeDecodeError) as e:
            raise TableLoadFailure(name, f"cannot read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise TableLoadFailure(name, f"invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise TableLoadFailure(name, f"{path} must contain a JSON object")
        for key, value in data.items():
            if not isinstance(value, str):
                raise TableLoadFailure(name, f"non-string value for key {key!r} in {path}")
        if not data:
            raise TableLoadFailure(name, f"{path} is empty")

        return LookupTable(name, data)


def export_tables(tables: LookupTableSet, directory: Path) -> List[Path]:
    """Write the four tables as JSON resources that TableLoader can read back."""
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for table in tables.tables():
        path = directory / TABLE_RESOURCES[table.name]
        with path.open("w", encoding="utf-8") as f:
            json.dump(table.to_dict(), f, ensure_ascii=False, indent=1)
        written.append(path)
    return written


# ════════════════════════════════════════════════════════════════════════════════
# STATEFUL CONVERTER
# ════════════════════════════════════════════════════════════════════════════════


class HanyuPinyin:
    """Keeps an input string and tone mode, and the output rendered from them."""

    def __init__(
        self,
        text: str = "",
        mode: Union[ToneMode, int] = ToneMode.NUMBERED,
        tables: Optional[LookupTableSet] = None,
        config: Optional[HanyuPinyinConfig] = None,
    ):
        self._config = config or HanyuPinyinConfig.create_default()
        self._loader = TableLoader(self._config)
        if tables is None:
            tables = self._loader.load()
        elif self._config.longest_key_first:
            tables = tables.sorted_longest_first()
        self._pipeline = ConversionPipeline(tables, legacy_atomize=self._config.legacy_atomize)
        self._mode = ToneMode.from_value(mode)
        self._input = ""
        self._output = ""
        self.set_input(text)

    def __str__(self) -> str:
        return self._output

    def __repr__(self) -> str:
        return f"HanyuPinyin({self._input!r}, {self._mode.name})"

    @property
    def tables(self) -> LookupTableSet:
        return self._pipeline.tables

    @property
    def pipeline(self) -> ConversionPipeline:
        return self._pipeline

    def set_input(self, text: str) -> "HanyuPinyin":
        self._input = text
        self._output = self._pipeline.convert(text, self._mode)
        return self

    def get_input(self) -> str:
        return self._input

    def set_mode(self, mode: Union[ToneMode, int]) -> "HanyuPinyin":
        self._mode = ToneMode.from_value(mode)
        return self.set_input(self._input)

    def get_mode(self) -> ToneMode:
        return self._mode

    def render(self) -> str:
        return self._output

    def get_cache_info(self) -> CacheInfo:
        return self._loader.cache_service.get_cache_info()

    def clear_pinyin_cache(self) -> None:
        self._loader.cache_service.clear_cache()


# ════════════════════════════════════════════════════════════════════════════════
# PERFORMANCE CHECK
# ════════════════════════════════════════════════════════════════════════════════


def run_performance_test() -> None:
    """Time conversions of a short paragraph in every tone mode."""
    start = time.perf_counter()
    converter = HanyuPinyin()
    print(f"Tables ready in {time.perf_counter() - start:.3f}s")

    sample = "汉语拼音是中华人民共和国的汉字拉丁化方案，于1955年至1957年文字改革时被原中国文字改革委员会汉语拼音方案委员会研究制定。"
    rounds = 50

    for mode in ToneMode:
        converter.set_mode(mode)
        start = time.perf_counter()
        for _ in range(rounds):
            converter.set_input(sample)
        elapsed = time.perf_counter() - start
        print(f"{mode.name:<8} {elapsed / rounds * 1000:.2f} ms/conversion  {converter.render()[:60]}...")


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

_global_converter: Optional[HanyuPinyin] = None


def _get_global_converter() -> HanyuPinyin:
    """Get or create the global converter instance."""
    global _global_converter
    if _global_converter is None:
        _global_converter = HanyuPinyin()
    return _global_converter


def to_pinyin(text: str, mode: Union[ToneMode, int] = ToneMode.NUMBERED) -> str:
    """
    Module-level convenience function for conversion with the default tables.

    Args:
        text: Chinese characters and/or numbered pinyin
        mode: ToneMode or its integer encoding

    Returns:
        The rendered pinyin string
    """
    # The shared converter's own input and mode are left untouched
    return _get_global_converter().pipeline.convert(text, ToneMode.from_value(mode))


def clear_cache() -> None:
    """Clear the global pinyin table cache."""
    _get_global_converter().clear_pinyin_cache()


def get_cache_info() -> Dict[str, Union[bool, int, float, None]]:
    """Get cache information as a dictionary."""
    cache_info = _get_global_converter().get_cache_info()
    return {
        "cache_built": cache_info.cache_built,
        "cache_size": cache_info.cache_size,
        "pickle_file_exists": cache_info.pickle_file_exists,
        "pickle_file_size": cache_info.pickle_file_size,
        "pickle_file_mtime": cache_info.pickle_file_mtime,
    }


# CLI entry point
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("pypinyin", pypinyin.__version__)
    run_performance_test()
