from hanyu_pinyin.hanyu_pinyin import (
    CacheInfo,
    ConversionPipeline,
    HanyuPinyin,
    HanyuPinyinConfig,
    HanyuPinyinError,
    InvalidModeValue,
    LoadResult,
    LookupTable,
    LookupTableSet,
    Normalizer,
    PinyinTableCacheService,
    TableLoader,
    TableLoadFailure,
    ToneMode,
    build_tables,
    clear_cache,
    convert,
    export_tables,
    get_cache_info,
    to_pinyin,
)

__version__ = "0.1.0"
