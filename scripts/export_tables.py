"""
Build the four pinyin tables from pypinyin data and write them as JSON resources.

The output directory can then be used with HanyuPinyinConfig.with_table_dir().
"""

import argparse
import logging
from pathlib import Path

from hanyu_pinyin import HanyuPinyinConfig, TableLoader, export_tables

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export hanyu-pinyin lookup tables as JSON.")
    parser.add_argument("output_dir", type=str, help="Directory to write the JSON table resources to.")
    parser.add_argument("--phrases", action="store_true", help="Include multi-character phrase entries.")
    parser.add_argument("--rebuild", action="store_true", help="Ignore the pickle cache and rebuild the tables.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    config = HanyuPinyinConfig.create_default().with_phrases(args.phrases)
    loader = TableLoader(config)
    if args.rebuild:
        loader.cache_service.build_cache(force_rebuild=True)
    tables = loader.load()

    for path in export_tables(tables, Path(args.output_dir)):
        print(f"Wrote {path}")
