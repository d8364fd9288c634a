#!/usr/bin/env python3
"""
Поиск HSN/SAC кода и ставок GST по названию товара.

Использование:
    python scripts/lookup_hsn.py "basmati rice"
"""

import sys
import argparse
import json
from pathlib import Path

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import validate_config, LOG_LEVEL
from gstcheck.application import BillCheckComponentFactory
from gstcheck.domain import BillCheckError


def main():
    """Главная функция поиска HSN."""
    parser = argparse.ArgumentParser(description="GST Bill Check - HSN/SAC lookup")
    parser.add_argument("item", help="Название товара или услуги")
    args = parser.parse_args()

    try:
        validate_config()
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    lookup = BillCheckComponentFactory.create_hsn_lookup()

    try:
        result = lookup.lookup(args.item)
    except BillCheckError as e:
        logger.debug(f"[LookupHsn] {e}")
        print(f"[ERROR] {e.user_message}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL)

    main()
