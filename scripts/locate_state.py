#!/usr/bin/env python3
"""
Определение штата Индии по координатам.

Использование:
    python scripts/locate_state.py 13.0827 80.2707

Ответ модели печатается как есть. Если он не из списка IndianState,
скрипт предупреждает и завершается с кодом 2.
"""

import sys
import argparse
from pathlib import Path

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import validate_config, LOG_LEVEL
from contracts.jurisdiction import IndianState
from gstcheck.application import BillCheckComponentFactory
from gstcheck.domain import BillCheckError


def main():
    """Главная функция определения штата."""
    parser = argparse.ArgumentParser(description="GST Bill Check - state from coordinates")
    parser.add_argument("latitude", type=float, help="Широта")
    parser.add_argument("longitude", type=float, help="Долгота")
    args = parser.parse_args()

    try:
        validate_config()
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    resolver = BillCheckComponentFactory.create_geolocation_resolver()

    try:
        state_name = resolver.resolve(args.latitude, args.longitude)
    except BillCheckError as e:
        logger.debug(f"[LocateState] {e}")
        print(f"[ERROR] {e.user_message}", file=sys.stderr)
        sys.exit(1)

    print(state_name)

    if IndianState.from_name(state_name) is None:
        print(f"[WARNING] Ответ не из списка штатов: {state_name}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL)

    main()
