#!/usr/bin/env python3
"""
Проверка GST по фото чека (Bill Analysis).

Использование:
    python scripts/analyze_bill.py bill.jpg --state "Tamil Nadu"

    # Многостраничный чек, результат в файл
    python scripts/analyze_bill.py page1.jpg page2.jpg --state Kerala --output result.json
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
from contracts.jurisdiction import IndianState
from gstcheck.application import BillCheckComponentFactory
from gstcheck.domain import BillCheckError, RawImage


def load_images(paths: list) -> list:
    """Читает изображения чека. Ошибка чтения завершает скрипт."""
    images = []
    for raw_path in paths:
        image_path = Path(raw_path)
        if not image_path.exists():
            print(f"[ERROR] Файл не найден: {image_path}", file=sys.stderr)
            sys.exit(1)
        try:
            images.append(RawImage.from_path(image_path))
        except ValueError as e:
            print(f"[ERROR] {e}", file=sys.stderr)
            sys.exit(1)
    return images


def main():
    """Главная функция проверки чека."""
    parser = argparse.ArgumentParser(description="GST Bill Check - Bill Analysis")
    parser.add_argument("images", nargs="+", help="Пути к страницам чека")
    parser.add_argument(
        "--state",
        required=True,
        help=f"Штат/UT покупателя (одно из: {', '.join(IndianState.names())})"
    )
    parser.add_argument("--output", help="Файл для сохранения JSON (опционально)")
    args = parser.parse_args()

    try:
        validate_config()
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    images = load_images(args.images)
    pipeline = BillCheckComponentFactory.create_default_pipeline()

    try:
        result = pipeline.analyze(
            images,
            args.state,
            on_progress=lambda label: logger.info(f"[Progress] {label}")
        )
    except BillCheckError as e:
        logger.debug(f"[AnalyzeBill] {e}")
        print(f"[ERROR] {e.user_message}", file=sys.stderr)
        sys.exit(1)

    payload = json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
        logger.info(f"[AnalyzeBill] Результат сохранен: {output_path}")
    else:
        print(payload)


if __name__ == "__main__":
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=LOG_LEVEL
    )

    main()
