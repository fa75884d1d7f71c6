#!/usr/bin/env python3
"""Выгрузка списков одноразовых и бесплатных доменов для MAILCHECK_*_LIST."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional

from mailcheck.modules.provider_lists import (
    DISPOSABLE_PROVIDERS,
    FREE_PROVIDERS,
    DomainListFetcher,
)


def collect(timeout: float) -> Dict[str, List[str]]:
    fetcher = DomainListFetcher(timeout=timeout)
    return {
        "disposable": fetcher.collect(DISPOSABLE_PROVIDERS),
        "free": fetcher.collect(FREE_PROVIDERS),
    }


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Сохраняет списки доменов провайдеров в JSON.")
    parser.add_argument("--output", type=Path, help="Файл для записи (по умолчанию stdout)")
    parser.add_argument("--timeout", type=float, default=10.0, help="Таймаут HTTP-запроса в секундах")
    args = parser.parse_args(argv)

    lists = collect(args.timeout)
    payload = json.dumps(lists, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        print(f"# disposable: {len(lists['disposable'])}, free: {len(lists['free'])} -> {args.output}")
    else:
        print(payload)


if __name__ == "__main__":
    main()
