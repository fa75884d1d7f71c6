"""Командная строка для проверки e-mail адресов."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional, Sequence

from mailcheck.config import Policy, get_settings
from mailcheck.validator import EmailValidator, ValidationResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Проверка e-mail адресов по RFC 5322 и политике")
    parser.add_argument("addresses", nargs="+", help="Адреса для проверки")
    parser.add_argument(
        "--no-mx",
        action="store_true",
        help="Не проверять MX-записи домена",
    )
    parser.add_argument(
        "--check-banned",
        action="store_true",
        help="Отклонять домены из списка запрещённых",
    )
    parser.add_argument(
        "--banned",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Шаблон запрещённого домена (можно указывать несколько раз)",
    )
    parser.add_argument(
        "--check-disposable",
        action="store_true",
        help="Отклонять одноразовые почтовые сервисы",
    )
    parser.add_argument(
        "--check-free",
        action="store_true",
        help="Отклонять бесплатные почтовые сервисы",
    )
    parser.add_argument(
        "--local-only",
        action="store_true",
        help="Не загружать удалённые списки доменов",
    )
    parser.add_argument("--json", action="store_true", help="Вывести результат в JSON")
    parser.add_argument("--verbose", action="store_true", help="Подробное логирование")
    return parser


def policy_from_args(args: argparse.Namespace, base: Optional[Policy] = None) -> Policy:
    """Накладывает флаги командной строки поверх политики из окружения."""
    policy = base or get_settings()
    return replace(
        policy,
        check_mx_records=policy.check_mx_records and not args.no_mx,
        check_banned=policy.check_banned or args.check_banned or bool(args.banned),
        banned_list=tuple(policy.banned_list) + tuple(args.banned),
        check_disposable=policy.check_disposable or args.check_disposable,
        check_free=policy.check_free or args.check_free,
        disposable_local_only=policy.disposable_local_only or args.local_only,
        free_local_only=policy.free_local_only or args.local_only,
    )


def render(results: List[ValidationResult], as_json: bool) -> str:
    if as_json:
        return json.dumps([result.as_dict() for result in results], ensure_ascii=False, indent=2)
    lines = []
    for result in results:
        verdict = "valid" if result.valid else result.reason
        lines.append(f"{result.address.address}: {verdict}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Проверяет переданные адреса; код возврата 0, если все корректны."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )

    validator = EmailValidator(policy_from_args(args))
    results = [validator.check(address) for address in args.addresses]
    print(render(results, args.json))
    return 0 if all(result.valid for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
