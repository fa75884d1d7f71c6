"""Грубая предварительная проверка формата e-mail."""

from __future__ import annotations

import re

MAX_ADDRESS_LENGTH = 320

EMAIL_REGEX = re.compile(
    r"(?:[A-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r'|"(?:[^"\\]|\\["\\])*")@'
    r"(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?"
    r"(?:\.[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?)+"
    r"|\[(?:IPv6:[0-9A-F:]+|[0-9.]+)\])",
    re.IGNORECASE,
)
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def is_basic_valid(value: str) -> bool:
    """Проверяет, что строка вообще похожа на адрес вида local@domain.

    Комментарии в скобках этот фильтр не пропускает: ими занимается
    полноценный разбор RFC 5322.
    """
    if not value or len(value) > MAX_ADDRESS_LENGTH:
        return False
    if _CONTROL_RE.search(value):
        return False
    return EMAIL_REGEX.fullmatch(value) is not None
