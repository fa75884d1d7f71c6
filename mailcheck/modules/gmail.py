"""Канонизация адресов Gmail: «плюс-трюк» и точки в имени."""

from __future__ import annotations

import re
from typing import Union

from mailcheck.modules.address import EmailAddress

GMAIL_DOMAINS = frozenset({"gmail.com", "googlemail.com"})

_PLUS_RE = re.compile(r"^(.+?)(\+.+?)(@.+)$", re.DOTALL)

AddressLike = Union[str, EmailAddress]


def _as_address(value: AddressLike) -> EmailAddress:
    if isinstance(value, EmailAddress):
        return value
    return EmailAddress.parse(value)


def is_gmail(value: AddressLike) -> bool:
    email = _as_address(value)
    return email.domain is not None and email.domain.lower() in GMAIL_DOMAINS


def has_plus_suffix(value: AddressLike) -> bool:
    """Gmail-адрес, в локальной части которого есть `+`."""
    email = _as_address(value)
    return is_gmail(email) and "+" in email.username


def strip_plus_suffix(value: AddressLike) -> str:
    """Убирает часть `+метка` перед @; прочие адреса возвращает без изменений."""
    email = _as_address(value)
    if not is_gmail(email):
        return email.address
    return _PLUS_RE.sub(r"\1\3", email.address)


def sanitize(value: AddressLike) -> str:
    """Адрес Gmail без `+метки` и без точек в локальной части."""
    email = _as_address(value)
    if not is_gmail(email):
        return email.address

    stripped = EmailAddress.parse(strip_plus_suffix(email))
    return f"{stripped.username.replace('.', '')}@{stripped.domain}"
