"""Проверка доменной части адреса: имя домена и литерал IPv4/IPv6."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

MAX_DOMAIN_LENGTH = 255
MAX_LABEL_LENGTH = 63
IDN_PREFIX = "xn--"
IPV6_TAG = "ipv6:"
IPV6_GROUPS = 8
IPV4_OCTETS = 4

_ALNUM_RE = re.compile(r"[A-Za-z0-9]")
_LABEL_RE = re.compile(r"[A-Za-z0-9-]+")
_HEX_GROUP_RE = re.compile(r"[0-9A-Fa-f]{1,4}")
_DIGITS_RE = re.compile(r"[0-9]+")
_LITERAL_FORBIDDEN_RE = re.compile(r"[\s\x00-\x1f\x7f]")


@dataclass(frozen=True)
class DomainName:
    """DNS-имя, разбитое на метки."""

    labels: Tuple[str, ...]


@dataclass(frozen=True)
class DomainLiteral:
    """IP-адрес в квадратных скобках (content без скобок)."""

    content: str

    @property
    def is_ipv6(self) -> bool:
        return self.content[:len(IPV6_TAG)].lower() == IPV6_TAG


DomainForm = Union[DomainName, DomainLiteral]


def classify_domain(domain: str) -> DomainForm:
    """Выбирает форму по первому символу: `[` означает литерал."""
    if domain.startswith("["):
        return DomainLiteral(content=domain[1:-1] if len(domain) >= 2 else "")
    return DomainName(labels=tuple(domain.split(".")))


def _is_alnum(char: str) -> bool:
    return _ALNUM_RE.fullmatch(char) is not None


def validate_idn_label(label: str) -> bool:
    """Метка punycode: после `xn--` хотя бы один символ из [A-Za-z0-9-]."""
    rest = label[len(IDN_PREFIX):]
    return bool(rest) and _LABEL_RE.fullmatch(rest) is not None


def validate_label(label: str) -> bool:
    if not label or len(label) > MAX_LABEL_LENGTH:
        return False

    if label.startswith(IDN_PREFIX):
        return validate_idn_label(label)

    if len(label) == 1:
        return _is_alnum(label)

    if not (_is_alnum(label[0]) and _is_alnum(label[-1])):
        return False

    if _LABEL_RE.fullmatch(label) is None:
        return False

    return "--" not in label


def validate_domain_name(domain: str) -> bool:
    """Проверяет DNS-имя: минимум две метки, каждая корректна."""
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False

    labels = domain.split(".")
    if len(labels) < 2:
        return False
    return all(validate_label(label) for label in labels)


def parse_ipv4_octets(value: str) -> Optional[List[str]]:
    """Возвращает октеты с убранными ведущими нулями или None."""
    parts = value.split(".")
    if len(parts) != IPV4_OCTETS:
        return None

    octets: List[str] = []
    for part in parts:
        if _DIGITS_RE.fullmatch(part) is None:
            return None
        normalized = part.lstrip("0") or "0"
        if len(normalized) > 3 or int(normalized) > 255:
            return None
        octets.append(normalized)
    return octets


def validate_ipv4_literal(content: str) -> bool:
    octets = parse_ipv4_octets(content)
    if octets is None:
        return False

    try:
        ipaddress.IPv4Address(".".join(octets))
    except ValueError:
        return False
    return True


def parse_ipv6_groups(value: str) -> Optional[List[str]]:
    """Разворачивает сокращение `::` и возвращает ровно 8 групп или None."""
    if "::" in value:
        if value.count("::") > 1:
            return None

        left, right = value.split("::", 1)
        left_groups = left.split(":") if left else []
        right_groups = right.split(":") if right else []

        explicit = len(left_groups) + len(right_groups)
        if explicit >= IPV6_GROUPS:
            return None

        return left_groups + ["0"] * (IPV6_GROUPS - explicit) + right_groups

    groups = value.split(":")
    if len(groups) != IPV6_GROUPS:
        return None
    return groups


def validate_ipv6_literal(content: str) -> bool:
    """Проверяет содержимое вида `IPv6:<адрес>` (префикс без учёта регистра)."""
    if content[:len(IPV6_TAG)].lower() != IPV6_TAG:
        return False

    groups = parse_ipv6_groups(content[len(IPV6_TAG):])
    if groups is None:
        return False

    if not all(_HEX_GROUP_RE.fullmatch(group) for group in groups):
        return False

    expanded = ":".join(group.rjust(4, "0") for group in groups)
    try:
        ipaddress.IPv6Address(expanded)
    except ValueError:
        return False
    return True


def validate_domain_literal(domain: str) -> bool:
    """Проверяет литерал в квадратных скобках.

    Пробелы и управляющие символы внутри скобок запрещены для обоих видов
    адресов. Содержимое с префиксом `IPv6:` разбирается как IPv6, всё
    остальное как IPv4.
    """
    if len(domain) < 2 or domain[0] != "[" or domain[-1] != "]":
        return False

    content = domain[1:-1]
    if not content:
        return False

    if _LITERAL_FORBIDDEN_RE.search(content):
        return False

    literal = DomainLiteral(content=content)
    if literal.is_ipv6:
        return validate_ipv6_literal(content)
    return validate_ipv4_literal(content)


def validate_domain(domain: str) -> bool:
    """Общая длина не больше 255 символов, затем проверка по форме."""
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False

    form = classify_domain(domain)
    if isinstance(form, DomainLiteral):
        return validate_domain_literal(domain)
    return len(form.labels) >= 2 and all(validate_label(label) for label in form.labels)
