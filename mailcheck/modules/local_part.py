"""Проверка локальной части адреса: dot-atom и quoted-string."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple, Union

MAX_LOCAL_PART_LENGTH = 64

_ATOM_RE = re.compile(r"[a-zA-Z0-9!#$%&'*+\-/=?^_`{|}~]+")
_MUST_ESCAPE = ('"', "\\")
_TAB = 9


@dataclass(frozen=True)
class DotAtom:
    """Локальная часть без кавычек, разбитая на атомы по точкам."""

    atoms: Tuple[str, ...]


@dataclass(frozen=True)
class QuotedString:
    """Локальная часть в двойных кавычках (content без внешних кавычек)."""

    content: str


LocalPartForm = Union[DotAtom, QuotedString]


def classify_local_part(local_part: str) -> LocalPartForm:
    """Выбирает форму по первому символу: кавычка означает quoted-string."""
    if local_part.startswith('"'):
        return QuotedString(content=local_part[1:-1] if len(local_part) >= 2 else "")
    return DotAtom(atoms=tuple(local_part.split(".")))


def validate_atom(atom: str) -> bool:
    if not atom:
        return False
    return _ATOM_RE.fullmatch(atom) is not None


def validate_dot_atom(local_part: str) -> bool:
    """Проверяет dot-atom: ни одного пустого атома и только разрешённые символы."""
    if not local_part:
        return False
    return all(validate_atom(atom) for atom in local_part.split("."))


def _has_valid_quotes(local_part: str) -> bool:
    return len(local_part) >= 2 and local_part[0] == '"' and local_part[-1] == '"'


def validate_quoted_content(content: str) -> bool:
    """Проверяет содержимое между кавычками.

    После обратного слэша допустимы только `"` и `\\`. Неэкранированная
    кавычка, висящий слэш в конце и непечатные символы (кроме табуляции)
    делают строку недопустимой.
    """
    escape_expected = False
    for char in content:
        if escape_expected:
            if char not in _MUST_ESCAPE:
                return False
            escape_expected = False
            continue

        if char == "\\":
            escape_expected = True
            continue

        code = ord(char)
        if (code < 32 or code > 126) and code != _TAB:
            return False

        if char == '"':
            return False

    return not escape_expected


def validate_quoted_string(local_part: str) -> bool:
    """Проверяет локальную часть в кавычках; `""` считается допустимой."""
    if not _has_valid_quotes(local_part):
        return False
    return validate_quoted_content(local_part[1:-1])


def validate_local_part(local_part: str) -> bool:
    """Длина не больше 64 символов, затем проверка по выбранной форме."""
    if not local_part or len(local_part) > MAX_LOCAL_PART_LENGTH:
        return False

    form = classify_local_part(local_part)
    if isinstance(form, QuotedString):
        return validate_quoted_string(local_part)
    return all(validate_atom(atom) for atom in form.atoms)
