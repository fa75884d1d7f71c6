"""Разбор e-mail адреса: комментарии, локальная часть и домен."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def extract_comments(raw: str) -> Tuple[str, List[str]]:
    """Удаляет комментарии верхнего уровня и возвращает их тексты по порядку.

    Вложенные скобки остаются частью текста внешнего комментария.
    Экранированные символы копируются вместе с обратным слэшем и не
    влияют на глубину вложенности. Незакрытый комментарий отбрасывается.
    """
    result: List[str] = []
    current: List[str] = []
    comments: List[str] = []
    depth = 0
    escaped = False

    for char in raw:
        buffer = current if depth else result

        if escaped:
            buffer.append(char)
            escaped = False
            continue

        if char == "\\":
            buffer.append(char)
            escaped = True
            continue

        if char == "(":
            if depth:
                current.append(char)
            depth += 1
            continue

        if char == ")" and depth:
            depth -= 1
            if depth:
                current.append(char)
            else:
                comments.append("".join(current))
                current = []
            continue

        buffer.append(char)

    return "".join(result), comments


def split_address(cleaned: str) -> Tuple[Optional[str], Optional[str]]:
    """Делит адрес по последнему символу @ (в кавычках @ допустим)."""
    local_part, sep, domain = cleaned.rpartition("@")
    if not sep:
        return None, None
    return local_part, domain


@dataclass(frozen=True)
class EmailAddress:
    """Разобранный адрес: исходная строка, локальная часть, домен, комментарии."""

    address: str
    local_part: Optional[str]
    domain: Optional[str]
    comments: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str) -> "EmailAddress":
        """Строит объект из сырой строки, не выбрасывая исключений."""
        cleaned, comments = extract_comments(raw)
        local_part, domain = split_address(cleaned)
        return cls(
            address=raw,
            local_part=local_part,
            domain=domain,
            comments=tuple(comments),
        )

    @property
    def username(self) -> str:
        return self.local_part or ""

    @property
    def is_split(self) -> bool:
        """Удалось ли выделить и локальную часть, и домен."""
        return self.local_part is not None and self.domain is not None

    def __str__(self) -> str:
        return self.address
