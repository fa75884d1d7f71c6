"""Итоговая проверка адреса по грамматике RFC 5322."""

from __future__ import annotations

from typing import Union

from mailcheck.modules.address import EmailAddress
from mailcheck.modules.domain import validate_domain
from mailcheck.modules.local_part import validate_local_part


def is_rfc5322_valid(email: Union[str, EmailAddress]) -> bool:
    """Адрес корректен, если удалось разделить его и обе части прошли проверку.

    Комментарии уже удалены при разборе и на результат не влияют.
    """
    if isinstance(email, str):
        email = EmailAddress.parse(email)

    if email.local_part is None or email.domain is None:
        return False

    return validate_local_part(email.local_part) and validate_domain(email.domain)
