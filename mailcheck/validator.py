"""Цепочка проверок e-mail адреса с кодами ошибок."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from mailcheck.config import Policy, get_settings
from mailcheck.modules import gmail
from mailcheck.modules.address import EmailAddress
from mailcheck.modules.basic import is_basic_valid
from mailcheck.modules.mx_check import MXChecker
from mailcheck.modules.provider_lists import (
    DISPOSABLE_PROVIDERS,
    FREE_PROVIDERS,
    BannedDomainChecker,
    DomainListFetcher,
    ProviderListChecker,
)
from mailcheck.modules.rfc5322 import is_rfc5322_valid

LOGGER = logging.getLogger("mailcheck.validator")

Rule = Callable[[EmailAddress], bool]


class ErrorCode(IntEnum):
    NO_ERROR = 0
    FAIL_BASIC = 1
    FAIL_MX_RECORD = 2
    FAIL_BANNED_DOMAIN = 3
    FAIL_DISPOSABLE_DOMAIN = 4
    FAIL_FREE_PROVIDER = 5
    FAIL_CUSTOM = 6
    FAIL_RFC5322 = 7


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.NO_ERROR: "",
    ErrorCode.FAIL_BASIC: "Invalid format",
    ErrorCode.FAIL_RFC5322: "Does not comply with RFC 5322",
    ErrorCode.FAIL_MX_RECORD: "Domain does not accept email",
    ErrorCode.FAIL_BANNED_DOMAIN: "Domain is banned",
    ErrorCode.FAIL_DISPOSABLE_DOMAIN: "Domain is used by disposable email providers",
    ErrorCode.FAIL_FREE_PROVIDER: "Domain is used by free email providers",
    ErrorCode.FAIL_CUSTOM: "Failed custom validation",
}


@dataclass(frozen=True)
class ValidationResult:
    """Итог одной проверки."""

    address: EmailAddress
    code: ErrorCode

    @property
    def valid(self) -> bool:
        return self.code is ErrorCode.NO_ERROR

    @property
    def reason(self) -> str:
        return ERROR_MESSAGES[self.code]

    def as_dict(self) -> Dict[str, object]:
        return {
            "address": self.address.address,
            "valid": self.valid,
            "code": int(self.code),
            "reason": self.reason,
            "local_part": self.address.local_part,
            "domain": self.address.domain,
            "comments": list(self.address.comments),
        }


class EmailValidator:
    """Проверяет адрес по правилам политики в фиксированном порядке.

    Порядок: базовый формат, RFC 5322, MX, запрещённые домены, одноразовые
    сервисы, бесплатные сервисы, затем пользовательские правила. Первая же
    неудача останавливает цепочку и определяет код ошибки.
    """

    def __init__(
        self,
        policy: Optional[Policy] = None,
        *,
        mx_checker: Optional[MXChecker] = None,
        fetcher: Optional[DomainListFetcher] = None,
    ) -> None:
        self.policy = policy or get_settings()
        fetcher = fetcher or DomainListFetcher(timeout=self.policy.list_fetch_timeout_seconds)

        self._mx = mx_checker or MXChecker(self.policy.mx_settings)
        self._banned = BannedDomainChecker(
            self.policy.banned_list,
            enabled=self.policy.check_banned,
        )
        self._disposable = ProviderListChecker(
            DISPOSABLE_PROVIDERS,
            local_list=self.policy.disposable_list,
            local_only=self.policy.disposable_local_only,
            enabled=self.policy.check_disposable,
            fetcher=fetcher,
        )
        self._free = ProviderListChecker(
            FREE_PROVIDERS,
            local_list=self.policy.free_list,
            local_only=self.policy.free_local_only,
            enabled=self.policy.check_free,
            fetcher=fetcher,
        )
        self._custom_rules: List[Rule] = []
        self._code = ErrorCode.NO_ERROR
        self._email: Optional[EmailAddress] = None

    def register_rule(self, rule: Rule) -> None:
        """Добавляет пользовательское правило в конец цепочки."""
        if not callable(rule):
            raise TypeError(f"Rule must be callable, got {type(rule).__name__}")
        self._custom_rules.append(rule)

    def validate(self, address: str) -> bool:
        return self.check(address).valid

    def check(self, address: str) -> ValidationResult:
        """Прогоняет адрес через цепочку и возвращает результат."""
        email = EmailAddress.parse(address)
        self._email = email

        # код ошибки всегда перезаписывается, прошлый результат не наследуется
        self._code = self._run_chain(email)
        if self._code is not ErrorCode.NO_ERROR:
            LOGGER.debug("Адрес %r отклонён: %s", address, ERROR_MESSAGES[self._code])
        return ValidationResult(address=email, code=self._code)

    def _run_chain(self, email: EmailAddress) -> ErrorCode:
        if not is_basic_valid(email.address):
            return ErrorCode.FAIL_BASIC
        if not is_rfc5322_valid(email):
            return ErrorCode.FAIL_RFC5322
        if not self._mx.has_mx(email.domain):
            return ErrorCode.FAIL_MX_RECORD
        if not self._banned.is_allowed(email.domain):
            return ErrorCode.FAIL_BANNED_DOMAIN
        if not self._disposable.is_allowed(email.domain):
            return ErrorCode.FAIL_DISPOSABLE_DOMAIN
        if not self._free.is_allowed(email.domain):
            return ErrorCode.FAIL_FREE_PROVIDER
        for rule in self._custom_rules:
            if not rule(email):
                return ErrorCode.FAIL_CUSTOM
        return ErrorCode.NO_ERROR

    @property
    def error_code(self) -> ErrorCode:
        return self._code

    @property
    def error_reason(self) -> str:
        return ERROR_MESSAGES[self._code]

    @property
    def email_address(self) -> Optional[EmailAddress]:
        """Последний проверенный адрес."""
        return self._email

    @property
    def disposable_domains(self) -> List[str]:
        return self._disposable.domains

    @property
    def free_domains(self) -> List[str]:
        return self._free.domains

    def is_gmail_with_plus(self) -> bool:
        return self._email is not None and gmail.has_plus_suffix(self._email)

    def gmail_address_without_plus(self) -> str:
        if self._email is None:
            return ""
        return gmail.strip_plus_suffix(self._email)

    def sanitized_gmail_address(self) -> str:
        if self._email is None:
            return ""
        return gmail.sanitize(self._email)
