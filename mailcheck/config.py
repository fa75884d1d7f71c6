"""Загрузка политики проверки адресов из переменных окружения."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from functools import lru_cache
from typing import Any, List, Mapping, Sequence, Tuple


@dataclass(frozen=True)
class MXSettings:
    """Параметры проверки MX-записей."""

    enabled: bool = True
    cache_ttl_hours: int = 24
    dns_timeout_seconds: float = 1.5
    dns_resolvers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Policy:
    """Набор правил, по которым EmailValidator проверяет адрес."""

    check_mx_records: bool = True
    check_banned: bool = False
    check_disposable: bool = False
    check_free: bool = False
    disposable_local_only: bool = False
    free_local_only: bool = False
    banned_list: Tuple[str, ...] = ()
    disposable_list: Tuple[str, ...] = ()
    free_list: Tuple[str, ...] = ()
    list_fetch_timeout_seconds: float = 10.0
    mx: MXSettings = field(default_factory=MXSettings)

    @property
    def mx_settings(self) -> MXSettings:
        """MX-настройки с учётом общего флага check_mx_records."""
        if self.mx.enabled == self.check_mx_records:
            return self.mx
        return MXSettings(
            enabled=self.check_mx_records,
            cache_ttl_hours=self.mx.cache_ttl_hours,
            dns_timeout_seconds=self.mx.dns_timeout_seconds,
            dns_resolvers=self.mx.dns_resolvers,
        )

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "Policy":
        """Строит политику из словаря с ключами в snake_case.

        Списки приводятся к кортежам, вложенный словарь `mx` превращается в
        MXSettings. Неизвестные ключи считаются ошибкой конфигурации.
        """
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(f"Unknown policy keys: {', '.join(unknown)}")

        values = dict(config)
        for key in ("banned_list", "disposable_list", "free_list"):
            if key in values:
                values[key] = tuple(values[key] or ())

        mx = values.get("mx")
        if isinstance(mx, Mapping):
            mx_known = {item.name for item in fields(MXSettings)}
            mx_unknown = sorted(set(mx) - mx_known)
            if mx_unknown:
                raise ValueError(f"Unknown mx keys: {', '.join(mx_unknown)}")
            mx_values = dict(mx)
            if "dns_resolvers" in mx_values:
                mx_values["dns_resolvers"] = tuple(mx_values["dns_resolvers"] or ())
            values["mx"] = MXSettings(**mx_values)

        return cls(**values)


def _env(key: str, default: str = "") -> str:
    """Возвращает значение переменной окружения или значение по умолчанию."""
    return os.getenv(key, default).strip()


def _env_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: int) -> int:
    value = _env(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc


def _env_list(key: str, default: Sequence[str] | None = None) -> List[str]:
    value = os.getenv(key)
    if value is None:
        return list(default or [])
    separators = {",", "\n", ";"}
    buffer = []
    current = []
    for char in value:
        if char in separators:
            chunk = "".join(current).strip()
            if chunk:
                buffer.append(chunk)
            current = []
        else:
            current.append(char)
    chunk = "".join(current).strip()
    if chunk:
        buffer.append(chunk)
    return buffer


def load_policy() -> Policy:
    """Читает политику из окружения без кэширования."""
    check_mx = _env_bool("MAILCHECK_CHECK_MX", True)
    mx = MXSettings(
        enabled=check_mx,
        cache_ttl_hours=_env_int("MAILCHECK_MX_CACHE_TTL_HOURS", 24),
        dns_timeout_seconds=max(_env_int("MAILCHECK_DNS_TIMEOUT_MS", 1500) / 1000.0, 0.1),
        dns_resolvers=tuple(_env_list("MAILCHECK_DNS_RESOLVERS")),
    )

    return Policy(
        check_mx_records=check_mx,
        check_banned=_env_bool("MAILCHECK_CHECK_BANNED", False),
        check_disposable=_env_bool("MAILCHECK_CHECK_DISPOSABLE", False),
        check_free=_env_bool("MAILCHECK_CHECK_FREE", False),
        disposable_local_only=_env_bool("MAILCHECK_DISPOSABLE_LOCAL_ONLY", False),
        free_local_only=_env_bool("MAILCHECK_FREE_LOCAL_ONLY", False),
        banned_list=tuple(_env_list("MAILCHECK_BANNED_LIST")),
        disposable_list=tuple(_env_list("MAILCHECK_DISPOSABLE_LIST")),
        free_list=tuple(_env_list("MAILCHECK_FREE_LIST")),
        list_fetch_timeout_seconds=max(_env_int("MAILCHECK_LIST_FETCH_TIMEOUT_MS", 10000) / 1000.0, 0.1),
        mx=mx,
    )


@lru_cache(maxsize=1)
def get_settings() -> Policy:
    """Загружает политику один раз и кэширует её для повторного использования."""
    return load_policy()
