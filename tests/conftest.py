"""Общие фикстуры для тестов."""

from typing import Iterator

import pytest

from mailcheck.config import get_settings


@pytest.fixture(autouse=True)
def default_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Отключает сетевые проверки по умолчанию и сбрасывает кэш настроек."""
    monkeypatch.setenv("MAILCHECK_CHECK_MX", "false")
    monkeypatch.setenv("MAILCHECK_DISPOSABLE_LOCAL_ONLY", "true")
    monkeypatch.setenv("MAILCHECK_FREE_LOCAL_ONLY", "true")
    for key in (
        "MAILCHECK_CHECK_BANNED",
        "MAILCHECK_CHECK_DISPOSABLE",
        "MAILCHECK_CHECK_FREE",
        "MAILCHECK_BANNED_LIST",
        "MAILCHECK_DISPOSABLE_LIST",
        "MAILCHECK_FREE_LIST",
        "MAILCHECK_DNS_RESOLVERS",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]
