"""Списки доменов: запрещённые, одноразовые и бесплатные почтовые сервисы."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import httpx

LOGGER = logging.getLogger("mailcheck.provider_lists")


@dataclass(frozen=True)
class ListProvider:
    """Удалённый источник списка доменов."""

    url: str
    format: str = "txt"  # txt | json


DISPOSABLE_PROVIDERS: Tuple[ListProvider, ...] = (
    ListProvider(
        url="https://raw.githubusercontent.com/martenson/disposable-email-domains/master/disposable_email_blocklist.conf",
        format="txt",
    ),
    ListProvider(
        url="https://raw.githubusercontent.com/ivolo/disposable-email-domains/master/wildcard.json",
        format="json",
    ),
)

FREE_PROVIDERS: Tuple[ListProvider, ...] = (
    ListProvider(
        url=(
            "https://gist.githubusercontent.com/tbrianjones/5992856/raw/"
            "93213efb652749e226e69884d6c048e595c1280a/free_email_provider_domains.txt"
        ),
        format="txt",
    ),
)


def parse_list(content: str, list_format: str) -> List[str]:
    """Разбирает ответ провайдера: построчный txt или JSON-массив строк."""
    if not content:
        return []

    if list_format == "json":
        try:
            payload: Any = json.loads(content)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Не удалось разобрать JSON-список доменов: %s", exc)
            return []
        if not isinstance(payload, list):
            return []
        return [item for item in payload if isinstance(item, str)]

    lines = content.replace("\r\n", "\n").split("\n")
    return [line for line in lines if line]


def merge_lists(*lists: Iterable[Any]) -> List[str]:
    """Объединяет списки без дубликатов, сохраняя порядок первого появления."""
    seen = set()
    merged: List[str] = []
    for items in lists:
        for item in items:
            if not isinstance(item, str) or item in seen:
                continue
            seen.add(item)
            merged.append(item)
    return merged


class DomainListFetcher:
    """Загружает удалённые списки доменов через httpx."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.timeout = timeout
        self._client = client
        self.headers = {"User-Agent": "mailcheck/0.1 (+domain lists)"}

    def fetch(self, provider: ListProvider) -> List[str]:
        """Возвращает домены провайдера или пустой список при ошибке."""
        if not provider.url.startswith(("http://", "https://")):
            LOGGER.warning("Пропускаем провайдера с некорректным URL: %s", provider.url)
            return []

        try:
            if self._client is not None:
                response = self._client.get(provider.url, timeout=self.timeout, headers=self.headers)
            else:
                response = httpx.get(
                    provider.url,
                    timeout=self.timeout,
                    headers=self.headers,
                    follow_redirects=True,
                )
        except httpx.HTTPError as exc:
            LOGGER.warning("Не удалось загрузить список %s: %s", provider.url, exc)
            return []

        if not response.is_success:
            LOGGER.warning("Список %s вернул статус %s", provider.url, response.status_code)
            return []

        domains = parse_list(response.text, provider.format)
        LOGGER.debug("Загружено %d доменов из %s", len(domains), provider.url)
        return domains

    def collect(
        self,
        providers: Sequence[ListProvider],
        local_list: Iterable[str] = (),
        *,
        local_only: bool = False,
    ) -> List[str]:
        """Локальный список плюс (если разрешено) все удалённые."""
        remote: List[List[str]] = []
        if not local_only:
            remote = [self.fetch(provider) for provider in providers]
        return merge_lists(local_list, *remote)


class BannedDomainChecker:
    """Проверка домена по glob-шаблонам запрещённых доменов."""

    def __init__(self, patterns: Iterable[str], *, enabled: bool = True) -> None:
        self.enabled = enabled
        self.patterns = tuple(pattern for pattern in patterns if pattern)

    def is_allowed(self, domain: Optional[str]) -> bool:
        if not self.enabled:
            return True
        candidate = domain or ""
        for pattern in self.patterns:
            if fnmatchcase(candidate, pattern):
                LOGGER.debug("Домен %s совпал с шаблоном %s", candidate, pattern)
                return False
        return True


class ProviderListChecker:
    """Проверка домена по списку провайдеров (одноразовые или бесплатные).

    Список собирается лениво при первом обращении и затем переиспользуется.
    Если удалённые источники ничего не вернули, загрузка повторяется.
    """

    def __init__(
        self,
        providers: Sequence[ListProvider],
        *,
        local_list: Iterable[str] = (),
        local_only: bool = False,
        enabled: bool = True,
        fetcher: Optional[DomainListFetcher] = None,
    ) -> None:
        self.enabled = enabled
        self.providers = tuple(providers)
        self.local_list = tuple(local_list)
        self.local_only = local_only
        self._fetcher = fetcher or DomainListFetcher()
        self._domains: Optional[FrozenSet[str]] = None
        self._ordered: List[str] = []

    @property
    def domains(self) -> List[str]:
        """Итоговый объединённый список доменов."""
        self._ensure_loaded()
        return list(self._ordered)

    def _ensure_loaded(self) -> FrozenSet[str]:
        if self._domains is not None:
            return self._domains

        self._ordered = self._fetcher.collect(
            self.providers,
            self.local_list,
            local_only=self.local_only,
        )
        domains = frozenset(domain.strip().lower() for domain in self._ordered)

        expects_remote = bool(self.providers) and not self.local_only
        if expects_remote and len(self._ordered) == len(merge_lists(self.local_list)):
            # удалённые списки не пришли: повторим загрузку при следующем обращении
            LOGGER.warning("Удалённые списки доменов пусты, результат не кэшируется.")
            return domains

        self._domains = domains
        LOGGER.info("Список доменов собран: %d записей", len(domains))
        return domains

    def contains(self, domain: Optional[str]) -> bool:
        if not domain:
            return False
        return domain.strip().lower() in self._ensure_loaded()

    def is_allowed(self, domain: Optional[str]) -> bool:
        if not self.enabled or domain is None:
            return True
        return not self.contains(domain)
