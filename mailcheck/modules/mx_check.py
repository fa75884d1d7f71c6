"""Проверка, что домен принимает почту (наличие MX-записей)."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import List, Optional, Sequence, Tuple

import dns.exception
import dns.resolver

from mailcheck.config import MXSettings, get_settings

LOGGER = logging.getLogger("mailcheck.mx_check")


NEGATIVE_TTL_SECONDS = 300


class MXCache:
    """MX-хосты по доменам с ограниченным размером и временем жизни.

    Пустой ответ (домен без MX или сбой DNS) хранится не дольше
    NEGATIVE_TTL_SECONDS, чтобы временная ошибка резолвера не блокировала
    домен на весь основной TTL. При переполнении вытесняется домен, к
    которому дольше всего не обращались.
    """

    def __init__(
        self,
        ttl_seconds: int,
        maxsize: int = 1024,
        *,
        negative_ttl_seconds: int = NEGATIVE_TTL_SECONDS,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.negative_ttl_seconds = min(negative_ttl_seconds, ttl_seconds)
        self.maxsize = maxsize
        self._hosts: OrderedDict[str, Tuple[float, Tuple[str, ...]]] = OrderedDict()
        self._lock = threading.Lock()

    def hosts_for(self, domain: str) -> Optional[Tuple[str, ...]]:
        """MX-хосты домена или None, если записи нет или она устарела."""
        with self._lock:
            entry = self._hosts.get(domain)
            if entry is None:
                return None
            deadline, hosts = entry
            if deadline <= time.monotonic():
                del self._hosts[domain]
                return None
            self._hosts.move_to_end(domain)
            return hosts

    def remember(self, domain: str, hosts: Tuple[str, ...]) -> None:
        lifetime = self.ttl_seconds if hosts else self.negative_ttl_seconds
        with self._lock:
            self._hosts[domain] = (time.monotonic() + lifetime, hosts)
            self._hosts.move_to_end(domain)
            while len(self._hosts) > self.maxsize:
                self._hosts.popitem(last=False)

    def __len__(self) -> int:
        return len(self._hosts)


def to_ascii_domain(domain: str) -> Optional[str]:
    """Переводит домен в punycode; None, если это невозможно."""
    try:
        return domain.encode("idna").decode("ascii").lower()
    except UnicodeError:
        return None


class MXChecker:
    """Проверяет наличие MX-записей у домена через dnspython."""

    def __init__(
        self,
        settings: Optional[MXSettings] = None,
        *,
        cache: Optional[MXCache] = None,
        resolver: Optional[dns.resolver.Resolver] = None,
    ) -> None:
        self.settings = settings or get_settings().mx_settings
        ttl_seconds = max(self.settings.cache_ttl_hours * 3600, 60)
        self._cache = cache if cache is not None else MXCache(ttl_seconds)
        self._resolver = resolver
        self._resolvers_order = self._build_resolver_order(self.settings.dns_resolvers)

    def has_mx(self, domain: Optional[str]) -> bool:
        """True, если домен принимает почту или проверка отключена."""
        if not self.settings.enabled:
            return True

        candidate = (domain or "").strip()
        if not candidate:
            LOGGER.warning("Получен пустой домен для MX-проверки.")
            return False

        if candidate.startswith("["):
            # у литерала нет DNS-имени
            return True

        normalized = to_ascii_domain(candidate)
        if not normalized:
            LOGGER.warning("Домен %r не удалось перевести в IDNA.", candidate)
            return False

        records = self.lookup(normalized)
        return bool(records)

    def lookup(self, domain: str) -> Tuple[str, ...]:
        """Возвращает MX-хосты домена (из кэша, если есть)."""
        cached = self._cache.hosts_for(domain)
        if cached is not None:
            return cached

        try:
            records = tuple(self._resolve_mx(domain))
        except dns.exception.DNSException as exc:
            LOGGER.warning("MX lookup failed for %s: %s", domain, exc)
            records = ()

        if not records:
            LOGGER.info("MX lookup returned no records for %s.", domain)

        self._cache.remember(domain, records)
        return records

    def _resolve_mx(self, domain: str) -> List[str]:
        attempts = 0
        last_error: Optional[Exception] = None
        start = time.perf_counter()
        for nameservers in self._resolvers_order:
            attempts += 1
            resolver = self._resolver or dns.resolver.Resolver(configure=not nameservers)
            resolver.timeout = self.settings.dns_timeout_seconds
            resolver.lifetime = self.settings.dns_timeout_seconds
            if nameservers:
                resolver.nameservers = list(nameservers)

            try:
                LOGGER.debug("Resolving MX for %s via %s", domain, nameservers or "system")
                answers = resolver.resolve(f"{domain}.", "MX")
                latency_ms = int((time.perf_counter() - start) * 1000)
                hosts = [str(r.exchange).rstrip(".").lower() for r in answers]
                LOGGER.info(
                    "Resolved MX for %s (%dms): %s",
                    domain,
                    latency_ms,
                    ", ".join(hosts) or "<empty>",
                )
                return hosts
            except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer) as exc:
                LOGGER.warning("Domain %s has no MX records: %s", domain, exc)
                return []
            except dns.exception.DNSException as exc:
                LOGGER.warning("Attempt %d to resolve MX for %s failed: %s", attempts, domain, exc)
                last_error = exc
                if attempts >= 2:
                    break

        if last_error:
            raise last_error
        return []

    @staticmethod
    def _build_resolver_order(resolvers: Sequence[str]) -> List[Tuple[str, ...]]:
        filtered = [resolver.strip() for resolver in resolvers if resolver.strip()]
        order: List[Tuple[str, ...]] = []
        if filtered:
            order.append(tuple(filtered))
        # вторая попытка идёт через системные настройки
        order.append(tuple())
        return order
