"""Тесты списков доменов и их загрузки."""

import httpx
import respx

from mailcheck.modules.provider_lists import (
    BannedDomainChecker,
    DomainListFetcher,
    ListProvider,
    ProviderListChecker,
    merge_lists,
    parse_list,
)

TXT_PROVIDER = ListProvider(url="https://lists.test/disposable.txt", format="txt")
JSON_PROVIDER = ListProvider(url="https://lists.test/wildcard.json", format="json")


def test_parse_txt_list_handles_crlf_and_blank_lines() -> None:
    content = "mailinator.com\r\n\r\nyopmail.com\n10minutemail.com\n"
    assert parse_list(content, "txt") == ["mailinator.com", "yopmail.com", "10minutemail.com"]


def test_parse_json_list_drops_non_strings() -> None:
    assert parse_list('["a.com", 1, null, "b.com"]', "json") == ["a.com", "b.com"]
    assert parse_list('{"a.com": true}', "json") == []
    assert parse_list("not json", "json") == []
    assert parse_list("", "json") == []


def test_merge_lists_keeps_first_seen_order() -> None:
    assert merge_lists(["b.com", "a.com"], ["a.com", "c.com", 5]) == ["b.com", "a.com", "c.com"]


@respx.mock
def test_fetcher_collects_local_and_remote() -> None:
    respx.get(TXT_PROVIDER.url).mock(return_value=httpx.Response(200, text="one.com\ntwo.com\n"))
    respx.get(JSON_PROVIDER.url).mock(return_value=httpx.Response(200, json=["two.com", "three.com"]))

    fetcher = DomainListFetcher(timeout=1.0)
    domains = fetcher.collect([TXT_PROVIDER, JSON_PROVIDER], ["local.com"])

    assert domains == ["local.com", "one.com", "two.com", "three.com"]


@respx.mock
def test_fetcher_skips_failed_providers() -> None:
    respx.get(TXT_PROVIDER.url).mock(return_value=httpx.Response(500))
    respx.get(JSON_PROVIDER.url).mock(side_effect=httpx.ConnectError)

    fetcher = DomainListFetcher(timeout=1.0)

    assert fetcher.collect([TXT_PROVIDER, JSON_PROVIDER], ["local.com"]) == ["local.com"]


def test_fetcher_ignores_non_http_urls() -> None:
    fetcher = DomainListFetcher()
    assert fetcher.fetch(ListProvider(url="file:///etc/passwd")) == []


@respx.mock
def test_local_only_never_hits_network() -> None:
    route = respx.get(TXT_PROVIDER.url).mock(return_value=httpx.Response(200, text="one.com"))

    checker = ProviderListChecker([TXT_PROVIDER], local_list=["local.com"], local_only=True)

    assert checker.domains == ["local.com"]
    assert route.called is False


@respx.mock
def test_provider_checker_loads_lazily_once() -> None:
    route = respx.get(TXT_PROVIDER.url).mock(return_value=httpx.Response(200, text="Spam.com\n"))

    checker = ProviderListChecker([TXT_PROVIDER])
    assert route.call_count == 0

    assert checker.is_allowed("spam.com") is False
    assert checker.is_allowed("SPAM.COM") is False
    assert checker.is_allowed("example.com") is True
    assert route.call_count == 1


def test_disabled_provider_checker_allows_all() -> None:
    checker = ProviderListChecker([], local_list=["spam.com"], enabled=False)
    assert checker.is_allowed("spam.com") is True


def test_provider_checker_allows_missing_domain() -> None:
    checker = ProviderListChecker([], local_list=["spam.com"], local_only=True)
    assert checker.is_allowed(None) is True
    assert checker.contains("") is False


def test_banned_checker_glob_patterns() -> None:
    checker = BannedDomainChecker(["domain.com", "*.banned.org", "spam?.net"])

    assert checker.is_allowed("domain.com") is False
    assert checker.is_allowed("mail.banned.org") is False
    assert checker.is_allowed("spam1.net") is False
    assert checker.is_allowed("banned.org") is True
    assert checker.is_allowed("example.com") is True


def test_banned_checker_disabled() -> None:
    checker = BannedDomainChecker(["*"], enabled=False)
    assert checker.is_allowed("anything.com") is True


@respx.mock
def test_fetcher_treats_redirect_as_failure() -> None:
    respx.get(TXT_PROVIDER.url).mock(
        return_value=httpx.Response(
            302,
            text="<html>moved</html>",
            headers={"Location": "https://lists.test/elsewhere.txt"},
        )
    )
    with httpx.Client() as client:
        fetcher = DomainListFetcher(client=client)

        assert fetcher.fetch(TXT_PROVIDER) == []


@respx.mock
def test_provider_checker_retries_after_empty_remote_lists() -> None:
    route = respx.get(TXT_PROVIDER.url).mock(
        side_effect=[
            httpx.Response(500),
            httpx.Response(200, text="mailinator.com\n"),
        ]
    )
    checker = ProviderListChecker([TXT_PROVIDER], local_list=["local.test"])

    assert checker.is_allowed("mailinator.com") is True
    assert checker.is_allowed("local.test") is False
    assert checker.is_allowed("mailinator.com") is False
    assert checker.is_allowed("mailinator.com") is False
    assert route.call_count == 2
