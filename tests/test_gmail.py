"""Тесты канонизации адресов Gmail."""

from mailcheck.modules.address import EmailAddress
from mailcheck.modules.gmail import has_plus_suffix, is_gmail, sanitize, strip_plus_suffix


def test_is_gmail_recognises_both_domains() -> None:
    assert is_gmail("user@gmail.com") is True
    assert is_gmail("user@GoogleMail.com") is True
    assert is_gmail("user@example.com") is False
    assert is_gmail("no-at-sign") is False


def test_plus_suffix_detection() -> None:
    assert has_plus_suffix("first.last+news@gmail.com") is True
    assert has_plus_suffix("first.last@gmail.com") is False
    assert has_plus_suffix("user+tag@example.com") is False


def test_strip_plus_suffix() -> None:
    assert strip_plus_suffix("first.last+news@gmail.com") == "first.last@gmail.com"
    assert strip_plus_suffix("user+tag@example.com") == "user+tag@example.com"
    assert strip_plus_suffix("plain@gmail.com") == "plain@gmail.com"


def test_sanitize_removes_plus_and_dots() -> None:
    assert sanitize("first.last+news@gmail.com") == "firstlast@gmail.com"
    assert sanitize(EmailAddress.parse("f.i.r.s.t@googlemail.com")) == "first@googlemail.com"
    assert sanitize("first.last@example.com") == "first.last@example.com"
