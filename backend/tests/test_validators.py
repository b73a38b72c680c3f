import pytest

from shortlinks.config import settings
from shortlinks.utils.validators import is_valid_url


@pytest.mark.parametrize("url", [
    "https://example.com",
    "http://example.com/path?q=1#frag",
    "https://sub.example.co.uk:8443/a/b",
    "HTTPS://EXAMPLE.COM",
])
def test_accepts_absolute_http_urls(url):
    assert is_valid_url(url) == (True, "")


@pytest.mark.parametrize("url", [
    "",
    "   ",
    "example.com",
    "/relative/path",
    "https://",
    "not a url",
    "https://exa mple.com",
    "https://example.com:notaport",
])
def test_rejects_malformed_urls(url):
    is_valid, message = is_valid_url(url)
    assert not is_valid
    assert message


def test_accepts_any_scheme_by_default():
    assert is_valid_url("ftp://example.com/file") == (True, "")
    assert is_valid_url("myapp://open.example.com/item") == (True, "")


def test_rejects_schemes_outside_allowed_list(monkeypatch):
    monkeypatch.setattr(settings, "ALLOWED_URL_SCHEMES", ["http", "https"])

    assert is_valid_url("https://example.com") == (True, "")
    is_valid, message = is_valid_url("ftp://example.com/file")
    assert not is_valid
    assert "HTTP" in message


def test_rejects_overlong_urls():
    is_valid, message = is_valid_url("https://example.com/" + "a" * 3000)
    assert not is_valid
    assert "too long" in message
