from concurrent.futures import ThreadPoolExecutor

import pytest

from shortlinks.core.errors import StorageFailure
from shortlinks.services.redirect import RedirectResolver


def test_resolve_returns_destination_and_counts(resolver, directory):
    directory.put("abc123", "https://example.com")

    assert resolver.resolve("abc123") == "https://example.com"

    record = directory.get("abc123")
    assert record.clicks == 1
    assert record.last_clicked_at is not None
    assert record.updated_at == record.last_clicked_at


def test_resolve_unknown_code(resolver, directory):
    directory.put("abc123", "https://example.com")

    assert resolver.resolve("zzz999") is None

    assert [r.short_code for r in directory.list_all()] == ["abc123"]
    assert directory.get("abc123").clicks == 0


def test_resolve_deleted_code(resolver, directory):
    directory.put("abc123", "https://example.com")
    directory.remove("abc123")

    assert resolver.resolve("abc123") is None
    assert directory.list_all() == []


def test_resolve_uses_single_directory_call():
    class RecordingDirectory:
        def __init__(self):
            self.calls = []

        def record_click(self, code):
            self.calls.append(("record_click", code))

            class Record:
                original_url = "https://example.com"

            return Record()

        def __getattr__(self, name):
            raise AssertionError(f"resolver must not call {name}")

    directory = RecordingDirectory()
    assert RedirectResolver(directory).resolve("abc123") == "https://example.com"
    assert directory.calls == [("record_click", "abc123")]


def test_concurrent_resolves_count_every_click(resolver, directory):
    directory.put("hot123", "https://example.com")
    for _ in range(3):
        resolver.resolve("hot123")
    before = directory.get("hot123").clicks

    with ThreadPoolExecutor(max_workers=10) as pool:
        destinations = list(pool.map(lambda _: resolver.resolve("hot123"), range(200)))

    assert destinations == ["https://example.com"] * 200
    assert directory.get("hot123").clicks == before + 200


def test_resolve_propagates_storage_failure(broken_directory):
    with pytest.raises(StorageFailure):
        RedirectResolver(broken_directory).resolve("abc123")
