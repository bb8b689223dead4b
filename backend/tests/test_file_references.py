import logging

import pytest

from tests.testkit import FakeClock, FakeFilesProvider, signed_url
from ui_resolvers.services.file_references import (
    FileUrlCache,
    collect_file_ids,
    load_file_url,
    migrate_legacy_file_links,
    render_file_references,
)


def test_migrate_legacy_download_links():
    html = (
        '<p><img src="https://api.example.com/api/v1/files/12/download" alt="x">'
        "<a href='/files/34/download?inline=1'>doc</a>"
        '<a href="/files/slug-a/download">slug</a></p>'
    )
    migrated = migrate_legacy_file_links(html)
    assert '<img src="#" alt="x" data-src-id="12"/>' in migrated
    assert '<a href="#" data-src-id="34">doc</a>' in migrated
    # only numeric ids were ever embedded this way
    assert 'href="/files/slug-a/download"' in migrated


def test_migrate_unquoted_legacy_link():
    assert collect_file_ids(migrate_legacy_file_links("<img src=/files/9/download>")) == [9]


def test_migrate_empty_content():
    assert migrate_legacy_file_links("") == ""
    assert migrate_legacy_file_links(None) is None


def test_collect_file_ids_dedupes_in_order():
    html = '<img data-src-id="5"><a data-src-id="3"></a><img data-src-id="5"><img data-src-id="0"><img data-src-id="x">'
    assert collect_file_ids(html) == [5, 3]
    assert collect_file_ids("") == []


def test_collect_file_ids_unquoted_attributes():
    assert collect_file_ids("<img src=# data-src-id=12>") == [12]


def test_cache_expires_before_provider_ttl():
    clock = FakeClock()
    cache = FileUrlCache(clock=clock)
    cache.set(7, "https://signed/7", expires_in_seconds=300)
    assert cache.get("7") == "https://signed/7"
    clock.advance(239)
    assert cache.get(7) == "https://signed/7"
    clock.advance(1)
    assert cache.get(7) is None
    assert len(cache) == 0


def test_cache_default_ttl_and_invalidate():
    clock = FakeClock()
    cache = FileUrlCache(clock=clock)
    cache.set("a", "https://signed/a")
    clock.advance(539)
    assert cache.get("a") == "https://signed/a"
    cache.invalidate("a")
    assert cache.get("a") is None


def test_cache_drops_expired_entries_on_set():
    clock = FakeClock()
    cache = FileUrlCache(clock=clock)
    for n in range(1000):
        cache.set(n, f"https://signed/{n}", expires_in_seconds=100)
    assert len(cache) == 1000
    clock.advance(1e9)
    cache.set("fresh", "https://signed/fresh")
    assert len(cache) == 1
    assert cache.get("fresh") == "https://signed/fresh"


def test_cache_is_bounded():
    cache = FileUrlCache(clock=FakeClock(), max_entries=3)
    for n in range(5):
        cache.set(n, f"https://signed/{n}")
    assert len(cache) == 3
    assert cache.get(0) is None
    assert cache.get(1) is None
    assert cache.get(4) == "https://signed/4"


def test_cache_refresh_keeps_key_newest():
    cache = FileUrlCache(clock=FakeClock(), max_entries=2)
    cache.set("a", "https://signed/a")
    cache.set("b", "https://signed/b")
    cache.set("a", "https://signed/a2")
    cache.set("c", "https://signed/c")
    assert cache.get("a") == "https://signed/a2"
    assert cache.get("b") is None


@pytest.mark.asyncio
async def test_load_file_url_uses_cache(fake_provider, url_cache):
    assert await load_file_url(7, fake_provider, url_cache) == signed_url(7)
    assert await load_file_url(7, fake_provider, url_cache) == signed_url(7)
    assert fake_provider.calls == [7]


@pytest.mark.asyncio
async def test_load_file_url_failures(fake_provider, url_cache, caplog):
    with caplog.at_level(logging.WARNING, logger="ui_resolvers.services.file_references"):
        assert await load_file_url(None, fake_provider, url_cache) is None
        assert await load_file_url("broken", fake_provider, url_cache) is None
        assert await load_file_url("missing", fake_provider, url_cache) is None
    assert len(url_cache) == 0
    assert "fake provider" in caplog.text


@pytest.mark.asyncio
async def test_load_file_url_accepts_dict_responses(url_cache):
    class DictProvider:
        provider_code = "dict"

        async def get_file_url(self, reference):
            return {"url": f"https://signed/{reference}", "expires_in_seconds": 120}

    assert await load_file_url(8, DictProvider(), url_cache) == "https://signed/8"
    assert url_cache.get(8) == "https://signed/8"


@pytest.mark.asyncio
async def test_render_replaces_placeholders(url_cache):
    provider = FakeFilesProvider(urls={"12": "https://signed/12?a=1&b=2", "34": "https://signed/34"})
    html = (
        '<img src="/api/v1/files/12/download" alt="chart"/>'
        '<a data-src-id="34">report</a>'
        '<img src="#" data-src-id="56">'
    )
    out = await render_file_references(html, provider, url_cache)
    assert 'src="https://signed/12?a=1&amp;b=2"' in out
    assert 'data-src-id="12"' in out
    assert '<a data-src-id="34" href="https://signed/34">report</a>' in out
    # unresolved files are left alone
    assert '<img src="#" data-src-id="56"/>' in out
    assert sorted(provider.calls) == [12, 34, 56]


@pytest.mark.asyncio
async def test_render_attribute_value_with_angle_bracket(url_cache):
    provider = FakeFilesProvider(urls={"5": "https://signed/5"})
    out = await render_file_references('<img alt="a > b" data-src-id="5" src="#">', provider, url_cache)
    assert 'src="https://signed/5"' in out
    assert 'data-src-id="5"' in out
    assert provider.calls == [5]


@pytest.mark.asyncio
async def test_render_unquoted_attributes(url_cache):
    provider = FakeFilesProvider(urls={"12": "https://signed/12"})
    out = await render_file_references("<p><img src=# data-src-id=12></p>", provider, url_cache)
    assert 'src="https://signed/12"' in out
    assert provider.calls == [12]


@pytest.mark.asyncio
async def test_render_without_references(fake_provider, url_cache):
    assert await render_file_references("<p>hi</p>", fake_provider, url_cache) == "<p>hi</p>"
    assert await render_file_references("", fake_provider, url_cache) == ""
    assert fake_provider.calls == []
