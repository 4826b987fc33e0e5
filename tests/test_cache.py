# tests/test_cache.py
"""
Cache Tests - Unit Tests for Two-Tier Caches

This module tests MemoryCache and FileCache: tier isolation, commit
semantics, commit timestamps and not-found behaviour.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ratecache.adapters.cache (MemoryCache, FileCache, Tier)
- ratecache.domain.errors (CacheNotFoundError, CacheIOError)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import patch  # Patching for simulating storage failures

from ratecache.adapters.cache import FileCache, MemoryCache, NEVER_COMMITTED, Tier
from ratecache.domain.errors import CacheIOError, CacheNotFoundError

FIRST = b"first"
SECOND = b"second"


def _write(cache, content: bytes) -> None:
    with cache.open_write_sink() as sink:
        sink.write(content)


def _read(cache, tier: Tier) -> bytes:
    with cache.open_read_source(tier) as src:
        return src.read()


@pytest.fixture(params=["memory", "file"])
def cache(request, tmp_path):
    if request.param == "memory":
        return MemoryCache()
    return FileCache("feed.xml", directory=tmp_path / "cache")


class TestCacheContract:
    def test_lifecycle(self, cache):
        assert cache.is_empty()
        assert cache.persisted_timestamp() < 0
        _write(cache, FIRST)
        assert cache.persisted_timestamp() < 0
        assert not cache.is_empty()
        assert _read(cache, Tier.TEMPORARY) == FIRST

        cache.commit()
        assert cache.persisted_timestamp() > 0
        assert cache.has_persisted()
        assert _read(cache, Tier.PERSISTED) == FIRST

        # A new download never touches the persisted tier
        _write(cache, SECOND)
        assert _read(cache, Tier.TEMPORARY) == SECOND
        assert _read(cache, Tier.PERSISTED) == FIRST

    def test_no_temporary(self, cache):
        with pytest.raises(CacheNotFoundError):
            cache.open_read_source(Tier.TEMPORARY)

    def test_no_persisted(self, cache):
        with pytest.raises(CacheNotFoundError):
            cache.open_read_source(Tier.PERSISTED)

    def test_no_persisted_after_write(self, cache):
        _write(cache, FIRST)
        with pytest.raises(CacheNotFoundError):
            cache.open_read_source(Tier.PERSISTED)

    def test_commit_without_download(self, cache):
        with pytest.raises(CacheNotFoundError):
            cache.commit()
        assert cache.persisted_timestamp() == NEVER_COMMITTED

    def test_new_sink_discards_previous_content(self, cache):
        _write(cache, FIRST + SECOND)
        _write(cache, SECOND)
        assert _read(cache, Tier.TEMPORARY) == SECOND

    def test_not_found_is_cache_io_error(self, cache):
        with pytest.raises(CacheIOError):
            cache.open_read_source(Tier.PERSISTED)


class TestMemoryCache:
    def test_superseded_sink_does_not_overwrite(self):
        cache = MemoryCache()
        old = cache.open_write_sink()
        old.write(FIRST)
        _write(cache, SECOND)
        old.close()
        assert _read(cache, Tier.TEMPORARY) == SECOND


class TestFileCache:
    def test_files(self, tmp_path):
        cache = FileCache("ecb.xml", directory=tmp_path)
        _write(cache, FIRST)
        assert (tmp_path / "ecb.xml.tmp").read_bytes() == FIRST
        assert not (tmp_path / "ecb.xml").exists()
        cache.commit()
        assert (tmp_path / "ecb.xml").read_bytes() == FIRST
        # No leftover commit temp files
        assert sorted(p.name for p in tmp_path.iterdir()) == ["ecb.xml", "ecb.xml.tmp"]

    def test_survives_new_instance(self, tmp_path):
        cache = FileCache("ecb.xml", directory=tmp_path)
        _write(cache, FIRST)
        cache.commit()
        reopened = FileCache("ecb.xml", directory=tmp_path)
        assert not reopened.is_empty()
        assert reopened.persisted_timestamp() > 0
        assert _read(reopened, Tier.PERSISTED) == FIRST

    def test_commit_failure_keeps_persisted(self, tmp_path):
        cache = FileCache("ecb.xml", directory=tmp_path)
        _write(cache, FIRST)
        cache.commit()
        _write(cache, SECOND)
        with patch("ratecache.adapters.cache.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(CacheIOError, match="Failed to commit"):
                cache.commit()
        assert _read(cache, Tier.PERSISTED) == FIRST
        assert sorted(p.name for p in tmp_path.iterdir()) == ["ecb.xml", "ecb.xml.tmp"]

    def test_commit_temp_file_failure(self, tmp_path):
        cache = FileCache("ecb.xml", directory=tmp_path)
        _write(cache, FIRST)
        cache.commit()
        _write(cache, SECOND)
        with patch("ratecache.adapters.cache.file_store.tempfile.mkstemp", side_effect=OSError("no space left")):
            with pytest.raises(CacheIOError, match="no space left"):
                cache.commit()
        assert _read(cache, Tier.PERSISTED) == FIRST

    def test_commit_timestamp_failure_keeps_persisted(self, tmp_path):
        cache = FileCache("ecb.xml", directory=tmp_path)
        _write(cache, FIRST)
        cache.commit()
        committed_at = cache.persisted_timestamp()
        _write(cache, SECOND)
        with patch("ratecache.adapters.cache.file_store.os.utime", side_effect=OSError("read-only")):
            with pytest.raises(CacheIOError, match="Failed to commit"):
                cache.commit()
        assert _read(cache, Tier.PERSISTED) == FIRST
        assert cache.persisted_timestamp() == committed_at
        assert sorted(p.name for p in tmp_path.iterdir()) == ["ecb.xml", "ecb.xml.tmp"]

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        cache = FileCache("ecb.xml", directory=blocker)
        with pytest.raises(CacheIOError):
            cache.open_write_sink()
