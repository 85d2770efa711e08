#!/usr/bin/env python3
"""
Dataset Store Test Suite

Tests for the cached dataset loader:
1. Fresh cache entries are used without fetching
2. Expired entries trigger a fetch that replaces the cache
3. Failed fetches fall back to the cache regardless of age
4. Failed fetches without a cache entry propagate
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.constants import USER_AGENT
from core.dataset_store import DatasetStore, fetch_companies_payload
from core.errors import FetchError, FormatError

SOURCE = "https://example.com/companies.json"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def mock_response(status_code=200, payload=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path, clock):
    return DatasetStore(SOURCE, cache_dir=tmp_path / "cache", ttl_seconds=300, clock=clock)


# =============================================================================
# fetch_companies_payload
# =============================================================================


class TestFetchPayload:

    def test_sends_identifying_headers(self, record_factory):
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory()])) as get:
            data = fetch_companies_payload(SOURCE, timeout=5)
        assert data[0]["id"] == "acme"
        headers = get.call_args.kwargs["headers"]
        assert headers["User-Agent"] == USER_AGENT
        assert headers["Accept"] == "application/json"
        assert get.call_args.kwargs["timeout"] == 5

    def test_non_200_status(self):
        with patch("core.dataset_store.requests.get", return_value=mock_response(404, reason="Not Found")):
            with pytest.raises(FetchError, match="404 Not Found"):
                fetch_companies_payload(SOURCE)

    def test_transport_failure(self):
        with patch("core.dataset_store.requests.get", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(FetchError):
                fetch_companies_payload(SOURCE)

    def test_invalid_json_body(self):
        response = mock_response()
        response.json.side_effect = ValueError("Expecting value")
        with patch("core.dataset_store.requests.get", return_value=response):
            with pytest.raises(FormatError):
                fetch_companies_payload(SOURCE)

    def test_local_file(self, tmp_path, record_factory):
        path = tmp_path / "companies.json"
        path.write_text(json.dumps([record_factory()]), encoding="utf-8")
        assert len(fetch_companies_payload(str(path))) == 1

    def test_missing_local_file(self, tmp_path):
        with pytest.raises(FetchError, match="not found"):
            fetch_companies_payload(str(tmp_path / "missing.json"))


# =============================================================================
# DatasetStore.load
# =============================================================================


class TestDatasetStore:

    def test_network_load_writes_cache(self, store, record_factory):
        payload = [record_factory(id="a"), {"id": "broken"}]
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=payload)) as get:
            snapshot = store.load()

        assert snapshot.origin == "network"
        assert [c.id for c in snapshot.companies] == ["a"]
        assert snapshot.invalid_count == 1
        assert get.call_args.kwargs["headers"]["Cache-Control"] == "no-cache"

        entry = json.loads(store.cache_file.read_text(encoding="utf-8"))
        assert entry["total_companies"] == 1
        assert entry["companies"][0]["id"] == "a"
        assert entry["timestamp"] == store._clock()

    def test_fresh_cache_skips_fetch(self, store, clock, record_factory):
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory()])):
            store.load()

        clock.now += 299
        with patch("core.dataset_store.requests.get") as get:
            snapshot = store.load()
        get.assert_not_called()
        assert snapshot.origin == "cache"
        assert len(snapshot.companies) == 1

    def test_expired_cache_is_refreshed(self, store, clock, record_factory):
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory(id="old")])):
            store.load()

        clock.now += 301
        new_payload = [record_factory(id="new1"), record_factory(id="new2")]
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=new_payload)):
            snapshot = store.load()
        assert snapshot.origin == "network"
        assert [c.id for c in snapshot.companies] == ["new1", "new2"]
        assert store.read_cache()["total_companies"] == 2

    def test_failed_fetch_uses_stale_cache(self, store, clock, record_factory):
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory()])):
            store.load()

        clock.now += 3600
        with patch("core.dataset_store.requests.get", return_value=mock_response(500, reason="Server Error")):
            snapshot = store.load()
        assert snapshot.origin == "stale-cache"
        assert len(snapshot.companies) == 1
        assert "500" in snapshot.error

    def test_failed_fetch_without_cache_raises(self, store):
        with patch("core.dataset_store.requests.get", side_effect=requests.exceptions.Timeout("slow")):
            with pytest.raises(FetchError):
                store.load()
        assert not store.cache_file.exists()

    def test_non_array_document_without_cache_raises(self, store):
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload={"error": "nope"})):
            with pytest.raises(FormatError):
                store.load()

    def test_corrupt_cache_is_ignored(self, store, record_factory):
        store.cache_dir.mkdir(parents=True)
        store.cache_file.write_text("{corrupt", encoding="utf-8")
        assert store.read_cache() is None

        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory()])):
            snapshot = store.load()
        assert snapshot.origin == "network"

    def test_unwritable_cache_keeps_network_result(self, tmp_path, clock, record_factory):
        not_a_dir = tmp_path / "not_a_dir"
        not_a_dir.write_text("occupied", encoding="utf-8")
        store = DatasetStore(SOURCE, cache_dir=not_a_dir, clock=clock)

        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory()])):
            snapshot = store.load()

        assert snapshot.origin == "network"
        assert [c.id for c in snapshot.companies] == ["acme"]
        assert not_a_dir.read_text(encoding="utf-8") == "occupied"

    def test_without_cache_dir(self, clock, record_factory):
        store = DatasetStore(SOURCE, cache_dir=None, clock=clock)
        with patch("core.dataset_store.requests.get", return_value=mock_response(payload=[record_factory()])) as get:
            store.load()
            store.load()
        assert get.call_count == 2
        assert store.cache_file is None
