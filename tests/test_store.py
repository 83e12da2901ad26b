"""Tests for the CacheStore module."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import Mock

import requests

from tests.conftest import write_json
from winter_tracker.schemas import parse_observations
from winter_tracker.store import CacheStore, yearly_key

if TYPE_CHECKING:
    from pathlib import Path

ROWS = [{"date": "2019-01-01", "tavg": -4.2}, {"date": "2019-01-02", "tavg": -6.0}]


class TestYearlyKey:
    """Test cache key naming."""

    def test_yearly_key(self) -> None:
        assert yearly_key(2019) == "yearly-2019"


class TestCacheStoreInit:
    """Test CacheStore initialization."""

    def test_creates_dynamic_dir(self, tmp_path: Path) -> None:
        CacheStore(tmp_path / "cache", tmp_path / "dynamic")
        assert (tmp_path / "dynamic").is_dir()

    def test_does_not_create_static_dir(self, tmp_path: Path) -> None:
        CacheStore(tmp_path / "cache", tmp_path / "dynamic")
        assert not (tmp_path / "cache").exists()

    def test_unwritable_dynamic_dir_does_not_raise(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = CacheStore(tmp_path / "cache", blocker / "dynamic")
        assert store.write("yearly-2019", ROWS) is None


class TestCacheStoreRead:
    """Test read order and formats."""

    def test_missing_key(self, store: CacheStore) -> None:
        assert store.read("yearly-2019") is None

    def test_reads_bare_list_from_static(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", ROWS)
        assert store.read("yearly-2019") == ROWS

    def test_reads_envelope_from_dynamic(self, store: CacheStore) -> None:
        write_json(
            store.dynamic_dir / "yearly-2019.json",
            {"meta": {"source": "meteostat"}, "data": ROWS},
        )
        assert store.read("yearly-2019") == ROWS

    def test_static_wins_over_dynamic(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", ROWS)
        write_json(store.dynamic_dir / "yearly-2019.json", [{"date": "2019-06-01", "tavg": 20}])
        assert store.read("yearly-2019") == ROWS

    def test_corrupt_json_is_a_miss(self, store: CacheStore) -> None:
        path = store.static_dir / "yearly-2019.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json")
        assert store.read("yearly-2019") is None

    def test_key_escaping_directory_is_a_miss(self, store: CacheStore) -> None:
        assert store.read("../../etc/passwd") is None

    def test_has(self, store: CacheStore) -> None:
        assert store.has("yearly-2019") is False
        write_json(store.static_dir / "yearly-2019.json", ROWS)
        assert store.has("yearly-2019") is True

    def test_has_with_parse_rejecting_entry(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", {"unexpected": "shape"})
        assert store.has("yearly-2019", parse=parse_observations) is False


class TestCacheStoreParse:
    """Test per-tier validation with ``parse``."""

    def test_parse_applied_to_hit(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", ROWS)

        result = store.read("yearly-2019", parse=parse_observations)

        assert [o.tavg for o in result] == [-4.2, -6.0]

    def test_rejected_static_falls_through_to_dynamic(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", {"unexpected": "shape"})
        store.write("yearly-2019", ROWS)

        result = store.read("yearly-2019", parse=parse_observations)

        assert [o.tavg for o in result] == [-4.2, -6.0]

    def test_corrupt_static_falls_through_to_dynamic(self, store: CacheStore) -> None:
        path = store.static_dir / "yearly-2019.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json")
        store.write("yearly-2019", ROWS)

        assert store.read("yearly-2019") == ROWS

    def test_rejected_everywhere_is_a_miss(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", {"unexpected": "shape"})
        write_json(store.dynamic_dir / "yearly-2019.json", [{"tavg": 1.0}])

        assert store.read("yearly-2019", parse=parse_observations) is None

    def test_without_parse_first_tier_wins(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", {"unexpected": "shape"})
        store.write("yearly-2019", ROWS)

        assert store.read("yearly-2019") == {"unexpected": "shape"}


class TestCacheStoreWrite:
    """Test writes always land in the dynamic tier."""

    def test_write_targets_dynamic(self, store: CacheStore) -> None:
        path = store.write("yearly-2019", ROWS)
        assert path == store.dynamic_dir / "yearly-2019.json"
        assert not (store.static_dir / "yearly-2019.json").exists()

    def test_write_envelope_format(self, store: CacheStore) -> None:
        store.write("yearly-2019", ROWS, source="meteostat")
        data = json.loads((store.dynamic_dir / "yearly-2019.json").read_text())
        assert data["meta"]["source"] == "meteostat"
        assert "fetched_at" in data["meta"]
        assert data["data"] == ROWS

    def test_write_never_overwrites_static(self, store: CacheStore) -> None:
        write_json(store.static_dir / "yearly-2019.json", ROWS)
        store.write("yearly-2019", [])
        assert json.loads((store.static_dir / "yearly-2019.json").read_text()) == ROWS
        # static still wins on read
        assert store.read("yearly-2019") == ROWS

    def test_write_then_read(self, store: CacheStore) -> None:
        store.write("yearly-2019", ROWS)
        assert store.read("yearly-2019") == ROWS

    def test_write_static(self, store: CacheStore) -> None:
        path = store.write_static("yearly-2019", ROWS)
        assert path == store.static_dir / "yearly-2019.json"
        assert store.read("yearly-2019") == ROWS

    def test_write_escaping_key_returns_none(self, store: CacheStore) -> None:
        assert store.write("../outside", ROWS) is None

    def test_unserializable_data_returns_none(self, store: CacheStore) -> None:
        assert store.write("yearly-2019", {"bad": object()}) is None


class TestCacheStoreRemoteStatic:
    """Test the production variant reading static entries over HTTP."""

    def _store(self, tmp_path: Path, http: Mock) -> CacheStore:
        return CacheStore(
            tmp_path / "cache",
            tmp_path / "dynamic",
            static_url="https://tracker.example.com/cache/",
            http=http,
        )

    def test_reads_static_over_http(self, tmp_path: Path) -> None:
        http = Mock()
        resp = Mock(status_code=200)
        resp.json.return_value = ROWS
        http.get.return_value = resp

        store = self._store(tmp_path, http)

        assert store.read("yearly-2019") == ROWS
        http.get.assert_called_once_with("https://tracker.example.com/cache/yearly-2019.json")

    def test_http_404_falls_back_to_dynamic(self, tmp_path: Path) -> None:
        http = Mock()
        http.get.return_value = Mock(status_code=404)
        store = self._store(tmp_path, http)
        store.write("yearly-2019", ROWS)

        assert store.read("yearly-2019") == ROWS

    def test_http_error_is_a_miss(self, tmp_path: Path) -> None:
        http = Mock()
        http.get.side_effect = requests.ConnectionError("down")
        store = self._store(tmp_path, http)

        assert store.read("yearly-2019") is None

    def test_http_server_error_is_a_miss(self, tmp_path: Path) -> None:
        http = Mock()
        resp = Mock(status_code=500)
        resp.raise_for_status.side_effect = requests.HTTPError("500")
        http.get.return_value = resp
        store = self._store(tmp_path, http)

        assert store.read("yearly-2019") is None

    def test_http_forbidden_falls_back_to_dynamic(self, tmp_path: Path) -> None:
        http = Mock()
        resp = Mock(status_code=403)
        resp.raise_for_status.side_effect = requests.HTTPError("403 Forbidden")
        http.get.return_value = resp
        store = self._store(tmp_path, http)
        store.write("yearly-2019", ROWS)

        assert store.read("yearly-2019") == ROWS
