"""Two-tier JSON file cache for yearly observation data.

Keys map to one JSON file each (``<key>.json``) in one of two locations:
  - static: Pre-seeded data shipped with the deployment (never written at
    request time). In production it can be served over HTTP instead of read
    from disk.
  - dynamic: Runtime-written entries, in a writable directory.

Reads check static first, then dynamic; the first usable hit wins. A tier
that errors, or whose payload the caller's ``parse`` rejects, is skipped so a
bad static entry never hides a good dynamic one. Writes always go to
dynamic. Runtime files are wrapped in a metadata envelope like::

    {"meta": {"source": "...", "fetched_at": "..."}, "data": [...]}

while pre-seeded files may be a bare JSON array; ``read`` accepts both.

Every failure (I/O, bad JSON, HTTP errors, keys escaping the cache
directory) is logged and treated as a miss for that tier. Callers never see an exception.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from collections.abc import Callable
from typing import Any

import requests

from winter_tracker.services.http import session

logger = logging.getLogger(__name__)


def yearly_key(year: int) -> str:
    """Cache key for a year's observations, e.g. ``yearly-2019``."""
    return f"yearly-{year}"


def _unwrap(payload: Any) -> Any:
    """Return the ``data`` field of an envelope, or the payload itself."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class CacheStore:
    """Key → JSON store over a static and a dynamic cache location."""

    def __init__(
        self,
        static_dir: Path,
        dynamic_dir: Path,
        static_url: str | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.static_dir = static_dir
        self.dynamic_dir = dynamic_dir
        self.static_url = static_url.rstrip("/") if static_url else None
        self._http = http or session

        try:
            self.dynamic_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Unable to create dynamic cache directory %s: %s", dynamic_dir, exc)

    def read(self, key: str, parse: Callable[[Any], Any | None] | None = None) -> Any | None:
        """Read the payload stored under ``key``.

        Args:
            key: Cache key, e.g. ``yearly-2019``.
            parse: Optional validator applied to each tier's payload; a None
                result moves on to the next tier.

        Returns:
            The (parsed) payload of the first usable tier, or None.
        """
        tiers = [
            ("static", lambda: self._read_static(key)),
            ("dynamic", lambda: self._read_file(self._path(self.dynamic_dir, key))),
        ]
        for tier, load in tiers:
            try:
                payload = load()
            except (OSError, ValueError, requests.RequestException) as exc:
                logger.warning("Error reading %s cache for key %s: %s", tier, key, exc)
                continue
            if payload is None:
                continue
            value = _unwrap(payload)
            if parse is not None:
                value = parse(value)
                if value is None:
                    logger.warning("Ignoring unusable %s cache entry for key %s", tier, key)
                    continue
            return value
        return None

    def write(self, key: str, data: Any, source: str = "meteostat") -> Path | None:
        """Write ``data`` to the dynamic tier.

        Returns the written path, or None if the write failed.
        """
        return self._write(self.dynamic_dir, key, data, source)

    def write_static(self, key: str, data: Any, source: str = "meteostat") -> Path | None:
        """Write ``data`` to the static tier. Only used by the seed flow."""
        return self._write(self.static_dir, key, data, source)

    def has(self, key: str, parse: Callable[[Any], Any | None] | None = None) -> bool:
        """Check whether any tier holds a usable entry for ``key``."""
        return self.read(key, parse) is not None

    def _write(self, base: Path, key: str, data: Any, source: str) -> Path | None:
        try:
            full = self._path(base, key)
            full.parent.mkdir(parents=True, exist_ok=True)
            envelope = {
                "meta": {"source": source, "fetched_at": datetime.now(UTC).isoformat()},
                "data": data,
            }
            with full.open("w") as f:
                json.dump(envelope, f, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Error writing cache for key %s: %s", key, exc)
            return None
        logger.info("Cache written successfully to %s", full)
        return full

    def _read_static(self, key: str) -> Any | None:
        if self.static_url is None:
            return self._read_file(self._path(self.static_dir, key))

        resp = self._http.get(f"{self.static_url}/{key}.json")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    @staticmethod
    def _read_file(full: Path) -> Any | None:
        if not full.exists():
            return None
        with full.open() as f:
            return json.load(f)

    @staticmethod
    def _path(base: Path, key: str) -> Path:
        full = base / f"{key}.json"
        try:
            full.resolve().relative_to(base.resolve())
        except ValueError:
            msg = f"Cache key escapes cache directory: {key}"
            raise ValueError(msg) from None
        return full
