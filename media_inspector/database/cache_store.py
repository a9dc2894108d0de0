import json
import os
import sys
import tempfile
import threading
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..errors import CacheCorruption
from ..models.probe_record import ProbeRecord


class CacheEntry(BaseModel):
    """Probe result plus the file signature it was taken at."""
    signature: str
    probe: ProbeRecord = Field(..., alias="probe_data")

    class Config:
        populate_by_name = True
        extra = "ignore"


class LoadOutcome(str, Enum):
    FRESH = "fresh"          # cache file read and decoded
    RECOVERED = "recovered"  # cache file corrupt, started empty
    EMPTY = "empty"          # no cache file yet


class CacheStore:
    """
    Persistent probe cache keyed by canonical file path.

    Loaded lazily on first access and rewritten in full after every put.
    A lock guards the in-memory mapping; nothing guards the file against
    other processes (last write wins).
    """
    def __init__(self, cache_file: str):
        self.cache_file = cache_file
        self._entries: Optional[Dict[str, CacheEntry]] = None
        self._lock = threading.Lock()
        self.last_outcome: Optional[LoadOutcome] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> LoadOutcome:
        """
        (Re)reads the cache file. A corrupt file yields an empty cache
        instead of an error; other read failures raise OSError.
        """
        with self._lock:
            return self._load_locked()

    def _load_locked(self) -> LoadOutcome:
        if not os.path.exists(self.cache_file):
            self._entries = {}
            self.last_outcome = LoadOutcome.EMPTY
            return self.last_outcome

        with open(self.cache_file, "rb") as f:
            raw = f.read()

        try:
            self._entries = self._decode(raw)
            self.last_outcome = LoadOutcome.FRESH
        except CacheCorruption as e:
            print(f"ℹ️ Cache at {self.cache_file} is unreadable, starting with an empty cache ({e})", file=sys.stderr)
            self._entries = {}
            self.last_outcome = LoadOutcome.RECOVERED
        return self.last_outcome

    @staticmethod
    def _decode(raw: bytes) -> Dict[str, CacheEntry]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise CacheCorruption(f"not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise CacheCorruption(f"not valid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("entries"), dict):
            raise CacheCorruption("missing 'entries' object")

        try:
            return {
                identity: CacheEntry.model_validate(entry)
                for identity, entry in data["entries"].items()
            }
        except ValidationError as e:
            raise CacheCorruption(f"invalid entry: {e.error_count()} validation error(s)") from e

    def _ensure_loaded(self) -> Dict[str, CacheEntry]:
        # Caller holds the lock
        if self._entries is None:
            self._load_locked()
        return self._entries

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, identity: str, signature: str) -> Optional[ProbeRecord]:
        """Cached record for `identity`, only if it was taken at `signature`."""
        with self._lock:
            entry = self._ensure_loaded().get(identity)
            if entry is None or entry.signature != signature:
                return None
            return entry.probe.model_copy(deep=True)

    def put(self, identity: str, signature: str, record: ProbeRecord) -> None:
        """
        Insert or update an entry, then rewrite the cache file.
        A write failure raises OSError and the in-memory entry stays.
        An entry that cannot be serialised raises ValueError and is dropped
        again, so it cannot break later writes.
        """
        with self._lock:
            entries = self._ensure_loaded()
            previous = entries.get(identity)
            entries[identity] = CacheEntry(signature=signature, probe=record.model_copy(deep=True))
            try:
                self._save_locked()
            except ValueError:
                if previous is None:
                    del entries[identity]
                else:
                    entries[identity] = previous
                raise

    def entries(self) -> List[Tuple[str, ProbeRecord]]:
        """Snapshot of every cached (identity, record) pair."""
        with self._lock:
            return [
                (identity, entry.probe.model_copy(deep=True))
                for identity, entry in self._ensure_loaded().items()
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._ensure_loaded())

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _save_locked(self) -> None:
        """
        Atomic write: temp file in the same directory, then rename over the old file.
        Output is ASCII-escaped so undecodable path names (lone surrogates
        from os.walk) survive the round trip.
        """
        dump_data = {
            "entries": {
                identity: {"signature": entry.signature, "probe_data": entry.probe.to_cache_dict()}
                for identity, entry in self._entries.items()
            }
        }

        cache_dir = os.path.dirname(self.cache_file) or "."
        temp_fd, temp_path = tempfile.mkstemp(dir=cache_dir, prefix=".cache_tmp_", suffix=".json")
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(dump_data, f, indent=2)
            os.replace(temp_path, self.cache_file)
        except BaseException:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
