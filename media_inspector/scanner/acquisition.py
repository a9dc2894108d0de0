import sys
from typing import Optional, Protocol

from ..core.identity import identity_of, signature_of
from ..database.cache_store import CacheStore
from ..models.probe_record import ProbeRecord


class Prober(Protocol):
    """Anything that can turn a path into a ProbeRecord (MediaProbe, test fakes)."""

    def probe(self, filepath: str) -> ProbeRecord:
        ...


class ProbeAcquirer:
    """
    Orchestrates "get metadata for this file":
    1. Identity & signature
    2. Cache lookup (hit -> no subprocess)
    3. Probe on miss
    4. Best-effort cache write
    """
    def __init__(self, store: CacheStore, prober: Prober):
        self.store = store
        self.prober = prober
        self.hits = 0
        self.misses = 0

    def lookup(self, path: str) -> Optional[ProbeRecord]:
        """Cached record for `path` if it is still fresh. Raises OSError."""
        return self.store.get(identity_of(path), signature_of(path))

    def is_cached(self, path: str) -> bool:
        try:
            return self.lookup(path) is not None
        except OSError:
            return False

    def acquire(self, path: str) -> ProbeRecord:
        """
        Metadata for one file. Raises OSError when the file cannot be
        resolved or stat'ed and ProbeError when ffprobe fails.
        """
        identity = identity_of(path)
        signature = signature_of(path)

        cached = self.store.get(identity, signature)
        if cached is not None:
            self.hits += 1
            return cached

        record = self.prober.probe(path)
        self.misses += 1

        try:
            self.store.put(identity, signature, record)
        except (OSError, ValueError) as e:
            print(f"\n⚠️ Could not write cache for {path}: {e}", file=sys.stderr)
        return record
