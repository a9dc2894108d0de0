from .cache_store import CacheEntry, CacheStore, LoadOutcome

__all__ = ["CacheEntry", "CacheStore", "LoadOutcome"]
