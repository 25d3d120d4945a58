"""
캐시 저장소 패키지
"""

from .store import CacheStoreBase, JsonFileCacheStore, MemoryCacheStore

__all__ = ["CacheStoreBase", "JsonFileCacheStore", "MemoryCacheStore"]
