from __future__ import annotations

from monoguard.cache.setup import get_cache_path, resolve_cache_path

__all__ = ["get_cache_path", "resolve_cache_path"]
