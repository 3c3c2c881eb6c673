"""Application models package."""

from storefront.models.cache_entry import CacheEntry

__all__ = ["CacheEntry"]
