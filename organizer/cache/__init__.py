"""Cache components composed by organizer.cache_manager.CacheManager."""
