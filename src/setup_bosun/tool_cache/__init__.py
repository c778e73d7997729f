"""
Tool cache for setup-bosun.

This package handles:
1. Looking up previously installed tool versions
2. Copying freshly extracted tools into the cache
3. Marking cache entries as complete
"""

from .cache_manager import ToolCache, normalize_version

__all__ = ["ToolCache", "normalize_version"]
