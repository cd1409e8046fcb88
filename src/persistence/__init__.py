"""
Persistent feature state that survives client teardown mid-round
"""

from .base import PersistentFeatureStore
from .sticky_wilds import STICKY_KEY_AXES, StickyCoordinate, StickyWildStore
from .store_manager import PersistentStoreManager

__all__ = [
    "PersistentFeatureStore",
    "PersistentStoreManager",
    "STICKY_KEY_AXES",
    "StickyCoordinate",
    "StickyWildStore",
]
