"""Tutorial progress & discovery engine, independent from the persistence layer."""

from .catalog import Catalog, CatalogSource
from .discovery import DEFAULT_PAGE_SIZE, DiscoveryFilters, DiscoveryPage, discover
from .errors import MutationResult, PersistenceError
from .ledger import ProgressLedger, ProgressStore
from .stats import derive_stats
from .types import Category, Difficulty, LearningStats, ProgressRecord, ProgressStatus, Tutorial

__all__ = [
    "Catalog",
    "CatalogSource",
    "Category",
    "DEFAULT_PAGE_SIZE",
    "Difficulty",
    "DiscoveryFilters",
    "DiscoveryPage",
    "LearningStats",
    "MutationResult",
    "PersistenceError",
    "ProgressLedger",
    "ProgressRecord",
    "ProgressStatus",
    "ProgressStore",
    "Tutorial",
    "derive_stats",
    "discover",
]
