"""Named query management utilities."""

from .query_manifest import NamedQuery, QueryForest, QueryManifestError, QueryManifestManager

__all__ = [
    "NamedQuery",
    "QueryForest",
    "QueryManifestError",
    "QueryManifestManager",
]
