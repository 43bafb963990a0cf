from .core.errors import CatalogNotFoundError, DependencyCycleError, LeafSystemError
from .leafs import LeafSystem, LeafCatalog, LeafManifest, LeafRequirement
from .semver.semver import compareVersions

__version__ = "0.3.0"

__all__ = [
    "LeafSystem",
    "LeafCatalog",
    "LeafManifest",
    "LeafRequirement",
    "LeafSystemError",
    "CatalogNotFoundError",
    "DependencyCycleError",
    "compareVersions",
]
