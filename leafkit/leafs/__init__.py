from .catalog import LeafCatalog
from .installed import InstallRecord, InstalledLeafState, InstalledStateReader
from .installer import FileMaterializer, InstallResult, InstallationOrchestrator, ShutilMaterializer
from .layout import LeafLayout
from .manifest import LeafEnvVar, LeafManifest, LeafRequirement
from .requirements import RequirementCheckResult, RequirementChecker
from .resolver import DependencyResolver, InstallPlan
from .store import ManifestLookup, ManifestStore
from .system import LeafSystem
from .updates import LeafUpdateInfo, UpdateTracker

__all__ = [
    "LeafCatalog",
    "InstallRecord",
    "InstalledLeafState",
    "InstalledStateReader",
    "FileMaterializer",
    "InstallResult",
    "InstallationOrchestrator",
    "ShutilMaterializer",
    "LeafLayout",
    "LeafEnvVar",
    "LeafManifest",
    "LeafRequirement",
    "RequirementCheckResult",
    "RequirementChecker",
    "DependencyResolver",
    "InstallPlan",
    "ManifestLookup",
    "ManifestStore",
    "LeafSystem",
    "LeafUpdateInfo",
    "UpdateTracker",
]
