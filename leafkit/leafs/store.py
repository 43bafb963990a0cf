# leafkit/leafs/store.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import json5
from pydantic import ValidationError

from leafkit.core.errors import CatalogNotFoundError
from leafkit.leafs.catalog import LeafCatalog
from leafkit.leafs.layout import LeafLayout
from leafkit.leafs.manifest import LeafManifest
from leafkit.semver.semver import isStrictSemVer

logger = logging.getLogger(__name__)

__all__ = ["ManifestLookup", "ManifestStore", "loadManifestFile"]

LookupStatus = Literal["found", "notFound", "malformed"]



@dataclass(frozen=True, slots=True)
class ManifestLookup:
    """
    Tagged outcome of reading one manifest file.

      - found:     `manifest` is set
      - notFound:  no file at `path` (or no catalog at all, `path` is None)
      - malformed: file exists but is not valid json5 or fails validation; see `detail`
    """
    status: LookupStatus
    path: Path | None
    manifest: LeafManifest | None = None
    detail: str | None = None

    @property
    def found(self) -> bool:
        return self.status == "found"



def loadManifestFile(manifestPath: Path) -> ManifestLookup:
    if not manifestPath.is_file():
        logger.debug("No leaf manifest at '%s'", manifestPath)
        return ManifestLookup("notFound", manifestPath)
    try:
        raw = json5.loads(manifestPath.read_text(encoding="utf-8"))
        manifest = LeafManifest.model_validate(raw)
    except (OSError, ValueError, ValidationError) as err:
        detail = f"{type(err).__name__}: {err}"
        logger.warning("Ignoring malformed leaf manifest at '%s': %s", manifestPath, detail)
        return ManifestLookup("malformed", manifestPath, detail=detail)

    if not isStrictSemVer(manifest.version):
        logger.debug("Leaf manifest '%s' declares non-semver version %r", manifestPath, manifest.version)
    return ManifestLookup("found", manifestPath, manifest=manifest)



class ManifestStore:
    """
    Reads leaf manifests from the catalog and from a project's installed copies.

    Never writes and never caches: every call reflects the file on disk.
    """

    def __init__(self, catalog: LeafCatalog, *, layout: LeafLayout | None = None) -> None:
        self.catalog = catalog
        self.layout = layout or catalog.layout

    # ----- Tagged lookups -----

    def lookupCatalogManifest(self, leafName: str) -> ManifestLookup:
        if not self.layout.isSafeName(leafName):
            return ManifestLookup("notFound", None)
        try:
            leafDir = self.catalog.leafPath(leafName)
        except CatalogNotFoundError as err:
            logger.debug("Catalog manifest for '%s' unavailable: %s", leafName, err)
            return ManifestLookup("notFound", None)
        return loadManifestFile(leafDir / self.layout.manifestFile)

    def lookupInstalledManifest(self, leafName: str, projectRoot: str | Path) -> ManifestLookup:
        if not self.layout.isSafeName(leafName):
            return ManifestLookup("notFound", None)
        layout = self.layout.forProject(projectRoot)
        return loadManifestFile(layout.leafDir(projectRoot, leafName) / layout.manifestFile)

    # ----- Absent-returning adapters -----

    def readCatalogManifest(self, leafName: str) -> LeafManifest | None:
        return self.lookupCatalogManifest(leafName).manifest

    def readInstalledManifest(self, leafName: str, projectRoot: str | Path) -> LeafManifest | None:
        return self.lookupInstalledManifest(leafName, projectRoot).manifest

    def hasCatalogManifest(self, leafName: str) -> bool:
        """True when a manifest file exists in the catalog, even if it fails to parse."""
        return self.lookupCatalogManifest(leafName).status != "notFound"
