# leafkit/leafs/catalog.py
from __future__ import annotations
import logging
import os
from pathlib import Path

from leafkit.app.paths import BUNDLED_LEAFS_DIR
from leafkit.app.settings import settings
from leafkit.core.errors import CatalogNotFoundError
from leafkit.leafs.constants import CATALOG_ENV_VAR, VENDORED_CATALOG_RELPATH
from leafkit.leafs.layout import LeafLayout

logger = logging.getLogger(__name__)

__all__ = ["LeafCatalog"]



class LeafCatalog:
    """
    Read-only view over the directory that holds canonical leaf definitions.

    Root lookup order (first hit wins):
      1) explicit `root` argument
      2) $LEAFKIT_CATALOG_ROOT
      3) setting `catalog.root`
      4) first existing of: bundled leafkit/resources/leafs,
         <cwd>/node_modules/etherial/resources/leafs
    Configured roots (1-3) are used as given; only the fallbacks in 4 are
    checked for existence.
    """

    def __init__(self, root: str | Path | None = None, *, layout: LeafLayout | None = None) -> None:
        self._explicitRoot = Path(root) if root is not None else None
        self.layout = layout or LeafLayout.fromSettings()

    # ----- Root lookup -----

    def _candidateRoots(self) -> list[Path]:
        return [BUNDLED_LEAFS_DIR, Path.cwd() / VENDORED_CATALOG_RELPATH]

    def root(self) -> Path:
        """Return the catalog root directory or raise CatalogNotFoundError."""
        configured = self._explicitRoot
        if configured is None and os.environ.get(CATALOG_ENV_VAR):
            configured = Path(os.environ[CATALOG_ENV_VAR])
        if configured is None and settings("catalog.root", None):
            configured = Path(str(settings("catalog.root")))

        if configured is not None:
            configured = configured.expanduser()
            if configured.is_dir():
                return configured
            raise CatalogNotFoundError(
                f"Leaf catalog '{configured}' is not a directory",
                searched=[str(configured)],
            )

        candidates = self._candidateRoots()
        for candidate in candidates:
            if candidate.is_dir():
                return candidate
        raise CatalogNotFoundError(
            "Cannot find leaf catalog folder",
            searched=[str(candidate) for candidate in candidates],
        )

    # ----- Queries -----

    def leafPath(self, leafName: str) -> Path:
        return self.root() / leafName

    def listAvailable(self) -> list[str]:
        """Names of catalog directories carrying the leaf prefix; [] when there is no catalog."""
        try:
            root = self.root()
            entries = sorted(root.iterdir(), key=lambda entry: entry.name)
        except CatalogNotFoundError as err:
            logger.debug("No leaf catalog available: %s (searched %s)", err, err.searched)
            return []
        except OSError as err:
            logger.warning("Cannot list leaf catalog: %s", err)
            return []
        return [
            entry.name
            for entry in entries
            if entry.is_dir() and self.layout.isLeafName(entry.name)
        ]

    def exists(self, leafName: str) -> bool:
        if not self.layout.isSafeName(leafName):
            return False
        try:
            return self.leafPath(leafName).exists()
        except CatalogNotFoundError:
            return False
