# leafkit/leafs/constants.py
from __future__ import annotations
from pathlib import Path

__all__ = [
    "CATALOG_ENV_VAR",
    "VENDORED_CATALOG_RELPATH",
    "MODELS_SUBDIR",
]



# Environment variable that points at a catalog root, wins over settings.
CATALOG_ENV_VAR = "LEAFKIT_CATALOG_ROOT"

# Catalog vendored inside a project's node_modules (relative to cwd).
VENDORED_CATALOG_RELPATH = Path("node_modules") / "etherial" / "resources" / "leafs"

# Sub-directory of an installed leaf that holds its data models.
MODELS_SUBDIR = "models"
