# leafkit/app/paths.py
from __future__ import annotations
from pathlib import Path



# Root directory structure constants
PACKAGE_DIR = Path(__file__).resolve().parent.parent       # leafkit/
BUNDLED_LEAFS_DIR = PACKAGE_DIR / "resources" / "leafs"    # catalog shipped with the package
USER_SETTINGS_RELPATH = Path(".leafkit") / "leafkit.json5" # under the user's home
PROJECT_SETTINGS_NAME = "leafkit.json5"                    # at a project root
