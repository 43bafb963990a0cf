# leafkit/cli/commands.py
from __future__ import annotations
import argparse
import logging
from pathlib import Path

from leafkit.app.settings import settingsBool
from leafkit.leafs.manifest import LeafManifest
from leafkit.leafs.system import LeafSystem
from .prompts import Confirm

logger = logging.getLogger(__name__)

__all__ = [
    "listCommand",
    "addCommand",
    "removeCommand",
    "updateCommand",
    "outdatedCommand",
    "checkCommand",
]

_RULE = "-" * 60



def _project(args: argparse.Namespace) -> Path:
    return Path(args.project).expanduser()



def _printAvailable(system: LeafSystem) -> None:
    available = system.listAvailable()
    if available:
        print("Available leafs:")
        for leafName in available:
            print(f"  - {leafName}")



def _printInstallSummary(leafName: str, manifest: LeafManifest | None, sourceDir: str) -> None:
    if manifest is None:
        print(f"{leafName} installed in {sourceDir}/{leafName}/")
        return
    print(f"{manifest.name} v{manifest.version} installed in {sourceDir}/{leafName}/")
    requiredEnv = manifest.requiredEnv()
    if requiredEnv:
        print("Required environment variables: " + ", ".join(env.key for env in requiredEnv))
    optionalEnv = manifest.optionalEnv()
    if optionalEnv:
        print("Optional environment variables: " + ", ".join(env.key for env in optionalEnv))



# ------------------------------------------------------------------ #
# list
# ------------------------------------------------------------------ #

def listCommand(args: argparse.Namespace, system: LeafSystem, confirm: Confirm) -> int:
    projectRoot = _project(args)
    available = system.listAvailable()
    if not available:
        print("No leafs available.")
        return 0

    print("Available leafs:\n")
    for leafName in available:
        status = "installed" if system.isLeafInstalledInProject(leafName, projectRoot) else "not installed"
        print(f"  {leafName} ({status})")
        manifest = system.getLeafConfig(leafName)
        if manifest is None:
            continue
        print(f"    v{manifest.version} - {manifest.description}")
        if manifest.dependencies:
            print(f"    leafs: {', '.join(manifest.uniqueDependencies())}")
        if manifest.requirements:
            print("    requires: " + ", ".join(f"{req.type}:{req.name}" for req in manifest.requirements))
    print(_RULE)
    return 0



# ------------------------------------------------------------------ #
# add
# ------------------------------------------------------------------ #

def addCommand(args: argparse.Namespace, system: LeafSystem, confirm: Confirm) -> int:
    projectRoot = _project(args)
    leafName: str = args.name

    if not system.exists(leafName):
        print(f'Leaf "{leafName}" not found.')
        _printAvailable(system)
        return 1

    manifest = system.getLeafConfig(leafName)

    if not args.skip_requirements:
        missingRequirements = system.getMissingRequirements(leafName, projectRoot)
        if missingRequirements:
            print(f"Missing requirements for {leafName}:\n")
            for result in missingRequirements:
                requirement = result.requirement
                print(f"  {requirement.type.upper()}: {requirement.name}")
                if requirement.description:
                    print(f"     {requirement.description}")
                if requirement.hint:
                    print(f"     hint: {requirement.hint}")
            if not args.yes and not confirm("Continue installation anyway? (may cause errors)", False):
                print("Installation cancelled. Satisfy the requirements first or use --skip-requirements.")
                return 1

    strict = args.strict or settingsBool("leafs.rejectDependencyCycles", False, projectRoot=projectRoot)
    withDependencies = not args.skip_deps
    if withDependencies:
        missingDeps = system.getMissingDependencies(leafName, projectRoot)
        if missingDeps:
            print("This leaf requires the following dependencies:\n")
            for dep in missingDeps:
                depManifest = system.getLeafConfig(dep)
                version = f" (v{depManifest.version})" if depManifest is not None else ""
                print(f"  - {dep}{version}")
            if not args.yes and not confirm("Install required dependencies?", True):
                print("Cannot install without dependencies. Use --skip-deps to force.")
                return 1

    results = system.addLeaf(leafName, projectRoot, withDependencies=withDependencies, strict=strict)
    for result in results:
        installedName = result.destinationPath.name
        if not result.success:
            print(f"Failed to install {installedName}: {result.error}")
            return 1
        if installedName != leafName:
            print(f"  {installedName} installed")

    _printInstallSummary(leafName, manifest, system.layout.forProject(projectRoot).sourceDir)
    return 0



# ------------------------------------------------------------------ #
# remove
# ------------------------------------------------------------------ #

def removeCommand(args: argparse.Namespace, system: LeafSystem, confirm: Confirm) -> int:
    projectRoot = _project(args)
    leafName: str = args.name
    relDir = f"{system.layout.forProject(projectRoot).sourceDir}/{leafName}"

    if not system.isLeafInstalledInProject(leafName, projectRoot):
        print(f"Folder {relDir} does not exist.")
        return 1

    if not args.yes and not confirm(f"Are you sure you want to delete {relDir}/?", False):
        print("Cancelled")
        return 1

    if not system.remove(leafName, projectRoot):
        print(f"Failed to remove {leafName}")
        return 1
    print(f"Folder {relDir}/ deleted.")
    return 0



# ------------------------------------------------------------------ #
# update
# ------------------------------------------------------------------ #

def updateCommand(args: argparse.Namespace, system: LeafSystem, confirm: Confirm) -> int:
    projectRoot = _project(args)
    leafName: str | None = args.name

    if leafName:
        if not system.isLeafInstalledInProject(leafName, projectRoot):
            print(f'Leaf "{leafName}" is not installed in {system.layout.forProject(projectRoot).sourceDir}/.')
            return 1
        if not system.exists(leafName):
            print(f'Leaf "{leafName}" does not exist in the catalog.')
            return 1
        toUpdate = [leafName]
    else:
        toUpdate = [name for name in system.listAvailable() if system.isLeafInstalledInProject(name, projectRoot)]

    if not toUpdate:
        print("No installed leafs to update.")
        return 0

    print("Leafs to update:")
    for name in toUpdate:
        info = system.checkUpdate(name, projectRoot)
        drift = f" ({info.installedVersion} -> {info.availableVersion})" if info is not None else ""
        print(f"  - {name}{drift}")

    if not args.yes:
        print("Warning: update will overwrite your local changes.")
        if not confirm(f"Update {len(toUpdate)} leaf(s)?", False):
            print("Cancelled")
            return 1

    failures = 0
    for name in toUpdate:
        result = system.update(name, projectRoot)
        if result.success:
            print(f"  {name} updated")
        else:
            failures += 1
            print(f"  {name}: {result.error}")
    return 1 if failures else 0



# ------------------------------------------------------------------ #
# outdated / check
# ------------------------------------------------------------------ #

def outdatedCommand(args: argparse.Namespace, system: LeafSystem, confirm: Confirm) -> int:
    updates = system.getLeafsWithUpdates(_project(args))
    if not updates:
        print("All installed leafs are up to date.")
        return 0
    for info in updates:
        print(f"  {info.name}: {info.installedVersion} -> {info.availableVersion}")
    return 0



def checkCommand(args: argparse.Namespace, system: LeafSystem, confirm: Confirm) -> int:
    projectRoot = _project(args)
    leafName: str = args.name
    if not system.exists(leafName):
        print(f'Leaf "{leafName}" not found.')
        return 1

    results = system.checkAllRequirements(leafName, projectRoot)
    if not results:
        print(f"{leafName} declares no requirements.")
        return 0
    missing = 0
    for result in results:
        requirement = result.requirement
        if result.satisfied:
            print(f"  ok       {requirement.type}:{requirement.name} ({result.foundPath})")
        else:
            missing += 1
            print(f"  missing  {requirement.type}:{requirement.name}")
    return 1 if missing else 0
