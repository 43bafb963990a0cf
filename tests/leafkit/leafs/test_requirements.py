import pytest

from leafkit.leafs.manifest import LeafRequirement


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("export {}\n", encoding="utf-8")
    return path


def test_model_found_in_primary_model_dir(system, projectRoot):
    found = _touch(projectRoot / "src" / "models" / "User.ts")

    result = system.checkRequirement(LeafRequirement(type="model", name="User"), projectRoot)

    assert result.satisfied
    assert result.foundPath == found


def test_model_found_in_alternate_spelling_dir(system, projectRoot):
    found = _touch(projectRoot / "src" / "model" / "User.js")

    result = system.checkRequirement(LeafRequirement(type="model", name="User"), projectRoot)

    assert result.satisfied
    assert result.foundPath == found


def test_model_found_inside_another_installed_leaf(system, projectRoot, installLeaf):
    leafDir = installLeaf("ETHUserLeaf")
    found = _touch(leafDir / "models" / "User.ts")

    result = system.checkRequirement(LeafRequirement(type="model", name="User"), projectRoot)

    assert result.satisfied
    assert result.foundPath == found


def test_primary_location_wins_over_leaf_models(system, projectRoot, installLeaf):
    _touch(installLeaf("ETHUserLeaf") / "models" / "User.ts")
    primary = _touch(projectRoot / "src" / "models" / "User.ts")

    result = system.checkRequirement(LeafRequirement(type="model", name="User"), projectRoot)

    assert result.foundPath == primary


def test_model_missing(system, projectRoot, installLeaf):
    installLeaf("ETHMediaLeaf")
    _touch(projectRoot / "src" / "models" / "Users.ts")

    result = system.checkRequirement(LeafRequirement(type="model", name="User"), projectRoot)

    assert not result.satisfied
    assert result.foundPath is None


def test_explicit_path_is_the_only_candidate(system, projectRoot):
    _touch(projectRoot / "src" / "models" / "User.ts")
    requirement = LeafRequirement(type="model", name="User", path="lib/db/User.ts")

    assert not system.checkRequirement(requirement, projectRoot).satisfied

    found = _touch(projectRoot / "lib" / "db" / "User.ts")
    result = system.checkRequirement(requirement, projectRoot)
    assert result.satisfied
    assert result.foundPath == found


def test_explicit_absolute_path(system, projectRoot, tmp_path):
    outside = _touch(tmp_path / "shared" / "Config.ts")
    requirement = LeafRequirement(type="file", name="Config.ts", path=str(outside))

    assert system.checkRequirement(requirement, projectRoot).foundPath == outside


@pytest.mark.parametrize("reqType", ["file", "directory"])
def test_file_and_directory_search_src_then_root(system, projectRoot, reqType):
    requirement = LeafRequirement(type=reqType, name="uploads")
    rootLevel = projectRoot / "uploads"
    rootLevel.mkdir()

    assert system.checkRequirement(requirement, projectRoot).foundPath == rootLevel

    srcLevel = projectRoot / "src" / "uploads"
    srcLevel.mkdir()
    assert system.checkRequirement(requirement, projectRoot).foundPath == srcLevel


def test_checkAll_and_checkMissing(system, projectRoot, makeLeaf):
    makeLeaf(
        "ETHPaymentLeaf",
        requirements=[
            {"type": "model", "name": "User", "description": "User model"},
            {"type": "file", "name": "Config.ts", "description": "Project config"},
        ],
    )
    _touch(projectRoot / "src" / "Config.ts")

    results = system.checkAllRequirements("ETHPaymentLeaf", projectRoot)
    missing = system.getMissingRequirements("ETHPaymentLeaf", projectRoot)

    assert [result.satisfied for result in results] == [False, True]
    assert [result.requirement.name for result in missing] == ["User"]


def test_checkAll_without_manifest_or_requirements(system, projectRoot, makeLeaf):
    makeLeaf("ETHBareLeaf", withManifest=False)
    makeLeaf("ETHUserLeaf")

    assert system.checkAllRequirements("ETHBareLeaf", projectRoot) == []
    assert system.checkAllRequirements("ETHUserLeaf", projectRoot) == []
    assert system.getMissingRequirements("ETHUnknown", projectRoot) == []
