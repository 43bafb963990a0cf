from leafkit.app.settings import (
    SETTINGS,
    clearSettingsCache,
    deepMerge,
    loadSettings,
    settings,
    settingsBool,
)


def test_deepMerge_merges_objects_and_replaces_the_rest():
    base = {"a": {"x": 1, "y": [1, 2]}, "b": "keep"}
    override = {"a": {"y": [3], "z": None}, "c": True}

    merged = deepMerge(base, override)

    assert merged == {"a": {"x": 1, "y": [3], "z": None}, "b": "keep", "c": True}
    assert base == {"a": {"x": 1, "y": [1, 2]}, "b": "keep"}


def test_defaults_without_any_file():
    assert settings("leafs.prefix") == "ETH"
    assert settings("project.sourceDir") == "src"
    assert settings("catalog.root", "fallback") == "fallback"
    assert settings("no.such.key", 42) == 42
    assert settingsBool("leafs.rejectDependencyCycles", True) is False


def test_user_settings_overlay(isolatedSettings):
    userDir = isolatedSettings / ".leafkit"
    userDir.mkdir()
    (userDir / "leafkit.json5").write_text(
        "// user overrides\n{ leafs: { prefix: 'LEAF' }, logging: { level: 'debug' } }",
        encoding="utf-8",
    )
    clearSettingsCache()

    assert settings("leafs.prefix") == "LEAF"
    assert settings("leafs.manifestFile") == "leaf.json"
    assert settings("logging.level") == "debug"


def test_project_settings_override_user_settings(isolatedSettings, projectRoot):
    userDir = isolatedSettings / ".leafkit"
    userDir.mkdir()
    (userDir / "leafkit.json5").write_text("{ project: { sourceDir: 'lib' } }", encoding="utf-8")
    (projectRoot / "leafkit.json5").write_text("{ project: { sourceDir: 'app' } }", encoding="utf-8")
    clearSettingsCache()

    assert settings("project.sourceDir") == "lib"
    assert settings("project.sourceDir", projectRoot=projectRoot) == "app"


def test_malformed_settings_file_is_ignored(isolatedSettings, caplog):
    userDir = isolatedSettings / ".leafkit"
    userDir.mkdir()
    (userDir / "leafkit.json5").write_text("{ leafs: ", encoding="utf-8")
    clearSettingsCache()

    with caplog.at_level("ERROR", logger="leafkit.app.settings"):
        assert settings("leafs.prefix") == "ETH"
    assert "Failed to parse" in caplog.text


def test_non_object_settings_file_is_ignored(isolatedSettings):
    userDir = isolatedSettings / ".leafkit"
    userDir.mkdir()
    (userDir / "leafkit.json5").write_text("[1, 2, 3]", encoding="utf-8")
    clearSettingsCache()

    assert settings("leafs.prefix") == "ETH"


def test_loadSettings_returns_a_copy():
    first = loadSettings()
    first["leafs"]["prefix"] = "MUTATED"

    assert loadSettings()["leafs"]["prefix"] == "ETH"
    assert SETTINGS["leafs"]["prefix"] == "ETH"


def test_settingsBool_coerces_truthy_values(projectRoot):
    (projectRoot / "leafkit.json5").write_text("{ debug: { devModeEnabled: 1 } }", encoding="utf-8")

    assert settingsBool("debug.devModeEnabled", projectRoot=projectRoot) is True
    assert settingsBool("debug.missing", True, projectRoot=projectRoot) is True


def test_settingsBool_understands_strings(projectRoot):
    (projectRoot / "leafkit.json5").write_text(
        "{ leafs: { rejectDependencyCycles: 'yes' }, debug: { devModeEnabled: 'maybe' } }",
        encoding="utf-8",
    )

    assert settingsBool("leafs.rejectDependencyCycles", projectRoot=projectRoot) is True
    assert settingsBool("debug.devModeEnabled", True, projectRoot=projectRoot) is True
    assert settingsBool("debug.devModeEnabled", False, projectRoot=projectRoot) is False
