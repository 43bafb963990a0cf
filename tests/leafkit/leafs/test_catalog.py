import pytest

from leafkit.core.errors import CatalogNotFoundError
from leafkit.leafs import catalog as catalogModule
from leafkit.leafs.catalog import LeafCatalog
from leafkit.leafs.constants import CATALOG_ENV_VAR


def test_listAvailable_only_prefixed_directories(catalogRoot, makeLeaf):
    makeLeaf("ETHUserLeaf")
    makeLeaf("ETHMediaLeaf", withManifest=False)
    (catalogRoot / "templates").mkdir()
    (catalogRoot / "ETHREADME.md").write_text("not a leaf", encoding="utf-8")

    catalog = LeafCatalog(catalogRoot)

    assert catalog.listAvailable() == ["ETHMediaLeaf", "ETHUserLeaf"]


def test_exists(catalogRoot, makeLeaf):
    makeLeaf("ETHUserLeaf")
    catalog = LeafCatalog(catalogRoot)

    assert catalog.exists("ETHUserLeaf")
    assert not catalog.exists("ETHNope")
    assert not catalog.exists("")
    assert not catalog.exists("../catalog")


def test_missing_catalog_lists_nothing(tmp_path, monkeypatch):
    monkeypatch.setattr(LeafCatalog, "_candidateRoots", lambda self: [tmp_path / "nowhere"])
    catalog = LeafCatalog()

    assert catalog.listAvailable() == []
    assert not catalog.exists("ETHUserLeaf")
    with pytest.raises(CatalogNotFoundError) as excInfo:
        catalog.root()
    assert str(tmp_path / "nowhere") in excInfo.value.searched


def test_explicit_root_that_is_missing_is_not_fatal_for_listing(tmp_path):
    catalog = LeafCatalog(tmp_path / "missing")

    assert catalog.listAvailable() == []
    with pytest.raises(CatalogNotFoundError):
        catalog.root()


def test_env_var_root(monkeypatch, catalogRoot, makeLeaf):
    makeLeaf("ETHPulseLeaf")
    monkeypatch.setenv(CATALOG_ENV_VAR, str(catalogRoot))

    assert LeafCatalog().listAvailable() == ["ETHPulseLeaf"]


def test_settings_root(isolatedSettings, catalogRoot, makeLeaf):
    makeLeaf("ETHDeviceLeaf")
    settingsDir = isolatedSettings / ".leafkit"
    settingsDir.mkdir()
    (settingsDir / "leafkit.json5").write_text(
        "{catalog: {root: '%s'}}" % catalogRoot.as_posix(),
        encoding="utf-8",
    )

    assert LeafCatalog().root() == catalogRoot


def test_falls_back_to_vendored_catalog(tmp_path, monkeypatch):
    vendored = tmp_path / "node_modules" / "etherial" / "resources" / "leafs"
    (vendored / "ETHUserLeaf").mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(catalogModule, "BUNDLED_LEAFS_DIR", tmp_path / "no-bundle")

    assert LeafCatalog().listAvailable() == ["ETHUserLeaf"]


def test_custom_prefix_layout(catalogRoot, makeLeaf):
    from leafkit.leafs.layout import LeafLayout

    makeLeaf("ETHUserLeaf")
    makeLeaf("LeafBilling")
    catalog = LeafCatalog(catalogRoot, layout=LeafLayout(prefix="Leaf"))

    assert catalog.listAvailable() == ["LeafBilling"]
