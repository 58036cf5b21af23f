import pytest

from appdeck.metadata_store import MetadataStore
from appdeck.models import RawBundle
from appdeck.settings import reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real ~/Library/Application Support."""
    monkeypatch.setenv("APPDECK_CONFIG_DIR", str(tmp_path / "appdeck-config"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "appdeck-config" / "config.json"


@pytest.fixture
def store(config_path):
    return MetadataStore(config_path)


@pytest.fixture
def make_app(tmp_path):
    """Create an empty <name>.app directory and return its path as str."""
    def _make(name, parent="Applications"):
        p = tmp_path / parent / f"{name}.app"
        p.mkdir(parents=True, exist_ok=True)
        return str(p)
    return _make


class FakeProbe:
    """Stands in for discover_bundles; counts calls."""

    def __init__(self, paths=()):
        self.paths = list(paths)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        bundles = []
        for p in self.paths:
            name = p.rsplit("/", 1)[-1][: -len(".app")]
            bundles.append(RawBundle(path=p, display_name=name, is_system=False, last_modified=0))
        return sorted(bundles, key=lambda b: b.display_name.lower())


@pytest.fixture
def fake_probe():
    return FakeProbe()
