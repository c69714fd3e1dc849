import pytest

from keyserde.bootstrap import deps
from keyserde.bootstrap.config import loader
from keyserde.core.fixtures import FixtureStore
from keyserde.core.keys import derive_key_material
from keyserde.core.models.keyset import KeyMaterial
from keyserde.infra.catalog import build_formats


@pytest.fixture(scope="session")
def key_material() -> KeyMaterial:
    return derive_key_material()


@pytest.fixture
def formats():
    return build_formats()


@pytest.fixture
def store(tmp_path) -> FixtureStore:
    return FixtureStore(tmp_path / "serialized")


def _clear_caches() -> None:
    for cached in (
        loader.get_cli_args,
        loader.get_configfile,
        deps.get_config,
        deps.get_formats,
        deps.get_runner,
    ):
        cached.cache_clear()


@pytest.fixture
def cli(monkeypatch, tmp_path):
    """
    Run the CLI wiring with a given argv.
    Works from an empty directory so a stray keyserde.yaml is never picked up.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KEYSERDECONFIG", raising=False)
    for name in ("KEYSERDE_FIXTURES_DIR", "KEYSERDE_FORMATS", "KEYSERDE_CHECK_CONSISTENCY"):
        monkeypatch.delenv(name, raising=False)

    def set_argv(*argv: str) -> None:
        monkeypatch.setattr("sys.argv", ["keyserde", *argv])
        _clear_caches()

    yield set_argv
    _clear_caches()
