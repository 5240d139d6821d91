"""Shared fixtures for discovery tests."""

from pathlib import Path

import pytest

from discovery import RegistryLoader, set_default_options

ASSETS_DIR = Path(__file__).parent / "assets"

CORRECT_RESPONSE = ["ConfigProviderCorrectResponse"]

# Identifiers declared by the providers under tests/assets
ASSET_IDENTIFIERS = [
    "Assets\\Rest\\Action\\ConfigProvider",
    "Assets\\Rest\\DifferentAction\\ConfigProvider",
    "Assets\\Rpc\\CustomAction\\ConfigProvider",
    "RpcActionConfigProvider",
]


class AssetProvider:
    """Stand-in for the providers declared under tests/assets."""

    def __call__(self):
        return list(CORRECT_RESPONSE)


@pytest.fixture(autouse=True)
def reset_default_options():
    """Every test starts and ends with pristine default options."""
    set_default_options({})
    yield
    set_default_options({})


@pytest.fixture
def assets_dir() -> Path:
    return ASSETS_DIR


@pytest.fixture
def registry() -> RegistryLoader:
    """Loader knowing every provider declared under tests/assets."""
    return RegistryLoader({identifier: AssetProvider for identifier in ASSET_IDENTIFIERS})
