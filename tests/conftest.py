"""Shared pytest fixtures for streamr-chains tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from streamr_chains import ChainConfigRegistry, load, load_document


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_chains_json(fixtures_dir: Path) -> Dict[str, Any]:
    """Load and return the sample chains document fixture."""
    with open(fixtures_dir / "sample_chains.json") as f:
        return json.load(f)


@pytest.fixture
def sample_registry(sample_chains_json: Dict[str, Any]) -> ChainConfigRegistry:
    """Registry built from the sample chains document."""
    return load_document(sample_chains_json, environment="test")


@pytest.fixture
def temp_chains_file(tmp_path: Path, sample_chains_json: Dict[str, Any]) -> Path:
    """Write the sample chains document to a temporary file."""
    path = tmp_path / "chains.json"
    with open(path, "w") as f:
        json.dump(sample_chains_json, f, indent=2)
    return path


@pytest.fixture
def production_registry() -> ChainConfigRegistry:
    """Registry of the embedded production document."""
    return load("production")


@pytest.fixture
def development_registry() -> ChainConfigRegistry:
    """Registry of the embedded development document."""
    return load("development")


@pytest.fixture
def valid_address() -> str:
    """A checksummed address string."""
    return "0xbAA81A0179015bE47Ad439566374F2Bae098686F"
