"""Path management utilities for streamr-chains library."""

from pathlib import Path
from typing import List, Optional

from .constants import DEFAULT_DOCUMENT


def get_data_dir() -> Path:
    """
    Get the directory holding the embedded configuration documents.

    Returns:
        Path to the package's data directory
    """
    return Path(__file__).parent / "data"


def get_document_path(environment: Optional[str] = None) -> Path:
    """
    Get path of the embedded document for an environment.

    Args:
        environment: Environment name (defaults to the full chain catalog)

    Returns:
        Path to data/{environment}.json (the file may not exist)
    """
    if environment is None:
        environment = DEFAULT_DOCUMENT
    return get_data_dir() / f"{environment}.json"


def available_environments() -> List[str]:
    """
    List environments that ship a configuration document.

    Returns:
        Sorted environment names, without the default catalog
    """
    return sorted(
        p.stem for p in get_data_dir().glob("*.json") if p.stem != DEFAULT_DOCUMENT
    )
