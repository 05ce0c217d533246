"""Main API for streamr-chains library."""

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Union

from .constants import ENVIRONMENT_VARIABLE, RECOGNIZED_ENVIRONMENTS
from .exceptions import (
    ConfigParseError,
    InvalidEnvironmentValueError,
    MissingEnvironmentVariableError,
    UnknownEnvironmentError,
    UnknownNetworkError,
)
from .parsers import parse_document
from .paths import available_environments, get_document_path
from .types import Network

logger = logging.getLogger(__name__)


class ChainConfigRegistry:
    """Read-only lookup of network configuration by network name."""

    def __init__(
        self, networks: Mapping[str, Network], environment: Optional[str] = None
    ):
        """
        Initialize the registry.

        Args:
            networks: Mapping of network name -> Network (copied)
            environment: Environment the networks were loaded for
                         (None for the full chain catalog)
        """
        self._networks = MappingProxyType(dict(networks))
        self._environment = environment

    @property
    def environment(self) -> Optional[str]:
        """Environment this registry was loaded for."""
        return self._environment

    def has_network(self, network: str) -> bool:
        """
        Check if a network is configured.

        Args:
            network: Network name to check

        Returns:
            True if network exists in registry, False otherwise
        """
        return network in self._networks

    def get(self, network: str) -> Network:
        """
        Get configuration of a network.

        Args:
            network: Network name, e.g. "polygon"

        Returns:
            Network configuration

        Raises:
            UnknownNetworkError: If network not in registry
        """
        if not self.has_network(network):
            raise UnknownNetworkError(
                f"Network '{network}' not found, available networks: "
                f"{', '.join(self.names())}"
            )
        return self._networks[network]

    def by_chain_id(self, chain_id: int) -> Network:
        """
        Get configuration of the network with a given chain ID.

        Args:
            chain_id: Chain ID, e.g. 137

        Returns:
            First network (in document order) with that chain ID

        Raises:
            UnknownNetworkError: If no network has that chain ID
        """
        for network in self._networks.values():
            if network.chain_id == chain_id:
                return network
        raise UnknownNetworkError(f"No network with chain ID {chain_id}")

    def names(self) -> List[str]:
        """Network names in document order."""
        return list(self._networks.keys())

    def networks(self) -> List[Network]:
        """Networks in document order."""
        return list(self._networks.values())

    def __getitem__(self, network: str) -> Network:
        return self.get(network)

    def __contains__(self, network: object) -> bool:
        return network in self._networks

    def __iter__(self) -> Iterator[str]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainConfigRegistry):
            return NotImplemented
        return (
            self._environment == other._environment
            and dict(self._networks) == dict(other._networks)
        )

    def __repr__(self) -> str:
        return f"ChainConfigRegistry(environment={self._environment!r}, networks={self.names()!r})"


def load_document(
    document: Mapping[str, Any], environment: Optional[str] = None
) -> ChainConfigRegistry:
    """
    Build a registry from an in-memory configuration document.

    Args:
        document: Mapping of network name -> network entry
        environment: Environment name to record on the registry

    Returns:
        Fully validated registry

    Raises:
        ConfigParseError: If the document is malformed
        InvalidAddressFormatError: If any contract address is malformed
        InvalidChainIdError: If any chain ID is not positive
    """
    networks = parse_document(document)
    logger.debug("Parsed %d networks for environment %s", len(networks), environment)
    return ChainConfigRegistry(networks, environment)


def load_path(
    path: Union[Path, str], environment: Optional[str] = None
) -> ChainConfigRegistry:
    """
    Build a registry from a JSON configuration file.

    Args:
        path: Path to the JSON document
        environment: Environment name to record on the registry

    Returns:
        Fully validated registry

    Raises:
        ConfigParseError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    logger.debug("Loading chain configuration from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise ConfigParseError(f"Configuration document not found at {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Configuration document {path} is not valid JSON: {e}") from e

    return load_document(document, environment)


def load(environment: Optional[str] = None) -> ChainConfigRegistry:
    """
    Load the embedded configuration of an environment.

    Any environment with a shipped document is accepted; see
    available_environments().

    Args:
        environment: Environment name, e.g. "production"
                     (defaults to the full chain catalog)

    Returns:
        Fully validated registry

    Raises:
        UnknownEnvironmentError: If no document ships for the environment
        ConfigParseError: If the embedded document is malformed
    """
    if environment is not None and environment not in available_environments():
        raise UnknownEnvironmentError(
            f"No configuration for environment '{environment}', available environments: "
            f"{', '.join(available_environments())}"
        )

    return load_path(get_document_path(environment), environment)


def load_from_process_environment(
    environ: Optional[Mapping[str, str]] = None,
) -> ChainConfigRegistry:
    """
    Load the configuration selected by the NODE_ENV environment variable.

    Only "production" and "development" are accepted here, unlike load().

    Args:
        environ: Environment variables to read (defaults to os.environ)

    Returns:
        Registry for the selected environment

    Raises:
        MissingEnvironmentVariableError: If NODE_ENV is unset or empty
        InvalidEnvironmentValueError: If NODE_ENV is not a recognized value
    """
    if environ is None:
        environ = os.environ

    value = environ.get(ENVIRONMENT_VARIABLE)
    expected = " or ".join(f"'{e}'" for e in RECOGNIZED_ENVIRONMENTS)
    if not value:
        raise MissingEnvironmentVariableError(
            f"{ENVIRONMENT_VARIABLE} environment variable is not set, "
            f"expected {expected}"
        )
    if value not in RECOGNIZED_ENVIRONMENTS:
        raise InvalidEnvironmentValueError(
            f"{ENVIRONMENT_VARIABLE} environment variable value must be either "
            f"{expected}, got '{value}'"
        )

    return load(value)
