"""RPC endpoint helpers for streamr-chains library."""

import logging
import os
import re
from typing import Mapping, Optional, Union

import requests

from .constants import RPC_URL_ENV_SUFFIX
from .exceptions import ChainIdMismatchError, NoRPCEndpointError
from .types import Network, RPCProtocol

logger = logging.getLogger(__name__)


def rpc_url_env_var(network: Union[Network, str]) -> str:
    """
    Name of the environment variable overriding a network's RPC URL.

    Args:
        network: Network or network name, e.g. "polygonAmoy"

    Returns:
        Variable name, e.g. "POLYGON_AMOY_RPC_URL"
    """
    name = network.name if isinstance(network, Network) else network
    # camelCase -> CAMEL_CASE
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    return re.sub(r"[^A-Za-z0-9]", "_", name).upper() + RPC_URL_ENV_SUFFIX


def resolve_rpc_url(
    network: Network,
    rpc_url: Optional[str] = None,
    protocol: RPCProtocol = RPCProtocol.HTTP,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Resolve the RPC URL to use for a network.

    Precedence: explicit rpc_url, then the <NETWORK>_RPC_URL environment
    variable, then the first configured endpoint of the protocol.

    Args:
        network: Network configuration
        rpc_url: Explicit URL (wins over everything else)
        protocol: Protocol of the configured endpoint to fall back to
        environ: Environment variables to read (defaults to os.environ)

    Returns:
        RPC URL

    Raises:
        NoRPCEndpointError: If no URL can be resolved
    """
    if rpc_url:
        return rpc_url

    if environ is None:
        environ = os.environ

    env_var = rpc_url_env_var(network)
    if environ.get(env_var):
        logger.debug("Using %s for network %s", env_var, network.name)
        return environ[env_var]

    endpoints = network.get_rpc_endpoints_by_protocol(protocol)
    if not endpoints:
        raise NoRPCEndpointError(
            f"No {protocol.value} RPC endpoint configured for network '{network.name}', "
            f"set ${env_var} or pass rpc_url"
        )
    return endpoints[0].url


def fetch_chain_id(rpc_url: str, timeout: float = 30) -> int:
    """
    Ask an RPC endpoint for its chain ID.

    Args:
        rpc_url: HTTP RPC endpoint URL
        timeout: Request timeout in seconds

    Returns:
        Chain ID reported by eth_chainId

    Raises:
        ValueError: If RPC returns an error or a malformed result
        RuntimeError: If network error occurs
    """
    logger.debug("Requesting eth_chainId from %s", rpc_url)
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": "eth_chainId",
                "params": [],
                "id": 1,
            },
            timeout=timeout,
        )

        if response.status_code != 200:
            raise RuntimeError(f"RPC request failed with status {response.status_code}")

        result = response.json()
        if not isinstance(result, dict):
            raise ValueError(f"Malformed eth_chainId response: {result!r}")

        if "error" in result:
            raise ValueError(f"RPC error: {result['error']}")

        try:
            return int(result["result"], 16)
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"Malformed eth_chainId response: {result!r}") from None

    except requests.RequestException as e:
        raise RuntimeError(f"Network error during RPC call: {e}") from e


def verify_chain_id(
    network: Network,
    rpc_url: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    timeout: float = 30,
) -> int:
    """
    Check that a network's RPC endpoint serves the configured chain.

    Args:
        network: Network configuration
        rpc_url: Explicit URL (defaults to resolve_rpc_url())
        environ: Environment variables to read (defaults to os.environ)
        timeout: Request timeout in seconds

    Returns:
        The verified chain ID

    Raises:
        ChainIdMismatchError: If the endpoint reports a different chain ID
        NoRPCEndpointError: If no URL can be resolved
        RuntimeError: If network error occurs
    """
    url = resolve_rpc_url(network, rpc_url, environ=environ)
    chain_id = fetch_chain_id(url, timeout=timeout)
    if chain_id != network.chain_id:
        raise ChainIdMismatchError(
            f"RPC endpoint {url} serves chain ID {chain_id}, "
            f"but network '{network.name}' is configured with {network.chain_id}"
        )
    return chain_id
