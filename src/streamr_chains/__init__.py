"""
streamr-chains: Python library for Streamr multi-chain contract and RPC configuration
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ChainConfigError,
    ChainIdMismatchError,
    ConfigParseError,
    ContractNotFoundError,
    InvalidAddressFormatError,
    InvalidChainIdError,
    InvalidChainNameError,
    InvalidEnvironmentValueError,
    MissingEnvironmentVariableError,
    NoRPCEndpointError,
    UnknownEnvironmentError,
    UnknownNetworkError,
    UnknownOperationError,
)
from .operations import ConfigOperation, StreamrConfigParameter, parse_operation
from .paths import available_environments
from .registry import (
    ChainConfigRegistry,
    load,
    load_document,
    load_from_process_environment,
    load_path,
)
from .rpc import fetch_chain_id, resolve_rpc_url, verify_chain_id
from .types import Address, EntryPoint, NativeCurrency, Network, RPCEndpoint, RPCProtocol

try:
    __version__ = version("streamr-chains")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ChainConfigRegistry",
    "load",
    "load_document",
    "load_from_process_environment",
    "load_path",
    "available_environments",
    "Address",
    "Network",
    "RPCEndpoint",
    "RPCProtocol",
    "NativeCurrency",
    "EntryPoint",
    "resolve_rpc_url",
    "fetch_chain_id",
    "verify_chain_id",
    "ConfigOperation",
    "StreamrConfigParameter",
    "parse_operation",
    "ChainConfigError",
    "ConfigParseError",
    "InvalidAddressFormatError",
    "InvalidChainIdError",
    "InvalidChainNameError",
    "MissingEnvironmentVariableError",
    "InvalidEnvironmentValueError",
    "UnknownEnvironmentError",
    "UnknownNetworkError",
    "ContractNotFoundError",
    "NoRPCEndpointError",
    "ChainIdMismatchError",
    "UnknownOperationError",
]
