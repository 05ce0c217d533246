"""Data types and dataclasses for streamr-chains library."""

import string
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .constants import ADDRESS_LENGTH, ADDRESS_PREFIX
from .exceptions import (
    ContractNotFoundError,
    InvalidAddressFormatError,
    InvalidChainIdError,
    InvalidChainNameError,
    NoRPCEndpointError,
)


@dataclass(frozen=True)
class Address:
    """A contract or account address, 0x followed by 40 hex digits."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidAddressFormatError(
                f"Address must be a string, got {type(self.value).__name__}"
            )
        if len(self.value) != ADDRESS_LENGTH:
            raise InvalidAddressFormatError(
                f"Address must be {ADDRESS_LENGTH} characters long, "
                f"got {len(self.value)}: '{self.value}'"
            )
        digits = self.value[len(ADDRESS_PREFIX):]
        if not self.value.startswith(ADDRESS_PREFIX) or not all(
            c in string.hexdigits for c in digits
        ):
            raise InvalidAddressFormatError(
                f"Address must be '0x' followed by 40 hex digits: '{self.value}'"
            )

    def __str__(self) -> str:
        return self.value

    def lower(self) -> "Address":
        """Return the same address with lowercase hex digits."""
        return Address(self.value.lower())

    def same_as(self, other: Union["Address", str]) -> bool:
        """
        Compare with another address ignoring checksum casing.

        Args:
            other: Address or raw address string

        Returns:
            True if both refer to the same account
        """
        return self.value.lower() == str(other).lower()


class RPCProtocol(Enum):
    """
    Transport of an RPC endpoint.

    Value strings are the "protocol" tags used in configuration documents.
    """

    HTTP = "http"
    WEBSOCKET = "websocket"


@dataclass(frozen=True)
class RPCEndpoint:
    """A network access point."""

    protocol: RPCProtocol
    url: str


@dataclass(frozen=True)
class NativeCurrency:
    """Gas token of a network."""

    symbol: str
    name: str
    decimals: int = 18


@dataclass(frozen=True)
class EntryPoint:
    """Bootstrap node of the streaming network reachable over websocket."""

    node_id: str
    host: str
    port: int
    tls: bool = True


@dataclass(frozen=True)
class Network:
    """
    Configuration of one blockchain network.

    Contracts are exposed as a read-only mapping and RPC endpoints as a tuple,
    so instances handed out by the registry cannot be modified by callers.
    """

    # Required fields
    name: str  # Registry key, e.g. "polygon"
    chain_id: int  # e.g. 137
    environment: str  # e.g. "production"

    contracts: Mapping[str, Address] = field(default_factory=dict, hash=False)
    rpc_endpoints: Tuple[RPCEndpoint, ...] = ()  # Index 0 is the default

    # Optional fields
    display_name: Optional[str] = None  # e.g. "Polygon"
    native_currency: Optional[NativeCurrency] = None
    block_explorer_url: Optional[str] = None
    the_graph_url: Optional[str] = None
    entry_points: Tuple[EntryPoint, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidChainNameError("Chain name is required")
        if (
            isinstance(self.chain_id, bool)
            or not isinstance(self.chain_id, int)
            or self.chain_id <= 0
        ):
            raise InvalidChainIdError(
                f"Chain ID must be a positive integer, got {self.chain_id!r} "
                f"for network '{self.name}'"
            )

        object.__setattr__(self, "contracts", MappingProxyType(dict(self.contracts)))
        object.__setattr__(self, "rpc_endpoints", tuple(self.rpc_endpoints))
        object.__setattr__(self, "entry_points", tuple(self.entry_points))

    def __str__(self) -> str:
        return self.name.lower()

    def get_rpc_endpoints_by_protocol(
        self, protocol: Union[RPCProtocol, str]
    ) -> Tuple[RPCEndpoint, ...]:
        """
        Get configured RPC endpoints of one protocol.

        Args:
            protocol: RPCProtocol or its value ("http" or "websocket")

        Returns:
            Matching endpoints in configured order (empty if none match)
        """
        protocol = RPCProtocol(protocol)
        return tuple(e for e in self.rpc_endpoints if e.protocol is protocol)

    def default_rpc_url(self, protocol: Optional[Union[RPCProtocol, str]] = None) -> str:
        """
        Get the preferred RPC URL.

        Args:
            protocol: Restrict to this protocol (defaults to any)

        Returns:
            URL of the first matching endpoint

        Raises:
            NoRPCEndpointError: If no endpoint matches
        """
        if protocol is None:
            endpoints = self.rpc_endpoints
        else:
            endpoints = self.get_rpc_endpoints_by_protocol(protocol)

        if not endpoints:
            raise NoRPCEndpointError(f"No RPC endpoint configured for network '{self.name}'")
        return endpoints[0].url

    def has_contract(self, contract_name: str) -> bool:
        """Check if a contract address is configured on this network."""
        return contract_name in self.contracts

    def contract(self, contract_name: str) -> Address:
        """
        Get the address of a deployed contract.

        Args:
            contract_name: Logical contract name, e.g. "StreamRegistry"

        Returns:
            Contract address

        Raises:
            ContractNotFoundError: If contract not configured on this network
        """
        try:
            return self.contracts[contract_name]
        except KeyError:
            raise ContractNotFoundError(
                f"Contract '{contract_name}' not found on network '{self.name}'"
            ) from None

    def explorer_address_url(self, address: Union[Address, str]) -> Optional[str]:
        """Block explorer page of an address, or None without an explorer."""
        if self.block_explorer_url:
            return f"{self.block_explorer_url.rstrip('/')}/address/{address}"
        return None

    def explorer_tx_url(self, tx_hash: str) -> Optional[str]:
        """Block explorer page of a transaction, or None without an explorer."""
        if self.block_explorer_url:
            return f"{self.block_explorer_url.rstrip('/')}/tx/{tx_hash}"
        return None
