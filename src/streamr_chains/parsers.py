"""Configuration document parsers for streamr-chains library."""

from collections import abc
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from .constants import LEGACY_TO_CANONICAL, SCHEME_TO_PROTOCOL
from .exceptions import ConfigParseError
from .types import Address, EntryPoint, NativeCurrency, Network, RPCEndpoint, RPCProtocol


def normalize_field_names(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert legacy field names of a network entry to canonical form.

    Args:
        data: Network entry as found in the document

    Returns:
        Copy of the entry with legacy keys renamed
        (a canonical key wins when both are present)
    """
    result: Dict[str, Any] = {}
    for key, value in data.items():
        canonical = LEGACY_TO_CANONICAL.get(key, key)
        if canonical != key and canonical in data:
            continue
        result[canonical] = value
    return result


def _require(data: Mapping[str, Any], key: str, expected: type, network: str) -> Any:
    if key not in data:
        raise ConfigParseError(f"Network '{network}' is missing required field '{key}'")
    value = data[key]
    if isinstance(value, bool) and expected is not bool:
        value_ok = False
    else:
        value_ok = isinstance(value, expected)
    if not value_ok:
        raise ConfigParseError(
            f"Field '{key}' of network '{network}' must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _optional_str(data: Mapping[str, Any], key: str, network: str) -> Optional[str]:
    if data.get(key) is None:
        return None
    return _require(data, key, str, network)


def detect_protocol(url: str) -> RPCProtocol:
    """
    Infer the protocol of an RPC endpoint from its URL scheme.

    Args:
        url: Endpoint URL, e.g. "wss://rpc.gnosischain.com/wss"

    Returns:
        RPCProtocol.HTTP for http(s), RPCProtocol.WEBSOCKET for ws(s)

    Raises:
        ConfigParseError: If the scheme is not recognized
    """
    scheme = urlparse(url).scheme.lower()
    if scheme not in SCHEME_TO_PROTOCOL:
        raise ConfigParseError(f"Cannot infer RPC protocol from URL '{url}'")
    return RPCProtocol(SCHEME_TO_PROTOCOL[scheme])


def parse_rpc_endpoint(data: Any, network: str) -> RPCEndpoint:
    """
    Parse one entry of a network's rpcEndpoints list.

    The "protocol" tag is optional; when missing it is inferred from the URL.
    """
    if not isinstance(data, abc.Mapping):
        raise ConfigParseError(f"RPC endpoint of network '{network}' must be an object")

    url = _require(data, "url", str, network)
    if data.get("protocol") is None:
        return RPCEndpoint(protocol=detect_protocol(url), url=url)

    try:
        protocol = RPCProtocol(data["protocol"])
    except ValueError:
        raise ConfigParseError(
            f"Unknown RPC protocol {data['protocol']!r} for network '{network}', "
            "expected 'http' or 'websocket'"
        ) from None
    return RPCEndpoint(protocol=protocol, url=url)


def parse_contracts(data: Any, network: str) -> Dict[str, Address]:
    """
    Parse a network's contracts object.

    Raises:
        ConfigParseError: If contracts is not an object of strings
        InvalidAddressFormatError: If any address is malformed
    """
    if not isinstance(data, abc.Mapping):
        raise ConfigParseError(f"Field 'contracts' of network '{network}' must be an object")

    result: Dict[str, Address] = {}
    for contract_name, raw_address in data.items():
        if not isinstance(raw_address, str):
            raise ConfigParseError(
                f"Address of contract '{contract_name}' on network '{network}' "
                "must be a string"
            )
        result[contract_name] = Address(raw_address)
    return result


def parse_native_currency(data: Any, network: str) -> NativeCurrency:
    """Parse a network's nativeCurrency object."""
    if not isinstance(data, abc.Mapping):
        raise ConfigParseError(f"Field 'nativeCurrency' of network '{network}' must be an object")
    return NativeCurrency(
        symbol=_require(data, "symbol", str, network),
        name=_require(data, "name", str, network),
        decimals=_require(data, "decimals", int, network) if "decimals" in data else 18,
    )


def parse_entry_point(data: Any, network: str) -> EntryPoint:
    """Parse one entry of a network's entryPoints list."""
    if not isinstance(data, abc.Mapping):
        raise ConfigParseError(f"Entry point of network '{network}' must be an object")

    websocket = _require(data, "websocket", abc.Mapping, network)
    return EntryPoint(
        node_id=_require(data, "nodeId", str, network),
        host=_require(websocket, "host", str, network),
        port=_require(websocket, "port", int, network),
        tls=_require(websocket, "tls", bool, network) if "tls" in websocket else True,
    )


def parse_network(name: str, data: Any) -> Network:
    """
    Parse one network entry of a configuration document.

    Args:
        name: Network name (document key)
        data: Network entry

    Returns:
        Validated Network

    Raises:
        ConfigParseError: If required fields are missing or have wrong types
        InvalidAddressFormatError: If a contract address is malformed
        InvalidChainIdError: If chainId is not positive
        InvalidChainNameError: If name is empty
    """
    if not isinstance(data, abc.Mapping):
        raise ConfigParseError(f"Network '{name}' must be an object")
    data = normalize_field_names(data)

    chain_id = _require(data, "chainId", int, name)
    environment = _require(data, "environment", str, name)
    contracts = parse_contracts(data.get("contracts", {}), name)

    raw_endpoints = _require(data, "rpcEndpoints", list, name) if "rpcEndpoints" in data else []
    rpc_endpoints = [parse_rpc_endpoint(e, name) for e in raw_endpoints]

    native_currency = None
    if data.get("nativeCurrency") is not None:
        native_currency = parse_native_currency(data["nativeCurrency"], name)

    entry_points: List[EntryPoint] = []
    if data.get("entryPoints") is not None:
        raw_entry_points = _require(data, "entryPoints", list, name)
        entry_points = [parse_entry_point(e, name) for e in raw_entry_points]

    return Network(
        name=name,
        chain_id=chain_id,
        environment=environment,
        contracts=contracts,
        rpc_endpoints=tuple(rpc_endpoints),
        display_name=_optional_str(data, "name", name),
        native_currency=native_currency,
        block_explorer_url=_optional_str(data, "blockExplorerUrl", name),
        the_graph_url=_optional_str(data, "theGraphUrl", name),
        entry_points=tuple(entry_points),
    )


def parse_document(document: Any) -> Dict[str, Network]:
    """
    Parse a whole configuration document.

    Every entry is validated before anything is returned, so a document with
    a single bad entry yields no networks at all.

    Args:
        document: Mapping of network name -> network entry

    Returns:
        Dictionary mapping network names to Networks

    Raises:
        ConfigParseError: If the document is not an object or an entry is malformed
    """
    if not isinstance(document, abc.Mapping):
        raise ConfigParseError(
            f"Configuration document must be an object, got {type(document).__name__}"
        )

    return {name: parse_network(name, data) for name, data in document.items()}
