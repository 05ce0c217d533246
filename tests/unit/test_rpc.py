"""Unit tests for RPC endpoint helpers."""

import pytest
import requests
import responses

from streamr_chains.exceptions import ChainIdMismatchError, NoRPCEndpointError
from streamr_chains.rpc import fetch_chain_id, resolve_rpc_url, rpc_url_env_var, verify_chain_id
from streamr_chains.types import Network, RPCEndpoint, RPCProtocol

RPC_URL = "https://polygon-rpc.com"


@pytest.fixture
def polygon() -> Network:
    return Network(
        name="polygon",
        chain_id=137,
        environment="production",
        rpc_endpoints=(
            RPCEndpoint(RPCProtocol.WEBSOCKET, "wss://polygon.example.org"),
            RPCEndpoint(RPCProtocol.HTTP, RPC_URL),
        ),
    )


class TestRpcUrlEnvVar:
    """Test the rpc_url_env_var function."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("polygon", "POLYGON_RPC_URL"),
            ("polygonAmoy", "POLYGON_AMOY_RPC_URL"),
            ("optGoerli", "OPT_GOERLI_RPC_URL"),
            ("dev0", "DEV0_RPC_URL"),
            ("my-chain", "MY_CHAIN_RPC_URL"),
        ],
    )
    def test_variable_names(self, name: str, expected: str):
        assert rpc_url_env_var(name) == expected

    def test_accepts_network(self, polygon: Network):
        assert rpc_url_env_var(polygon) == "POLYGON_RPC_URL"


class TestResolveRpcUrl:
    """Test the resolve_rpc_url function."""

    def test_explicit_url_wins(self, polygon: Network):
        environ = {"POLYGON_RPC_URL": "https://env.example.org"}
        assert resolve_rpc_url(polygon, "https://explicit.example.org", environ=environ) == (
            "https://explicit.example.org"
        )

    def test_environment_variable_wins_over_config(self, polygon: Network):
        environ = {"POLYGON_RPC_URL": "https://env.example.org"}
        assert resolve_rpc_url(polygon, environ=environ) == "https://env.example.org"

    def test_empty_environment_variable_ignored(self, polygon: Network):
        assert resolve_rpc_url(polygon, environ={"POLYGON_RPC_URL": ""}) == RPC_URL

    def test_first_configured_endpoint_of_protocol(self, polygon: Network):
        assert resolve_rpc_url(polygon, environ={}) == RPC_URL
        assert resolve_rpc_url(polygon, protocol=RPCProtocol.WEBSOCKET, environ={}) == (
            "wss://polygon.example.org"
        )

    def test_reads_os_environ_by_default(self, polygon: Network, monkeypatch):
        monkeypatch.setenv("POLYGON_RPC_URL", "https://os-env.example.org")
        assert resolve_rpc_url(polygon) == "https://os-env.example.org"

    def test_raises_when_nothing_configured(self):
        network = Network(name="ethereum", chain_id=1, environment="production")

        with pytest.raises(NoRPCEndpointError) as exc_info:
            resolve_rpc_url(network, environ={})

        assert "ETHEREUM_RPC_URL" in str(exc_info.value)


class TestFetchChainId:
    """Test the fetch_chain_id function."""

    @responses.activate
    def test_parses_hex_chain_id(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "result": "0x89"},
            status=200,
        )

        assert fetch_chain_id(RPC_URL) == 137

    @responses.activate
    def test_sends_eth_chain_id_request(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "result": "0x1"},
            status=200,
        )

        fetch_chain_id(RPC_URL)

        assert len(responses.calls) == 1
        body = responses.calls[0].request.body
        assert b'"method": "eth_chainId"' in body

    @responses.activate
    def test_http_error_raises_runtime_error(self):
        responses.add(responses.POST, RPC_URL, status=503)

        with pytest.raises(RuntimeError, match="503"):
            fetch_chain_id(RPC_URL)

    @responses.activate
    def test_rpc_error_raises_value_error(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "not found"}},
            status=200,
        )

        with pytest.raises(ValueError, match="RPC error"):
            fetch_chain_id(RPC_URL)

    @pytest.mark.parametrize(
        "body",
        [
            {"jsonrpc": "2.0", "id": 1},
            {"jsonrpc": "2.0", "id": 1, "result": None},
            {"jsonrpc": "2.0", "id": 1, "result": 137},
            {"jsonrpc": "2.0", "id": 1, "result": "not-hex"},
            ["0x89"],
        ],
    )
    @responses.activate
    def test_malformed_result_raises_value_error(self, body):
        """Test that a reply without a usable hex result is reported as malformed."""
        responses.add(responses.POST, RPC_URL, json=body, status=200)

        with pytest.raises(ValueError, match="Malformed eth_chainId response"):
            fetch_chain_id(RPC_URL)

    @responses.activate
    def test_connection_error_raises_runtime_error(self):
        responses.add(
            responses.POST,
            RPC_URL,
            body=requests.ConnectionError("connection refused"),
        )

        with pytest.raises(RuntimeError, match="Network error"):
            fetch_chain_id(RPC_URL)


class TestVerifyChainId:
    """Test the verify_chain_id function."""

    @responses.activate
    def test_matching_chain_id(self, polygon: Network):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "result": "0x89"},
            status=200,
        )

        assert verify_chain_id(polygon, environ={}) == 137

    @responses.activate
    def test_mismatching_chain_id(self, polygon: Network):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "result": "0x13882"},
            status=200,
        )

        with pytest.raises(ChainIdMismatchError) as exc_info:
            verify_chain_id(polygon, environ={})

        assert "80002" in str(exc_info.value)
        assert "137" in str(exc_info.value)

    @responses.activate
    def test_uses_explicit_rpc_url(self, polygon: Network):
        responses.add(
            responses.POST,
            "https://other.example.org",
            json={"jsonrpc": "2.0", "id": 1, "result": "0x89"},
            status=200,
        )

        assert verify_chain_id(polygon, "https://other.example.org") == 137
