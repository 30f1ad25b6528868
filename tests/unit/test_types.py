"""Unit tests for connection, declaration and profile models."""

import pytest
from pydantic import ValidationError as PydanticValidationError
from eth_utils import to_checksum_address

from deploy_profiles.core.types import (
    StaticConnection,
    DynamicConnection,
    NetworkDeclaration,
    NetworkProfile,
)
from deploy_profiles.connection import DEFAULT_TIMEOUT, HttpConnection
from deploy_profiles.providers.wallet import HDWalletProvider

from tests import TEST_ADDRESSES, TEST_MNEMONIC, TEST_MNEMONIC_ADDRESS


@pytest.fixture
def static_connection():
    return StaticConnection(host="127.0.0.1", port=8545)


@pytest.fixture
def dynamic_connection():
    return DynamicConnection(provider_id="hdwallet", url="https://rinkeby.example/rpc")


@pytest.fixture
def hd_provider():
    return HDWalletProvider(TEST_MNEMONIC, "https://rinkeby.example/rpc")


class TestConnections:
    """Test the connection variants."""

    def test_static_endpoint_url(self, static_connection):
        assert static_connection.kind == 'static'
        assert static_connection.endpoint_url == "http://127.0.0.1:8545"

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_static_port_out_of_range(self, port):
        with pytest.raises(PydanticValidationError):
            StaticConnection(host="127.0.0.1", port=port)

    def test_static_empty_host(self):
        with pytest.raises(PydanticValidationError):
            StaticConnection(host="  ", port=8545)

    def test_dynamic_endpoint_url(self, dynamic_connection):
        assert dynamic_connection.kind == 'dynamic'
        assert dynamic_connection.endpoint_url == "https://rinkeby.example/rpc"

    def test_dynamic_rejects_non_url(self):
        with pytest.raises(PydanticValidationError):
            DynamicConnection(provider_id="hdwallet", url="rinkeby.example")


class TestNetworkDeclaration:
    """Test declaration layering."""

    def test_explicit_fields_only(self):
        declaration = NetworkDeclaration(chain_id=3, gas_price=1)
        assert declaration.explicit_fields() == {'chain_id': 3, 'gas_price': 1}

    def test_rejects_unknown_keys(self):
        with pytest.raises(PydanticValidationError):
            NetworkDeclaration(network_id=3)

    def test_override_wins(self):
        base = NetworkDeclaration(host="127.0.0.1", port=8545, gas_price=60)
        merged = base.merged_with(NetworkDeclaration(gas_price=20))

        assert merged.host == "127.0.0.1"
        assert merged.port == 8545
        assert merged.gas_price == 20

    def test_dynamic_layer_drops_inherited_static_fields(self):
        base = NetworkDeclaration(host="127.0.0.1", port=8545, from_address=TEST_ADDRESSES['sender'])
        merged = base.merged_with(NetworkDeclaration(provider="hdwallet", url="https://x.example"))

        assert merged.host is None
        assert merged.port is None
        assert merged.from_address is None
        assert merged.is_dynamic

    def test_static_layer_drops_inherited_provider(self):
        base = NetworkDeclaration(provider="hdwallet", url="https://x.example", secret_env="SEED")
        merged = base.merged_with(NetworkDeclaration(host="10.0.0.1", port=8546))

        assert merged.provider is None
        assert merged.url is None
        assert merged.secret_env is None
        assert not merged.is_dynamic

    def test_merge_does_not_carry_extends(self):
        merged = NetworkDeclaration().merged_with(NetworkDeclaration(extends="ropsten", chain_id=3))
        assert merged.extends is None
        assert merged.chain_id == 3


class TestNetworkProfile:
    """Test NetworkProfile validation."""

    def test_static_profile(self, static_connection):
        profile = NetworkProfile(
            name="ropsten",
            connection=static_connection,
            chain_id=3,
            gas_limit=4700036,
            gas_price=60000000000,
            from_address=TEST_ADDRESSES['sender']
        )

        assert profile.endpoint_url == "http://127.0.0.1:8545"
        assert not profile.is_dynamic
        assert profile.from_address == to_checksum_address(TEST_ADDRESSES['sender'])
        assert profile.sender == profile.from_address

    def test_profile_is_frozen(self, static_connection):
        profile = NetworkProfile(
            name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0
        )
        with pytest.raises((TypeError, PydanticValidationError)):
            profile.gas_price = 5

    def test_connection_from_plain_data(self):
        profile = NetworkProfile(
            name="dev",
            connection={'kind': 'static', 'host': 'localhost', 'port': 7545},
            chain_id=5777,
            gas_limit=6721975,
            gas_price=0
        )
        assert isinstance(profile.connection, StaticConnection)

    @pytest.mark.parametrize("field,value", [
        ('chain_id', 0),
        ('gas_limit', 0),
        ('gas_limit', -1),
        ('gas_price', -1),
    ])
    def test_numeric_ranges(self, static_connection, field, value):
        fields = dict(name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0)
        fields[field] = value

        with pytest.raises(PydanticValidationError) as exc_info:
            NetworkProfile(**fields)

        assert exc_info.value.errors()[0]['loc'][0] == field

    def test_zero_gas_price_allowed(self, static_connection):
        profile = NetworkProfile(
            name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0
        )
        assert profile.gas_price == 0

    def test_invalid_from_address(self, static_connection):
        with pytest.raises(PydanticValidationError):
            NetworkProfile(
                name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0,
                from_address=TEST_ADDRESSES['invalid']
            )

    def test_dynamic_requires_provider(self, dynamic_connection):
        with pytest.raises(PydanticValidationError):
            NetworkProfile(
                name="rinkeby", connection=dynamic_connection, chain_id=4, gas_limit=1, gas_price=0
            )

    def test_static_rejects_provider(self, static_connection, hd_provider):
        with pytest.raises(PydanticValidationError):
            NetworkProfile(
                name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0,
                provider=hd_provider
            )

    def test_sender_and_provider_are_exclusive(self, dynamic_connection, hd_provider):
        with pytest.raises(PydanticValidationError):
            NetworkProfile(
                name="rinkeby", connection=dynamic_connection, chain_id=4, gas_limit=1, gas_price=0,
                from_address=TEST_ADDRESSES['sender'], provider=hd_provider
            )

    def test_dynamic_sender_comes_from_provider(self, dynamic_connection, hd_provider):
        profile = NetworkProfile(
            name="rinkeby", connection=dynamic_connection, chain_id=4, gas_limit=7484176,
            gas_price=9000000000, provider=hd_provider
        )

        assert profile.is_dynamic
        assert profile.from_address is None
        assert profile.sender == TEST_MNEMONIC_ADDRESS

    def test_repr_hides_provider(self, dynamic_connection, hd_provider):
        profile = NetworkProfile(
            name="rinkeby", connection=dynamic_connection, chain_id=4, gas_limit=1, gas_price=0,
            provider=hd_provider
        )
        assert TEST_MNEMONIC not in repr(profile)
        assert 'provider=' not in repr(profile)

    def test_connect_static(self, static_connection):
        profile = NetworkProfile(
            name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0
        )
        connection = profile.connect(timeout=5.0)

        assert connection == HttpConnection("http://127.0.0.1:8545", timeout=5.0)
        assert connection.session is None

    def test_connect_dynamic_uses_provider(self, dynamic_connection, hd_provider):
        profile = NetworkProfile(
            name="rinkeby", connection=dynamic_connection, chain_id=4, gas_limit=1, gas_price=0,
            provider=hd_provider
        )
        assert profile.connect().endpoint_url == "https://rinkeby.example/rpc"

    def test_connect_static_default_timeout(self, static_connection):
        profile = NetworkProfile(
            name="dev", connection=static_connection, chain_id=1, gas_limit=1, gas_price=0
        )
        assert profile.connect().timeout == DEFAULT_TIMEOUT

    def test_connect_dynamic_timeout(self, dynamic_connection):
        provider = HDWalletProvider(TEST_MNEMONIC, "https://rinkeby.example/rpc", request_timeout=12.0)
        profile = NetworkProfile(
            name="rinkeby", connection=dynamic_connection, chain_id=4, gas_limit=1, gas_price=0,
            provider=provider
        )

        assert profile.connect().timeout == 12.0
        assert profile.connect(timeout=2.0).timeout == 2.0
