"""Unit tests for the Address value type."""

import pytest

from streamr_chains.exceptions import InvalidAddressFormatError
from streamr_chains.types import Address


class TestAddressConstruction:
    """Test Address validation."""

    @pytest.mark.parametrize(
        "raw",
        [
            "0xbAA81A0179015bE47Ad439566374F2Bae098686F",
            "0xc7aaf6c62e86a36395d8108fe95d5f758794c16c",
            "0x0000000000000000000000000000000000000000",
            "0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF",
        ],
    )
    def test_valid_address_round_trips_to_string(self, raw: str):
        """Test that str() returns the exact input."""
        assert str(Address(raw)) == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "0x",
            "0xbAA81A0179015bE47Ad439566374F2Bae098686",  # 41 chars
            "0xbAA81A0179015bE47Ad439566374F2Bae098686FF",  # 43 chars
            "bAA81A0179015bE47Ad439566374F2Bae098686F",
        ],
    )
    def test_wrong_length_rejected(self, raw: str):
        """Test that strings of length other than 42 are rejected."""
        assert len(raw) != 42
        with pytest.raises(InvalidAddressFormatError):
            Address(raw)

    def test_non_hex_digits_rejected(self):
        """Test that a 42-character string with non-hex digits is rejected."""
        raw = "0xZZA81A0179015bE47Ad439566374F2Bae098686F"
        assert len(raw) == 42
        with pytest.raises(InvalidAddressFormatError):
            Address(raw)

    def test_missing_prefix_rejected(self):
        """Test that 42 hex characters without 0x are rejected."""
        raw = "00bAA81A0179015bE47Ad439566374F2Bae098686F"
        assert len(raw) == 42
        with pytest.raises(InvalidAddressFormatError):
            Address(raw)

    def test_non_string_rejected(self):
        """Test that non-string input is rejected."""
        with pytest.raises(InvalidAddressFormatError):
            Address(12345)  # type: ignore[arg-type]

    def test_error_catchable_as_value_error(self):
        """Test that InvalidAddressFormatError is a ValueError."""
        with pytest.raises(ValueError):
            Address("0x1234")


class TestAddressEquality:
    """Test value semantics of Address."""

    def test_equal_values_are_equal(self, valid_address: str):
        """Test that equality is value-based."""
        assert Address(valid_address) == Address(valid_address)
        assert Address(valid_address) is not Address(valid_address)

    def test_hashable(self, valid_address: str):
        """Test that addresses can be used as dict keys and set members."""
        assert len({Address(valid_address), Address(valid_address)}) == 1

    def test_case_matters_for_equality(self, valid_address: str):
        """Test that checksum casing is part of the value."""
        assert Address(valid_address) != Address(valid_address.lower())

    def test_same_as_ignores_case(self, valid_address: str):
        """Test case-insensitive comparison."""
        address = Address(valid_address)
        assert address.same_as(valid_address.lower())
        assert address.same_as(Address(valid_address.upper().replace("0X", "0x")))
        assert not address.same_as("0x0000000000000000000000000000000000000000")

    def test_lower(self, valid_address: str):
        """Test lowercase normalization."""
        assert str(Address(valid_address).lower()) == valid_address.lower()

    def test_immutable(self, valid_address: str):
        """Test that the value cannot be reassigned."""
        address = Address(valid_address)
        with pytest.raises(AttributeError):
            address.value = "0x0000000000000000000000000000000000000000"  # type: ignore[misc]
