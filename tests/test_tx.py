"""Tests for call/transfer specification building and calldata encoding."""

from __future__ import annotations

import pytest
from eth_abi import decode
from eth_hash.auto import keccak

from epigraph.errors import SerializationError
from epigraph.pneuma.abi import find_function, function_signature, load_abi
from epigraph.pneuma.tx import (
    CallSpecification,
    build_call,
    build_transfer,
    encode_call,
    to_checksum_address,
)

CONTRACT = "0x5ee75a1B1648C023e885E58bD3735Ae273f2cc52"


class TestChecksumAddress:
    def test_known_vector(self) -> None:
        # EIP-55 reference vector
        lower = "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed"
        assert to_checksum_address(lower) == "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

    def test_idempotent(self) -> None:
        assert to_checksum_address(CONTRACT) == to_checksum_address(CONTRACT.lower())

    def test_accepts_missing_prefix(self) -> None:
        assert to_checksum_address(CONTRACT[2:].lower()) == to_checksum_address(CONTRACT)

    @pytest.mark.parametrize("value", ["0xYourContractAddressHere", "0x1234", "", "0x" + "g" * 40])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(ValueError):
            to_checksum_address(value)


class TestAbi:
    def test_store_message_signature(self, abi: list[dict]) -> None:
        assert function_signature(find_function(abi, "storeMessage")) == "storeMessage(string,uint256)"

    def test_missing_function(self, abi: list[dict]) -> None:
        with pytest.raises(ValueError, match="not found"):
            find_function(abi, "burn")

    def test_missing_artifact(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_abi("Nope", tmp_path)

    def test_custom_search_dir(self, tmp_path) -> None:
        (tmp_path / "Echo.json").write_text(
            '{"abi": [{"type": "function", "name": "echo", "inputs": []}]}',
            encoding="utf-8",
        )
        assert load_abi("Echo", tmp_path)[0]["name"] == "echo"


class TestEncodeCall:
    def test_selector_and_arguments(self, abi: list[dict]) -> None:
        calldata = encode_call(abi, "storeMessage", ["hi", 1_700_000_314])
        raw = bytes.fromhex(calldata[2:])

        assert raw[:4] == keccak(b"storeMessage(string,uint256)")[:4]
        assert decode(["string", "uint256"], raw[4:]) == ("hi", 1_700_000_314)

    def test_no_arguments(self, abi: list[dict]) -> None:
        calldata = encode_call(abi, "getMessageCount", [])
        assert calldata == "0x" + keccak(b"getMessageCount()")[:4].hex()


class TestBuildCall:
    def test_builds_specification(self, abi: list[dict]) -> None:
        spec = build_call(CONTRACT.lower(), abi, "storeMessage", ["hi", 5])

        assert isinstance(spec, CallSpecification)
        assert spec.target == to_checksum_address(CONTRACT)
        assert spec.function_name == "storeMessage"
        assert spec.args == ["hi", 5]
        assert spec.calldata == encode_call(abi, "storeMessage", ["hi", 5])

    def test_arity_mismatch(self, abi: list[dict]) -> None:
        with pytest.raises(SerializationError, match="expects 2 arguments"):
            build_call(CONTRACT, abi, "storeMessage", ["hi"])

    def test_type_mismatch(self, abi: list[dict]) -> None:
        with pytest.raises(SerializationError, match="not encodable as uint256"):
            build_call(CONTRACT, abi, "storeMessage", ["hi", "soon"])

    def test_negative_timestamp(self, abi: list[dict]) -> None:
        with pytest.raises(SerializationError):
            build_call(CONTRACT, abi, "storeMessage", ["hi", -1])

    def test_unknown_function(self, abi: list[dict]) -> None:
        with pytest.raises(SerializationError, match="not found"):
            build_call(CONTRACT, abi, "burn", [])

    def test_bad_address(self, abi: list[dict]) -> None:
        with pytest.raises(SerializationError, match="Invalid address"):
            build_call("0xYourContractAddressHere", abi, "storeMessage", ["hi", 5])


class TestBuildTransfer:
    def test_builds_transfer(self) -> None:
        spec = build_transfer(CONTRACT.lower(), 1_000_000, 43113)
        assert spec.to == to_checksum_address(CONTRACT)
        assert spec.value == 1_000_000
        assert spec.chain_id == 43113

    @pytest.mark.parametrize("value", [-1, True, 1.5])
    def test_rejects_bad_value(self, value) -> None:
        with pytest.raises(SerializationError):
            build_transfer(CONTRACT, value, 43113)
