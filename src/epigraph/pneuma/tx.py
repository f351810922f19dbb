"""
Transaction Builder - Build unsigned call and transfer specifications.

Uses eth-abi for calldata encoding. The specifications produced here are
handed to a wallet client to sign and broadcast; nothing here touches a
private key or an RPC endpoint.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from eth_abi import encode, is_encodable

from ..errors import SerializationError
from .abi import find_function, function_selector, input_types, keccak256

_ADDRESS_RE = re.compile(r"^(0x)?[0-9a-fA-F]{40}$")


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    Raises:
        ValueError: If the value is not a 20-byte hex address
    """
    if not isinstance(address, str) or not _ADDRESS_RE.match(address):
        raise ValueError(f"Invalid address: {address!r}")
    addr = address.lower().replace("0x", "")
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


@dataclass(frozen=True)
class CallSpecification:
    """
    A contract call ready for serialization.

    Attributes:
        target: Checksummed contract address
        abi: Contract interface the function is resolved against
        function_name: Function to call
        args: Function arguments, in declaration order
    """
    target: str
    abi: list[dict[str, Any]] = field(repr=False)
    function_name: str
    args: list[Any]

    @property
    def function(self) -> dict[str, Any]:
        return find_function(self.abi, self.function_name)

    @property
    def calldata(self) -> str:
        return encode_call(self.abi, self.function_name, self.args)


@dataclass(frozen=True)
class TransferSpecification:
    """A plain value transfer: recipient, value in wei, chain id."""
    to: str
    value: int
    chain_id: int


def encode_call(abi: list, function_name: str, args: list) -> str:
    """ABI-encode a function call to hex calldata."""
    func = find_function(abi, function_name)
    types = input_types(func)
    selector = function_selector(func)

    if args:
        encoded_args = encode(types, list(args))
    else:
        encoded_args = b""

    return "0x" + selector.hex() + encoded_args.hex()


def build_call(
    contract_address: str,
    abi: list[dict[str, Any]],
    function_name: str,
    args: list,
) -> CallSpecification:
    """
    Build a contract call specification.

    Args:
        contract_address: 0x-prefixed contract address
        abi: Contract ABI
        function_name: Function to call
        args: Function arguments

    Returns:
        CallSpecification with a checksummed target

    Raises:
        SerializationError: If the address is malformed, the function is
            missing, or the arguments do not match its declared inputs
    """
    try:
        target = to_checksum_address(contract_address)
        func = find_function(abi, function_name)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc

    types = input_types(func)
    if len(args) != len(types):
        raise SerializationError(
            f"{function_name} expects {len(types)} arguments, got {len(args)}"
        )
    for position, (typ, value) in enumerate(zip(types, args)):
        if not is_encodable(typ, value):
            raise SerializationError(
                f"Argument {position} of {function_name} is not encodable as {typ}: {value!r}"
            )

    return CallSpecification(
        target=target,
        abi=list(abi),
        function_name=function_name,
        args=list(args),
    )


def build_transfer(recipient: str, value: int, chain_id: int) -> TransferSpecification:
    """Build a plain value transfer specification."""
    try:
        to = to_checksum_address(recipient)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SerializationError(f"Transfer value must be a non-negative integer, got {value!r}")
    return TransferSpecification(to=to, value=value, chain_id=chain_id)
