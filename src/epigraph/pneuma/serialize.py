"""
Transaction serialization - transport encoding of unsigned transactions.

A specification is rendered as a JSON object, canonicalized with RFC 8785
(JCS) and base64url encoded. Integers that map to EVM integer types are
written as "#bigint.<n>" strings, the convention wallet clients built on
wagmi use for bigint values. Repeated encodes of the same specification
are byte-for-byte identical.

Decoding is ABI-driven: a string argument is only read back as an integer
where the function declares an integer type.
"""

from __future__ import annotations

import binascii
import json
import re
from dataclasses import dataclass
from typing import Any, Union

import rfc8785
from eth_abi import is_encodable_type
from eth_abi.exceptions import EncodingError

from ..errors import SerializationError
from ..utils import base64url_decode, base64url_encode
from .abi import find_function, input_types
from .tx import CallSpecification, TransferSpecification, build_call, build_transfer, encode_call

BIGINT_PREFIX = "#bigint."
_BIGINT_RE = re.compile(r"^#bigint\.(-?\d+)$")

Specification = Union[CallSpecification, TransferSpecification]


@dataclass(frozen=True)
class DecodedTransaction:
    spec: Specification
    chain_id: int


def _bigint(value: int) -> str:
    return f"{BIGINT_PREFIX}{value}"


def _parse_bigint(value: Any) -> int:
    if isinstance(value, str):
        match = _BIGINT_RE.match(value)
        if match:
            return int(match.group(1))
    raise SerializationError(f"Expected a {BIGINT_PREFIX}<n> value, got {value!r}")


def _is_integer_type(typ: str) -> bool:
    return typ.startswith("uint") or typ.startswith("int")


def _split_array(typ: str) -> tuple[str, bool]:
    if typ.endswith("]"):
        return typ[: typ.rindex("[")], True
    return typ, False


def _encode_value(typ: str, value: Any) -> Any:
    base, is_array = _split_array(typ)
    if is_array:
        return [_encode_value(base, item) for item in value]
    if typ.startswith("("):
        raise SerializationError(f"Tuple arguments are not supported: {typ}")
    if _is_integer_type(typ):
        return _bigint(value)
    if typ.startswith("bytes"):
        return "0x" + bytes(value).hex()
    return value


def _decode_value(typ: str, value: Any) -> Any:
    base, is_array = _split_array(typ)
    if is_array:
        if not isinstance(value, list):
            raise SerializationError(f"Expected a list for {typ}, got {value!r}")
        return [_decode_value(base, item) for item in value]
    if typ.startswith("("):
        raise SerializationError(f"Tuple arguments are not supported: {typ}")
    if _is_integer_type(typ):
        return _parse_bigint(value)
    if typ.startswith("bytes"):
        if not isinstance(value, str) or not value.startswith("0x"):
            raise SerializationError(f"Expected 0x-prefixed hex for {typ}, got {value!r}")
        try:
            return bytes.fromhex(value[2:])
        except ValueError as exc:
            raise SerializationError(f"Invalid hex for {typ}: {value!r}") from exc
    return value


def _check_abi(abi: list, function_name: str) -> list[str]:
    """Input types of function_name, or SerializationError if the ABI is malformed."""
    if not all(isinstance(entry, dict) for entry in abi):
        raise SerializationError("ABI entries must be JSON objects")
    try:
        func = find_function(abi, function_name)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc

    inputs = func.get("inputs", [])
    if not isinstance(inputs, list) or not all(isinstance(inp, dict) for inp in inputs):
        raise SerializationError(f"Inputs of {function_name} must be a list of objects")
    for position, inp in enumerate(inputs):
        typ = inp.get("type")
        if not isinstance(typ, str) or not is_encodable_type(typ):
            raise SerializationError(f"Input {position} of {function_name} has invalid type {typ!r}")
    return input_types(func)


def _call_payload(spec: CallSpecification, chain_id: int) -> dict[str, Any]:
    try:
        types = input_types(spec.function)
        data = spec.calldata
    except (EncodingError, ValueError) as exc:
        raise SerializationError(f"Cannot encode {spec.function_name} call: {exc}") from exc
    return {
        "kind": "call",
        "address": spec.target,
        "abi": spec.abi,
        "functionName": spec.function_name,
        "args": [_encode_value(typ, arg) for typ, arg in zip(types, spec.args)],
        "chainId": chain_id,
        "data": data,
    }


def _transfer_payload(spec: TransferSpecification) -> dict[str, Any]:
    return {
        "kind": "transfer",
        "to": spec.to,
        "value": _bigint(spec.value),
        "chainId": spec.chain_id,
    }


def serialize_transaction(spec: Specification, chain_id: int | None = None) -> str:
    """
    Encode a call or transfer specification for transport.

    Args:
        spec: CallSpecification or TransferSpecification
        chain_id: Target chain id (required for calls; transfers carry their own)

    Returns:
        base64url (unpadded) encoding of the RFC 8785 canonical JSON payload

    Raises:
        SerializationError: If any part of the specification cannot be encoded
    """
    if isinstance(spec, CallSpecification):
        if chain_id is None:
            raise SerializationError("chain_id is required to serialize a contract call")
        payload = _call_payload(spec, chain_id)
    elif isinstance(spec, TransferSpecification):
        payload = _transfer_payload(spec)
    else:
        raise SerializationError(f"Unsupported specification type: {type(spec).__name__}")

    try:
        canonical = rfc8785.dumps(payload)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot canonicalize transaction: {exc}") from exc

    return base64url_encode(canonical)


def deserialize_transaction(encoded: str) -> DecodedTransaction:
    """
    Decode a string produced by serialize_transaction.

    Contract calls are rebuilt through build_call, and the embedded calldata
    must match the calldata re-derived from the decoded arguments.

    Raises:
        SerializationError: If the input is not a valid encoded transaction
    """
    try:
        payload = json.loads(base64url_decode(encoded).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise SerializationError(f"Malformed serialized transaction: {exc}") from exc

    if not isinstance(payload, dict):
        raise SerializationError("Serialized transaction must be a JSON object")

    chain_id = payload.get("chainId")
    if isinstance(chain_id, bool) or not isinstance(chain_id, int):
        raise SerializationError(f"Invalid chainId: {chain_id!r}")

    kind = payload.get("kind")
    if kind == "transfer":
        spec = build_transfer(payload.get("to", ""), _parse_bigint(payload.get("value")), chain_id)
        return DecodedTransaction(spec=spec, chain_id=chain_id)

    if kind != "call":
        raise SerializationError(f"Unknown transaction kind: {kind!r}")

    abi = payload.get("abi")
    function_name = payload.get("functionName")
    raw_args = payload.get("args")
    if not isinstance(abi, list) or not isinstance(function_name, str) or not isinstance(raw_args, list):
        raise SerializationError("Contract call payload requires abi, functionName and args")

    types = _check_abi(abi, function_name)
    if len(types) != len(raw_args):
        raise SerializationError(
            f"{function_name} expects {len(types)} arguments, got {len(raw_args)}"
        )

    args = [_decode_value(typ, value) for typ, value in zip(types, raw_args)]
    spec = build_call(payload.get("address", ""), abi, function_name, args)

    try:
        expected = encode_call(abi, function_name, args)
    except (EncodingError, ValueError) as exc:
        raise SerializationError(f"Cannot encode {function_name} call: {exc}") from exc
    if payload.get("data") != expected:
        raise SerializationError("Calldata does not match the decoded call")

    return DecodedTransaction(spec=spec, chain_id=chain_id)
