"""
Theurgy Decipher - Decode a serialized transaction.

Lets a reviewer see exactly what a wallet will be asked to sign.
"""

from __future__ import annotations

import json
import sys
from typing import Any

import click

from ..errors import SerializationError
from ..pneuma.chains import chain_by_id
from ..pneuma.serialize import DecodedTransaction, deserialize_transaction
from ..pneuma.tx import CallSpecification


def _jsonable(value: Any) -> Any:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def _summary(decoded: DecodedTransaction) -> dict[str, Any]:
    try:
        chain_name = chain_by_id(decoded.chain_id).name
    except ValueError:
        chain_name = None

    spec = decoded.spec
    if isinstance(spec, CallSpecification):
        return {
            "kind": "call",
            "address": spec.target,
            "functionName": spec.function_name,
            "args": _jsonable(spec.args),
            "chainId": decoded.chain_id,
            "chainName": chain_name,
            "data": spec.calldata,
        }
    return {
        "kind": "transfer",
        "to": spec.to,
        "value": spec.value,
        "chainId": decoded.chain_id,
        "chainName": chain_name,
    }


@click.command()
@click.argument("encoded")
def decipher(encoded: str) -> None:
    """Decode ENCODED (a serializedTransaction) and print it as JSON."""
    try:
        decoded = deserialize_transaction(encoded.strip())
    except SerializationError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    click.echo(json.dumps(_summary(decoded), indent=2))
